# prompt_driver/data/database.py
import logging
from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from prompt_driver.core.config import settings

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> str:
    """Rewrite a plain driver URL to the async driver SQLAlchemy needs."""
    if database_url.startswith("postgresql://"):
        adapted = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("postgres://"):
        adapted = database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("sqlite://"):
        adapted = database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    else:
        return database_url
    logger.warning(f"Adapted database URL to: {adapted}. Please update your configuration.")
    return adapted


def build_engine(database_url: str, echo: bool = False):
    async_database_url = to_async_url(database_url)

    if async_database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in async_database_url:
            kwargs["poolclass"] = StaticPool
        new_engine = create_async_engine(async_database_url, echo=echo, **kwargs)

        # SQLite leaves foreign keys off unless asked, and the cascades rely on them
        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return new_engine

    return create_async_engine(async_database_url, echo=echo, pool_pre_ping=True)


def build_sessionmaker(bind):
    return sessionmaker(
        autocommit=False, autoflush=False, bind=bind, class_=AsyncSession, expire_on_commit=False
    )


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

AsyncSessionLocal = build_sessionmaker(engine)

Base = declarative_base()


async def get_db():
    db = AsyncSessionLocal()
    try:
        yield db
    finally:
        await db.close()


async def init_db():
    """Create any missing tables. Alembic owns real schema changes."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")
