import os

# Settings are read at import time, so the environment has to be ready first
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient

from prompt_driver.data.database import Base, build_engine, build_sessionmaker, get_db
from prompt_driver.main import app
from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.services.database import user_database_services

VALID_PROMPT = {
    "title": "Code review helper",
    "description": "Reviews a diff and points out bugs",
    "content": "You are a meticulous reviewer. Read the following diff and list every bug you find.",
    "category": "coding",
    "tags": ["review", "python"],
}


@pytest.fixture
async def engine():
    test_engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Insert a user straight into the database; the password hash is a placeholder."""

    async def _make_user(nickname: str):
        user = await user_database_services.create_user(
            db_session, email=f"{nickname}@example.com", nickname=nickname, hashed_password=b"unused"
        )
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_prompt(db_session):
    async def _make_prompt(author, title: str = "A useful prompt", is_public: bool = True, category: str = "coding"):
        prompt = Prompt(
            title=title,
            description="A description long enough",
            content="Some prompt content that is long enough to pass validation.",
            category=category,
            tags=["testing"],
            author=author,
            is_public=is_public,
            view_count=0,
            like_count=0,
            bookmark_count=0,
            average_rating=None,
            rating_count=0,
        )
        db_session.add(prompt)
        await db_session.commit()
        return prompt

    return _make_prompt


async def register_and_login(client: AsyncClient, nickname: str, password: str = "secret123") -> dict:
    """Register a user through the API and return auth headers plus the user id."""
    email = f"{nickname}@example.com"
    response = await client.post(
        "/api/auth/register", json={"email": email, "password": password, "nickname": nickname}
    )
    assert response.status_code == 201, response.text
    user_id = response.json()["id"]

    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    tokens = response.json()
    return {
        "id": user_id,
        "headers": {"Authorization": f"Bearer {tokens['accessToken']}"},
        "refresh_token": tokens["refreshToken"],
    }
