# prompt_driver/services/database/refresh_token_database_services.py
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.models.database_models.refresh_token import RefreshToken


async def create_refresh_token(db: AsyncSession, user_id: int, token: str, expires_at: datetime) -> RefreshToken:
    db_token = RefreshToken(user_id=user_id, token=token, expires_at=expires_at)
    db.add(db_token)
    await db.flush()
    return db_token


async def get_refresh_token(db: AsyncSession, token: str) -> Optional[RefreshToken]:
    result = await db.execute(select(RefreshToken).filter(RefreshToken.token == token))
    return result.scalars().first()


async def delete_refresh_token(db: AsyncSession, db_token: RefreshToken) -> None:
    await db.delete(db_token)
    await db.flush()


async def delete_user_refresh_tokens(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
    return result.rowcount


async def prune_user_refresh_tokens(db: AsyncSession, user_id: int, keep: int) -> int:
    """Delete all but the `keep` newest refresh tokens of a user."""
    newest = (
        select(RefreshToken.id)
        .where(RefreshToken.user_id == user_id)
        .order_by(RefreshToken.created_at.desc(), RefreshToken.id.desc())
        .limit(keep)
    )
    result = await db.execute(newest)
    keep_ids = list(result.scalars().all())
    query = delete(RefreshToken).where(RefreshToken.user_id == user_id)
    if keep_ids:
        query = query.where(RefreshToken.id.not_in(keep_ids))
    result = await db.execute(query.execution_options(synchronize_session=False))
    return result.rowcount
