# prompt_driver/services/database/user_database_services.py
from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.models.database_models.user import User, UserRole


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).filter(User.id == user_id))
    return result.scalars().first()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).filter(User.email == email))
    return result.scalars().first()


async def email_exists(db: AsyncSession, email: str) -> bool:
    result = await db.execute(select(exists().where(User.email == email)))
    return bool(result.scalar())


async def nickname_exists(db: AsyncSession, nickname: str, exclude_user_id: Optional[int] = None) -> bool:
    condition = User.nickname == nickname
    if exclude_user_id is not None:
        condition = condition & (User.id != exclude_user_id)
    result = await db.execute(select(exists().where(condition)))
    return bool(result.scalar())


async def create_user(
    db: AsyncSession, email: str, nickname: str, hashed_password: bytes, role: UserRole = UserRole.USER
) -> User:
    db_user = User(email=email, nickname=nickname, hashed_password=hashed_password, role=role)
    db.add(db_user)
    await db.flush()
    return db_user


async def adjust_follow_counts(db: AsyncSession, follower_id: int, following_id: int, delta: int) -> None:
    """Atomically shift following_count on the follower and follower_count on the followed user."""
    users = User.__table__
    await db.execute(
        users.update()
        .where(users.c.id == follower_id)
        .values(following_count=users.c.following_count + delta)
    )
    await db.execute(
        users.update()
        .where(users.c.id == following_id)
        .values(follower_count=users.c.follower_count + delta)
    )
