# prompt_driver/services/database/follow_database_services.py
from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.user_follow import UserFollow
from prompt_driver.services.database.database_services import paginate


async def get_follow(db: AsyncSession, follower_id: int, following_id: int) -> Optional[UserFollow]:
    result = await db.execute(
        select(UserFollow).filter(UserFollow.follower_id == follower_id, UserFollow.following_id == following_id)
    )
    return result.scalars().first()


async def create_follow(db: AsyncSession, follower_id: int, following_id: int) -> UserFollow:
    follow = UserFollow(follower_id=follower_id, following_id=following_id)
    db.add(follow)
    await db.flush()
    return follow


async def list_followers(db: AsyncSession, user_id: int, offset: int, limit: int) -> Tuple[List[UserFollow], int]:
    query = (
        select(UserFollow)
        .where(UserFollow.following_id == user_id)
        .order_by(desc(UserFollow.created_at), desc(UserFollow.id))
    )
    return await paginate(db, query, offset, limit)


async def list_following(db: AsyncSession, user_id: int, offset: int, limit: int) -> Tuple[List[UserFollow], int]:
    query = (
        select(UserFollow)
        .where(UserFollow.follower_id == user_id)
        .order_by(desc(UserFollow.created_at), desc(UserFollow.id))
    )
    return await paginate(db, query, offset, limit)


async def followed_among(db: AsyncSession, follower_id: int, user_ids: Iterable[int]) -> Set[int]:
    """Which of `user_ids` the given follower already follows."""
    user_ids = list(user_ids)
    if not user_ids:
        return set()
    result = await db.execute(
        select(UserFollow.following_id).where(
            UserFollow.follower_id == follower_id, UserFollow.following_id.in_(user_ids)
        )
    )
    return set(result.scalars().all())


async def get_follower_ids(db: AsyncSession, user_id: int) -> List[int]:
    result = await db.execute(select(UserFollow.follower_id).where(UserFollow.following_id == user_id))
    return list(result.scalars().all())


async def feed_prompts(db: AsyncSession, user_id: int, offset: int, limit: int) -> Tuple[List[Prompt], int]:
    followed = select(UserFollow.following_id).where(UserFollow.follower_id == user_id)
    query = (
        select(Prompt)
        .where(Prompt.author_id.in_(followed), Prompt.is_public.is_(True))
        .order_by(desc(Prompt.created_at), desc(Prompt.id))
    )
    return await paginate(db, query, offset, limit)
