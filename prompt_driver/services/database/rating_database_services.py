# prompt_driver/services/database/rating_database_services.py
from typing import Dict, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.prompt_rating import MAX_RATING, MIN_RATING, PromptRating
from prompt_driver.services.database.database_services import paginate


async def get_rating(db: AsyncSession, user_id: int, prompt_id: int) -> Optional[PromptRating]:
    result = await db.execute(
        select(PromptRating).filter(PromptRating.user_id == user_id, PromptRating.prompt_id == prompt_id)
    )
    return result.scalars().first()


async def get_rating_aggregate(db: AsyncSession, prompt_id: int) -> Tuple[Optional[float], int]:
    """Average and count of a prompt's ratings as the database sees them right now."""
    result = await db.execute(
        select(func.avg(PromptRating.rating), func.count(PromptRating.id)).where(
            PromptRating.prompt_id == prompt_id
        )
    )
    average, count = result.one()
    if not count:
        return None, 0
    return float(average), int(count)


async def get_rating_distribution(db: AsyncSession, prompt_id: int) -> Dict[int, int]:
    result = await db.execute(
        select(PromptRating.rating, func.count(PromptRating.id))
        .where(PromptRating.prompt_id == prompt_id)
        .group_by(PromptRating.rating)
    )
    distribution = {star: 0 for star in range(MIN_RATING, MAX_RATING + 1)}
    for star, count in result.all():
        distribution[int(star)] = int(count)
    return distribution


async def list_prompt_ratings(
    db: AsyncSession, prompt_id: int, offset: int, limit: int, with_comments: bool = False
) -> Tuple[List[PromptRating], int]:
    query = select(PromptRating).where(PromptRating.prompt_id == prompt_id)
    if with_comments:
        query = query.where(PromptRating.comment.is_not(None), PromptRating.comment != "")
    query = query.order_by(desc(PromptRating.created_at), desc(PromptRating.id))
    return await paginate(db, query, offset, limit)


async def list_user_ratings(
    db: AsyncSession, user_id: int, offset: int, limit: int, include_private: bool = False
) -> Tuple[List[PromptRating], int]:
    query = select(PromptRating).join(Prompt, Prompt.id == PromptRating.prompt_id).where(PromptRating.user_id == user_id)
    if not include_private:
        query = query.where(Prompt.is_public.is_(True))
    query = query.order_by(desc(PromptRating.created_at), desc(PromptRating.id))
    return await paginate(db, query, offset, limit)
