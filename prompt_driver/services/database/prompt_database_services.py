# prompt_driver/services/database/prompt_database_services.py
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import asc, desc, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.prompt_bookmark import PromptBookmark
from prompt_driver.models.database_models.prompt_like import PromptLike
from prompt_driver.models.database_models.prompt_rating import PromptRating
from prompt_driver.services.database.database_services import LIKE_ESCAPE, contains_pattern, paginate

SORTABLE_FIELDS = {
    "createdAt": Prompt.created_at,
    "updatedAt": Prompt.updated_at,
    "title": Prompt.title,
    "viewCount": Prompt.view_count,
    "likeCount": Prompt.like_count,
    "bookmarkCount": Prompt.bookmark_count,
    "averageRating": Prompt.average_rating,
    "ratingCount": Prompt.rating_count,
}


def parse_sort(sort: Optional[str]):
    """Turn "field,dir" into an ORDER BY clause; unknown fields fall back to createdAt."""
    field, _, direction = (sort or "createdAt,desc").partition(",")
    column = SORTABLE_FIELDS.get(field.strip(), Prompt.created_at)
    if direction.strip().lower() == "asc":
        return [asc(column), asc(Prompt.id)]
    return [desc(column), desc(Prompt.id)]


async def get_prompt_by_id(db: AsyncSession, prompt_id: int) -> Optional[Prompt]:
    result = await db.execute(select(Prompt).filter(Prompt.id == prompt_id))
    return result.scalars().first()


async def search_public_prompts(
    db: AsyncSession,
    offset: int,
    limit: int,
    sort: Optional[str] = None,
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> Tuple[List[Prompt], int]:
    query = select(Prompt).where(Prompt.is_public.is_(True))
    if search and search.strip():
        pattern = contains_pattern(search.strip())
        query = query.where(
            or_(
                Prompt.title.ilike(pattern, escape=LIKE_ESCAPE),
                Prompt.description.ilike(pattern, escape=LIKE_ESCAPE),
                Prompt.content.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    if category:
        query = query.where(Prompt.category == category)
    query = query.order_by(*parse_sort(sort))
    return await paginate(db, query, offset, limit)


async def create_prompt(db: AsyncSession, prompt: Prompt) -> Prompt:
    db.add(prompt)
    await db.flush()
    return prompt


async def increment_view_count(db: AsyncSession, prompt_id: int) -> None:
    prompts = Prompt.__table__
    await db.execute(
        prompts.update().where(prompts.c.id == prompt_id).values(view_count=prompts.c.view_count + 1)
    )


async def adjust_like_count(db: AsyncSession, prompt_id: int, delta: int) -> None:
    prompts = Prompt.__table__
    await db.execute(
        prompts.update().where(prompts.c.id == prompt_id).values(like_count=prompts.c.like_count + delta)
    )


async def adjust_bookmark_count(db: AsyncSession, prompt_id: int, delta: int) -> None:
    prompts = Prompt.__table__
    await db.execute(
        prompts.update()
        .where(prompts.c.id == prompt_id)
        .values(bookmark_count=prompts.c.bookmark_count + delta)
    )


async def get_like(db: AsyncSession, user_id: int, prompt_id: int) -> Optional[PromptLike]:
    result = await db.execute(
        select(PromptLike).filter(PromptLike.user_id == user_id, PromptLike.prompt_id == prompt_id)
    )
    return result.scalars().first()


async def is_liked(db: AsyncSession, user_id: int, prompt_id: int) -> bool:
    result = await db.execute(
        select(exists().where(PromptLike.user_id == user_id, PromptLike.prompt_id == prompt_id))
    )
    return bool(result.scalar())


async def is_bookmarked(db: AsyncSession, user_id: int, prompt_id: int) -> bool:
    result = await db.execute(
        select(exists().where(PromptBookmark.user_id == user_id, PromptBookmark.prompt_id == prompt_id))
    )
    return bool(result.scalar())


async def get_user_rating_value(db: AsyncSession, user_id: int, prompt_id: int) -> Optional[int]:
    result = await db.execute(
        select(PromptRating.rating).filter(PromptRating.user_id == user_id, PromptRating.prompt_id == prompt_id)
    )
    return result.scalars().first()


async def count_public_prompts_by_authors(db: AsyncSession, author_ids: Iterable[int]) -> Dict[int, int]:
    author_ids = list(author_ids)
    if not author_ids:
        return {}
    result = await db.execute(
        select(Prompt.author_id, func.count(Prompt.id))
        .where(Prompt.author_id.in_(author_ids), Prompt.is_public.is_(True))
        .group_by(Prompt.author_id)
    )
    return {author_id: count for author_id, count in result.all()}


async def get_prompt_counter(db: AsyncSession, prompt_id: int, column) -> int:
    """Read a single counter column straight from the table, bypassing the identity map."""
    result = await db.execute(select(column).where(Prompt.id == prompt_id))
    return result.scalar_one_or_none() or 0
