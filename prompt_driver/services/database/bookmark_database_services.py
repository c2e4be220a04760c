# prompt_driver/services/database/bookmark_database_services.py
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.models.database_models.bookmark_folder import BookmarkFolder
from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.prompt_bookmark import PromptBookmark
from prompt_driver.services.database.database_services import LIKE_ESCAPE, contains_pattern, count_rows, paginate


async def get_bookmark(db: AsyncSession, user_id: int, prompt_id: int) -> Optional[PromptBookmark]:
    result = await db.execute(
        select(PromptBookmark).filter(PromptBookmark.user_id == user_id, PromptBookmark.prompt_id == prompt_id)
    )
    return result.scalars().first()


async def get_user_bookmark_by_id(db: AsyncSession, user_id: int, bookmark_id: int) -> Optional[PromptBookmark]:
    result = await db.execute(
        select(PromptBookmark).filter(PromptBookmark.id == bookmark_id, PromptBookmark.user_id == user_id)
    )
    return result.scalars().first()


async def list_user_bookmarks(
    db: AsyncSession,
    user_id: int,
    offset: int,
    limit: int,
    folder_id: Optional[int] = None,
    search: Optional[str] = None,
) -> Tuple[List[PromptBookmark], int]:
    query = (
        select(PromptBookmark)
        .join(Prompt, Prompt.id == PromptBookmark.prompt_id)
        .where(PromptBookmark.user_id == user_id)
    )
    if folder_id is not None:
        query = query.where(PromptBookmark.folder_id == folder_id)
    if search and search.strip():
        pattern = contains_pattern(search.strip())
        query = query.where(
            or_(
                Prompt.title.ilike(pattern, escape=LIKE_ESCAPE),
                Prompt.description.ilike(pattern, escape=LIKE_ESCAPE),
                Prompt.content.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    query = query.order_by(desc(PromptBookmark.created_at), desc(PromptBookmark.id))
    return await paginate(db, query, offset, limit)


async def folder_ids_for_prompt_bookmarks(db: AsyncSession, prompt_id: int) -> List[int]:
    result = await db.execute(
        select(PromptBookmark.folder_id)
        .where(PromptBookmark.prompt_id == prompt_id, PromptBookmark.folder_id.is_not(None))
        .distinct()
    )
    return list(result.scalars().all())


async def get_user_folder(db: AsyncSession, user_id: int, folder_id: int) -> Optional[BookmarkFolder]:
    result = await db.execute(
        select(BookmarkFolder).filter(BookmarkFolder.id == folder_id, BookmarkFolder.user_id == user_id)
    )
    return result.scalars().first()


async def list_user_folders(db: AsyncSession, user_id: int) -> List[BookmarkFolder]:
    result = await db.execute(
        select(BookmarkFolder).filter(BookmarkFolder.user_id == user_id).order_by(BookmarkFolder.name)
    )
    return list(result.scalars().all())


async def count_user_folders(db: AsyncSession, user_id: int) -> int:
    return await count_rows(db, select(BookmarkFolder.id).where(BookmarkFolder.user_id == user_id))


async def folder_name_exists(
    db: AsyncSession, user_id: int, name: str, exclude_folder_id: Optional[int] = None
) -> bool:
    query = select(BookmarkFolder.id).where(BookmarkFolder.user_id == user_id, BookmarkFolder.name == name)
    if exclude_folder_id is not None:
        query = query.where(BookmarkFolder.id != exclude_folder_id)
    return await count_rows(db, query) > 0


async def clear_folder(db: AsyncSession, folder_id: int) -> None:
    """Move every bookmark in a folder back to uncategorized."""
    bookmarks = PromptBookmark.__table__
    await db.execute(bookmarks.update().where(bookmarks.c.folder_id == folder_id).values(folder_id=None))


async def recount_folders(db: AsyncSession, folder_ids: Iterable[Optional[int]]) -> None:
    folders = BookmarkFolder.__table__
    for folder_id in {folder_id for folder_id in folder_ids if folder_id is not None}:
        bookmark_count = (
            select(func.count(PromptBookmark.id))
            .where(PromptBookmark.folder_id == folder_id)
            .scalar_subquery()
        )
        await db.execute(folders.update().where(folders.c.id == folder_id).values(bookmark_count=bookmark_count))


async def popular_bookmarked_prompts(
    db: AsyncSession, offset: int, limit: int, since: Optional[datetime] = None
) -> Tuple[List[Prompt], int]:
    """
    Public prompts ordered by how many bookmarks they gained since a cut-off.

    Args:
        db: The database session.
        offset: Number of prompts to skip.
        limit: Page size.
        since: Only bookmarks created at or after this moment count. None counts all of them.

    Returns:
        A tuple of (prompts on this page, total prompts with at least one counted bookmark).
    """
    recent_count = func.count(PromptBookmark.id).label("recent_bookmarks")
    query = (
        select(Prompt, recent_count)
        .join(PromptBookmark, PromptBookmark.prompt_id == Prompt.id)
        .where(Prompt.is_public.is_(True))
    )
    if since is not None:
        query = query.where(PromptBookmark.created_at >= since)
    query = query.group_by(Prompt.id)

    total = await count_rows(db, query)
    result = await db.execute(
        query.order_by(desc(recent_count), desc(Prompt.bookmark_count), desc(Prompt.id)).offset(offset).limit(limit)
    )
    return [row[0] for row in result.all()], total
