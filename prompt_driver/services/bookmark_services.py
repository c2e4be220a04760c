# prompt_driver/services/bookmark_services.py
import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.config import settings
from prompt_driver.core.dependencies import PageParams
from prompt_driver.core.exceptions import (
    BookmarkFolderLimitExceededException,
    BookmarkFolderNotFoundException,
    BookmarkNotFoundException,
    FolderNameAlreadyExistsException,
    ForbiddenException,
    PromptNotFoundException,
    SelfBookmarkNotAllowedException,
    ValidationException,
)
from prompt_driver.data.database import utcnow
from prompt_driver.models.bookmark_models import (
    BookmarkFolderRequest,
    BookmarkFolderResponse,
    BookmarkResponse,
    BookmarkToggleResponse,
    MoveBookmarkResponse,
)
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.bookmark_folder import BookmarkFolder
from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.prompt_bookmark import PromptBookmark
from prompt_driver.models.database_models.user import User
from prompt_driver.models.prompt_models import PromptListResponse
from prompt_driver.services import notification_services
from prompt_driver.services.database import bookmark_database_services, prompt_database_services

logger = logging.getLogger(__name__)

TIMEFRAMES = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "all": None,
}


async def toggle_bookmark(db: AsyncSession, prompt_id: int, user: User) -> BookmarkToggleResponse:
    prompt = await prompt_database_services.get_prompt_by_id(db, prompt_id)
    if prompt is None:
        raise PromptNotFoundException()
    if prompt.author_id == user.id:
        raise SelfBookmarkNotAllowedException()

    bookmark = await bookmark_database_services.get_bookmark(db, user.id, prompt_id)
    if bookmark is not None:
        folder_id = bookmark.folder_id
        await db.delete(bookmark)
        await db.flush()
        await prompt_database_services.adjust_bookmark_count(db, prompt_id, -1)
        await bookmark_database_services.recount_folders(db, [folder_id])
        bookmarked = False
    else:
        # Removing a bookmark stays allowed after the prompt goes private
        if not prompt.is_public:
            raise ForbiddenException("This prompt is private")
        db.add(PromptBookmark(user_id=user.id, prompt_id=prompt_id, folder_id=None))
        try:
            await db.flush()
        except IntegrityError:
            logger.info(f"Concurrent bookmark on prompt {prompt_id} by user {user.id}")
            await db.rollback()
            return BookmarkToggleResponse(
                bookmarked=True,
                bookmark_count=await prompt_database_services.get_prompt_counter(db, prompt_id, Prompt.bookmark_count),
            )
        await prompt_database_services.adjust_bookmark_count(db, prompt_id, 1)
        await notification_services.notify_prompt_bookmarked(db, user, prompt)
        bookmarked = True

    await db.commit()
    bookmark_count = await prompt_database_services.get_prompt_counter(db, prompt_id, Prompt.bookmark_count)
    logger.info(f"User {user.id} {'bookmarked' if bookmarked else 'removed bookmark from'} prompt {prompt_id}")
    return BookmarkToggleResponse(bookmarked=bookmarked, bookmark_count=bookmark_count)


async def is_bookmarked(db: AsyncSession, prompt_id: int, user: User) -> bool:
    return await prompt_database_services.is_bookmarked(db, user.id, prompt_id)


async def get_user_bookmarks(
    db: AsyncSession,
    user: User,
    page: PageParams,
    folder_id: Optional[int] = None,
    search: Optional[str] = None,
) -> PageResponse[BookmarkResponse]:
    if folder_id is not None and await bookmark_database_services.get_user_folder(db, user.id, folder_id) is None:
        raise BookmarkFolderNotFoundException()
    bookmarks, total = await bookmark_database_services.list_user_bookmarks(
        db, user.id, page.offset, page.size, folder_id=folder_id, search=search
    )
    content = [BookmarkResponse.model_validate(bookmark) for bookmark in bookmarks]
    return PageResponse[BookmarkResponse].build(content, total, page.page, page.size)


async def _get_folder(db: AsyncSession, user: User, folder_id: int) -> BookmarkFolder:
    folder = await bookmark_database_services.get_user_folder(db, user.id, folder_id)
    if folder is None:
        raise BookmarkFolderNotFoundException()
    return folder


async def create_folder(db: AsyncSession, user: User, request: BookmarkFolderRequest) -> BookmarkFolderResponse:
    if await bookmark_database_services.count_user_folders(db, user.id) >= settings.MAX_BOOKMARK_FOLDERS:
        raise BookmarkFolderLimitExceededException(
            f"You can create at most {settings.MAX_BOOKMARK_FOLDERS} bookmark folders"
        )
    if await bookmark_database_services.folder_name_exists(db, user.id, request.name):
        raise FolderNameAlreadyExistsException()

    folder = BookmarkFolder(user_id=user.id, name=request.name, description=request.description, bookmark_count=0)
    db.add(folder)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise FolderNameAlreadyExistsException()
    await db.commit()
    logger.info(f"User {user.id} created bookmark folder {folder.id}")
    return BookmarkFolderResponse.model_validate(folder)


async def get_user_folders(db: AsyncSession, user: User) -> List[BookmarkFolderResponse]:
    folders = await bookmark_database_services.list_user_folders(db, user.id)
    return [BookmarkFolderResponse.model_validate(folder) for folder in folders]


async def update_folder(
    db: AsyncSession, user: User, folder_id: int, request: BookmarkFolderRequest
) -> BookmarkFolderResponse:
    folder = await _get_folder(db, user, folder_id)
    if request.name != folder.name and await bookmark_database_services.folder_name_exists(
        db, user.id, request.name, exclude_folder_id=folder.id
    ):
        raise FolderNameAlreadyExistsException()

    folder.name = request.name
    folder.description = request.description
    await db.commit()
    return BookmarkFolderResponse.model_validate(folder)


async def delete_folder(db: AsyncSession, user: User, folder_id: int) -> None:
    folder = await _get_folder(db, user, folder_id)
    await bookmark_database_services.clear_folder(db, folder.id)
    await db.delete(folder)
    await db.commit()
    logger.info(f"User {user.id} deleted bookmark folder {folder_id}")


async def move_bookmark(
    db: AsyncSession, user: User, bookmark_id: int, folder_id: Optional[int]
) -> MoveBookmarkResponse:
    bookmark = await bookmark_database_services.get_user_bookmark_by_id(db, user.id, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundException()

    target_folder = None
    if folder_id is not None:
        target_folder = await _get_folder(db, user, folder_id)

    source_folder_id = bookmark.folder_id
    bookmark.folder = target_folder
    await db.flush()
    await bookmark_database_services.recount_folders(db, [source_folder_id, folder_id])
    await db.commit()
    await db.refresh(bookmark)

    return MoveBookmarkResponse(
        id=bookmark.id,
        prompt_id=bookmark.prompt_id,
        folder_id=bookmark.folder_id,
        created_at=bookmark.created_at,
        updated_at=bookmark.updated_at,
    )


async def get_popular_bookmarked_prompts(
    db: AsyncSession, page: PageParams, timeframe: str = "all"
) -> PageResponse[PromptListResponse]:
    timeframe = (timeframe or "all").lower()
    if timeframe not in TIMEFRAMES:
        raise ValidationException("Timeframe must be one of: week, month, all")
    window = TIMEFRAMES[timeframe]
    since = utcnow() - window if window is not None else None

    prompts, total = await bookmark_database_services.popular_bookmarked_prompts(
        db, page.offset, page.size, since=since
    )
    content = [PromptListResponse.model_validate(prompt) for prompt in prompts]
    return PageResponse[PromptListResponse].build(content, total, page.page, page.size)
