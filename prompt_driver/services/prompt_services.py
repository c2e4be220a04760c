# prompt_driver/services/prompt_services.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.config import settings
from prompt_driver.core.dependencies import PageParams
from prompt_driver.core.exceptions import ForbiddenException, InvalidCategoryException, PromptNotFoundException
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.prompt_like import PromptLike
from prompt_driver.models.database_models.user import User
from prompt_driver.models.prompt_models import (
    CategoryResponse,
    LikeResponse,
    PromptCreateRequest,
    PromptListResponse,
    PromptResponse,
    PromptUpdateRequest,
)
from prompt_driver.services import notification_services
from prompt_driver.services.database import bookmark_database_services, prompt_database_services

logger = logging.getLogger(__name__)


def get_categories() -> List[CategoryResponse]:
    return [
        CategoryResponse(id=category_id, name=category_id.capitalize(), description=description)
        for category_id, description in settings.PROMPT_CATEGORIES.items()
    ]


def _check_category(category: str) -> None:
    if category not in settings.PROMPT_CATEGORIES:
        raise InvalidCategoryException(f"Invalid category: {category}")


async def _get_prompt(db: AsyncSession, prompt_id: int) -> Prompt:
    prompt = await prompt_database_services.get_prompt_by_id(db, prompt_id)
    if prompt is None:
        raise PromptNotFoundException()
    return prompt


async def _get_authored_prompt(db: AsyncSession, prompt_id: int, user: User) -> Prompt:
    prompt = await _get_prompt(db, prompt_id)
    if prompt.author_id != user.id:
        raise ForbiddenException("You can only modify your own prompts")
    return prompt


async def get_prompts(
    db: AsyncSession,
    page: PageParams,
    sort: Optional[str] = None,
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> PageResponse[PromptListResponse]:
    prompts, total = await prompt_database_services.search_public_prompts(
        db, page.offset, page.size, sort=sort, search=search, category=category
    )
    content = [PromptListResponse.model_validate(prompt) for prompt in prompts]
    return PageResponse[PromptListResponse].build(content, total, page.page, page.size)


async def _to_prompt_response(db: AsyncSession, prompt: Prompt, user: Optional[User]) -> PromptResponse:
    response = PromptResponse.model_validate(prompt)
    if user is not None:
        response.is_liked = await prompt_database_services.is_liked(db, user.id, prompt.id)
        response.is_bookmarked = await prompt_database_services.is_bookmarked(db, user.id, prompt.id)
        response.user_rating = await prompt_database_services.get_user_rating_value(db, user.id, prompt.id)
    return response


async def get_prompt(db: AsyncSession, prompt_id: int, user: Optional[User] = None) -> PromptResponse:
    """Fetch a prompt for display and count the view.

    Private prompts are only visible to their author.
    """
    prompt = await _get_prompt(db, prompt_id)
    if not prompt.is_public and (user is None or user.id != prompt.author_id):
        raise ForbiddenException("This prompt is private")

    await prompt_database_services.increment_view_count(db, prompt_id)
    await db.commit()
    await db.refresh(prompt)
    return await _to_prompt_response(db, prompt, user)


async def create_prompt(db: AsyncSession, request: PromptCreateRequest, author: User) -> PromptResponse:
    _check_category(request.category)
    prompt = Prompt(
        title=request.title,
        description=request.description,
        content=request.content,
        category=request.category,
        tags=list(request.tags),
        is_public=request.is_public,
        author=author,
        view_count=0,
        like_count=0,
        bookmark_count=0,
        average_rating=None,
        rating_count=0,
    )
    await prompt_database_services.create_prompt(db, prompt)
    if prompt.is_public:
        await notification_services.notify_followers_of_new_prompt(db, author, prompt)
    await db.commit()
    logger.info(f"User {author.id} created prompt {prompt.id}")
    return await _to_prompt_response(db, prompt, author)


async def update_prompt(
    db: AsyncSession, prompt_id: int, request: PromptUpdateRequest, user: User
) -> PromptResponse:
    prompt = await _get_authored_prompt(db, prompt_id, user)
    _check_category(request.category)

    prompt.title = request.title
    prompt.description = request.description
    prompt.content = request.content
    prompt.category = request.category
    prompt.tags = list(request.tags)
    if request.is_public is not None:
        prompt.is_public = request.is_public
    await db.commit()
    logger.info(f"User {user.id} updated prompt {prompt_id}")
    return await _to_prompt_response(db, prompt, user)


async def delete_prompt(db: AsyncSession, prompt_id: int, user: User) -> None:
    prompt = await _get_authored_prompt(db, prompt_id, user)
    # Likes, ratings and bookmarks go with the prompt; their folders need recounting
    folder_ids = await bookmark_database_services.folder_ids_for_prompt_bookmarks(db, prompt_id)
    await db.delete(prompt)
    await db.flush()
    await bookmark_database_services.recount_folders(db, folder_ids)
    await db.commit()
    logger.info(f"User {user.id} deleted prompt {prompt_id}")


async def toggle_like(db: AsyncSession, prompt_id: int, user: User) -> LikeResponse:
    prompt = await _get_prompt(db, prompt_id)
    like = await prompt_database_services.get_like(db, user.id, prompt_id)

    if like is not None:
        await db.delete(like)
        await prompt_database_services.adjust_like_count(db, prompt_id, -1)
        liked = False
    else:
        db.add(PromptLike(user_id=user.id, prompt_id=prompt_id))
        try:
            await db.flush()
        except IntegrityError:
            logger.info(f"Concurrent like on prompt {prompt_id} by user {user.id}")
            await db.rollback()
            return LikeResponse(
                liked=True,
                like_count=await prompt_database_services.get_prompt_counter(db, prompt_id, Prompt.like_count),
            )
        await prompt_database_services.adjust_like_count(db, prompt_id, 1)
        await notification_services.notify_prompt_liked(db, user, prompt)
        liked = True

    await db.commit()
    like_count = await prompt_database_services.get_prompt_counter(db, prompt_id, Prompt.like_count)
    return LikeResponse(liked=liked, like_count=like_count)
