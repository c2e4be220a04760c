# prompt_driver/services/rating_services.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.dependencies import PageParams
from prompt_driver.core.exceptions import (
    InvalidRatingException,
    ForbiddenException,
    PromptNotFoundException,
    RatingAlreadyExistsException,
    RatingNotFoundException,
    SelfRatingException,
    UnauthorizedRatingAccessException,
    UserNotFoundException,
)
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.prompt_rating import MAX_RATING, MIN_RATING, PromptRating
from prompt_driver.models.database_models.user import User
from prompt_driver.models.rating_models import (
    DeleteRatingResponse,
    RatingCommentResponse,
    RatingResponse,
    RatingStatsResponse,
    RatingWriteResponse,
)
from prompt_driver.services import notification_services
from prompt_driver.services.database import prompt_database_services, rating_database_services, user_database_services

logger = logging.getLogger(__name__)


def _check_rating_value(rating: int) -> None:
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingException(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


async def _get_prompt(db: AsyncSession, prompt_id: int) -> Prompt:
    prompt = await prompt_database_services.get_prompt_by_id(db, prompt_id)
    if prompt is None:
        raise PromptNotFoundException()
    return prompt


def _check_visible(prompt: Prompt, user: Optional[User]) -> None:
    if not prompt.is_public and (user is None or user.id != prompt.author_id):
        raise ForbiddenException("This prompt is private")


async def _refresh_prompt_aggregate(db: AsyncSession, prompt: Prompt) -> None:
    """Recompute a prompt's average and count from its rating rows.

    Flushes first so the aggregate sees the pending write, and runs inside
    the caller's transaction.
    """
    await db.flush()
    average, count = await rating_database_services.get_rating_aggregate(db, prompt.id)
    prompt.average_rating = average
    prompt.rating_count = count
    await db.flush()


def _to_rating_response(rating: PromptRating) -> RatingResponse:
    return RatingResponse(
        id=rating.id,
        prompt_id=rating.prompt_id,
        user_id=rating.user_id,
        user_nickname=rating.user.nickname,
        rating=rating.rating,
        comment=rating.comment,
        created_at=rating.created_at,
        updated_at=rating.updated_at,
    )


async def create_rating(
    db: AsyncSession, prompt_id: int, user: User, rating: int, comment: Optional[str] = None
) -> RatingWriteResponse:
    _check_rating_value(rating)
    prompt = await _get_prompt(db, prompt_id)
    _check_visible(prompt, user)

    if prompt.author_id == user.id:
        raise SelfRatingException("You cannot rate your own prompt")
    if await rating_database_services.get_rating(db, user.id, prompt_id) is not None:
        raise RatingAlreadyExistsException("You have already rated this prompt")

    prompt_rating = PromptRating(prompt=prompt, user=user, rating=rating, comment=comment)
    db.add(prompt_rating)
    try:
        await _refresh_prompt_aggregate(db, prompt)
    except IntegrityError:
        # A concurrent request inserted the same (user, prompt) pair first
        await db.rollback()
        raise RatingAlreadyExistsException("You have already rated this prompt")

    await notification_services.notify_prompt_rated(db, user, prompt, rating)
    await db.commit()
    logger.info(f"User {user.id} rated prompt {prompt_id} with {rating}")

    return RatingWriteResponse(
        id=prompt_rating.id,
        rating=prompt_rating.rating,
        average_rating=prompt.average_rating,
        rating_count=prompt.rating_count,
        message="Rating created successfully",
    )


async def _get_own_rating(db: AsyncSession, prompt_id: int, user: User) -> PromptRating:
    prompt_rating = await rating_database_services.get_rating(db, user.id, prompt_id)
    if prompt_rating is None:
        raise RatingNotFoundException()
    # Ownership guard; the lookup above is already keyed by the caller
    if prompt_rating.user_id != user.id:
        raise UnauthorizedRatingAccessException("You can only modify your own rating")
    return prompt_rating


async def update_rating(
    db: AsyncSession, prompt_id: int, user: User, rating: int, comment: Optional[str] = None
) -> RatingWriteResponse:
    _check_rating_value(rating)
    prompt = await _get_prompt(db, prompt_id)
    prompt_rating = await _get_own_rating(db, prompt_id, user)

    prompt_rating.rating = rating
    prompt_rating.comment = comment
    await _refresh_prompt_aggregate(db, prompt)
    await db.commit()
    logger.info(f"User {user.id} updated rating on prompt {prompt_id} to {rating}")

    return RatingWriteResponse(
        id=prompt_rating.id,
        rating=prompt_rating.rating,
        average_rating=prompt.average_rating,
        rating_count=prompt.rating_count,
        message="Rating updated successfully",
    )


async def delete_rating(db: AsyncSession, prompt_id: int, user: User) -> DeleteRatingResponse:
    prompt = await _get_prompt(db, prompt_id)
    prompt_rating = await _get_own_rating(db, prompt_id, user)

    await db.delete(prompt_rating)
    await _refresh_prompt_aggregate(db, prompt)
    await db.commit()
    logger.info(f"User {user.id} deleted rating on prompt {prompt_id}")

    return DeleteRatingResponse(average_rating=prompt.average_rating, rating_count=prompt.rating_count)


async def get_rating(db: AsyncSession, prompt_id: int, user: User) -> Optional[RatingResponse]:
    await _get_prompt(db, prompt_id)
    prompt_rating = await rating_database_services.get_rating(db, user.id, prompt_id)
    if prompt_rating is None:
        return None
    return _to_rating_response(prompt_rating)


async def get_rating_stats(db: AsyncSession, prompt_id: int, user: Optional[User] = None) -> RatingStatsResponse:
    prompt = await _get_prompt(db, prompt_id)
    _check_visible(prompt, user)
    average, count = await rating_database_services.get_rating_aggregate(db, prompt_id)
    distribution = await rating_database_services.get_rating_distribution(db, prompt_id)

    user_rating = None
    if user is not None:
        user_rating = await prompt_database_services.get_user_rating_value(db, user.id, prompt_id)

    return RatingStatsResponse(
        average_rating=average,
        rating_count=count,
        user_rating=user_rating,
        distribution=distribution,
    )


async def get_prompt_ratings(
    db: AsyncSession, prompt_id: int, page: PageParams, with_comments: bool = False
) -> PageResponse[RatingResponse]:
    await _get_prompt(db, prompt_id)
    ratings, total = await rating_database_services.list_prompt_ratings(
        db, prompt_id, page.offset, page.size, with_comments=with_comments
    )
    content = [_to_rating_response(prompt_rating) for prompt_rating in ratings]
    return PageResponse[RatingResponse].build(content, total, page.page, page.size)


async def get_recent_comments(db: AsyncSession, prompt_id: int, page: PageParams) -> PageResponse[RatingCommentResponse]:
    await _get_prompt(db, prompt_id)
    ratings, total = await rating_database_services.list_prompt_ratings(
        db, prompt_id, page.offset, page.size, with_comments=True
    )
    content = [
        RatingCommentResponse(
            id=prompt_rating.id,
            user_id=prompt_rating.user_id,
            user_nickname=prompt_rating.user.nickname,
            rating=prompt_rating.rating,
            comment=prompt_rating.comment,
            created_at=prompt_rating.created_at,
        )
        for prompt_rating in ratings
    ]
    return PageResponse[RatingCommentResponse].build(content, total, page.page, page.size)


async def get_user_ratings(
    db: AsyncSession, user_id: int, page: PageParams, viewer: Optional[User] = None
) -> PageResponse[RatingResponse]:
    if await user_database_services.get_user_by_id(db, user_id) is None:
        raise UserNotFoundException()
    include_private = viewer is not None and viewer.id == user_id
    ratings, total = await rating_database_services.list_user_ratings(
        db, user_id, page.offset, page.size, include_private=include_private
    )
    content = [_to_rating_response(prompt_rating) for prompt_rating in ratings]
    return PageResponse[RatingResponse].build(content, total, page.page, page.size)
