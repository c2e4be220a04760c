# prompt_driver/services/follow_services.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.dependencies import PageParams
from prompt_driver.core.exceptions import (
    AlreadyFollowingException,
    NotFollowingException,
    SelfFollowNotAllowedException,
    UserNotFoundException,
)
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.user import User
from prompt_driver.models.database_models.user_follow import UserFollow
from prompt_driver.models.follow_models import FollowStatusResponse, FollowUserResponse
from prompt_driver.models.prompt_models import PromptListResponse
from prompt_driver.services import notification_services
from prompt_driver.services.database import (
    follow_database_services,
    prompt_database_services,
    user_database_services,
)

logger = logging.getLogger(__name__)


async def _get_user(db: AsyncSession, user_id: int) -> User:
    user = await user_database_services.get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundException()
    return user


async def follow_user(db: AsyncSession, follower: User, following_id: int) -> None:
    if follower.id == following_id:
        raise SelfFollowNotAllowedException()
    await _get_user(db, following_id)
    if await follow_database_services.get_follow(db, follower.id, following_id) is not None:
        raise AlreadyFollowingException()

    try:
        await follow_database_services.create_follow(db, follower.id, following_id)
    except IntegrityError:
        await db.rollback()
        raise AlreadyFollowingException()

    await user_database_services.adjust_follow_counts(db, follower.id, following_id, 1)
    await notification_services.notify_user_followed(db, follower, following_id)
    await db.commit()
    logger.info(f"User {follower.id} followed user {following_id}")


async def unfollow_user(db: AsyncSession, follower: User, following_id: int) -> None:
    if follower.id == following_id:
        raise SelfFollowNotAllowedException()
    await _get_user(db, following_id)
    follow = await follow_database_services.get_follow(db, follower.id, following_id)
    if follow is None:
        raise NotFollowingException()

    await db.delete(follow)
    await db.flush()
    await user_database_services.adjust_follow_counts(db, follower.id, following_id, -1)
    await db.commit()
    logger.info(f"User {follower.id} unfollowed user {following_id}")


async def get_follow_status(db: AsyncSession, user: User, target_user_id: int) -> FollowStatusResponse:
    await _get_user(db, target_user_id)
    is_following = await follow_database_services.get_follow(db, user.id, target_user_id) is not None
    is_followed_by = await follow_database_services.get_follow(db, target_user_id, user.id) is not None
    return FollowStatusResponse(is_following=is_following, is_followed_by=is_followed_by)


async def _to_follow_entries(
    db: AsyncSession, follows: List[UserFollow], viewer: Optional[User], followers: bool
) -> List[FollowUserResponse]:
    listed_users = [follow.follower if followers else follow.following for follow in follows]
    user_ids = [listed_user.id for listed_user in listed_users]
    followed_by_viewer = set()
    if viewer is not None:
        followed_by_viewer = await follow_database_services.followed_among(db, viewer.id, user_ids)
    prompt_counts = await prompt_database_services.count_public_prompts_by_authors(db, user_ids)

    return [
        FollowUserResponse(
            id=listed_user.id,
            nickname=listed_user.nickname,
            follower_count=listed_user.follower_count,
            following_count=listed_user.following_count,
            prompt_count=prompt_counts.get(listed_user.id, 0),
            is_following=listed_user.id in followed_by_viewer,
            followed_at=follow.created_at,
        )
        for follow, listed_user in zip(follows, listed_users)
    ]


async def get_followers(
    db: AsyncSession, user_id: int, page: PageParams, viewer: Optional[User] = None
) -> PageResponse[FollowUserResponse]:
    await _get_user(db, user_id)
    follows, total = await follow_database_services.list_followers(db, user_id, page.offset, page.size)
    content = await _to_follow_entries(db, follows, viewer, followers=True)
    return PageResponse[FollowUserResponse].build(content, total, page.page, page.size)


async def get_following(
    db: AsyncSession, user_id: int, page: PageParams, viewer: Optional[User] = None
) -> PageResponse[FollowUserResponse]:
    await _get_user(db, user_id)
    follows, total = await follow_database_services.list_following(db, user_id, page.offset, page.size)
    content = await _to_follow_entries(db, follows, viewer, followers=False)
    return PageResponse[FollowUserResponse].build(content, total, page.page, page.size)


async def get_user_feed(db: AsyncSession, user: User, page: PageParams) -> PageResponse[PromptListResponse]:
    prompts, total = await follow_database_services.feed_prompts(db, user.id, page.offset, page.size)
    content = [PromptListResponse.model_validate(prompt) for prompt in prompts]
    return PageResponse[PromptListResponse].build(content, total, page.page, page.size)
