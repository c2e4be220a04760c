# prompt_driver/services/notification_services.py
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.config import settings
from prompt_driver.core.dependencies import PageParams
from prompt_driver.core.exceptions import ForbiddenException, NotificationNotFoundException
from prompt_driver.data.database import utcnow
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.notification import EntityType, Notification, NotificationType
from prompt_driver.models.database_models.notification_settings import NotificationSettings
from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.user import User
from prompt_driver.models.notification_models import (
    NotificationResponse,
    NotificationSettingsRequest,
    NotificationSettingsResponse,
)
from prompt_driver.services.database import follow_database_services, notification_database_services

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE_LIMIT = 100


def _short_title(title: str) -> str:
    return title[:NOTIFICATION_TITLE_LIMIT]


def _stars(rating: int) -> str:
    return "★" * rating + "☆" * (5 - rating)


async def create_notification(
    db: AsyncSession,
    recipient_id: int,
    notification_type: NotificationType,
    title: str,
    message: str,
    sender_id: Optional[int] = None,
    entity_type: Optional[EntityType] = None,
    entity_id: Optional[int] = None,
) -> Optional[Notification]:
    """Add a notification to the session unless it is self-inflicted or muted.

    Returns the pending notification, or None when nothing was written.
    The caller owns the commit.
    """
    if sender_id is not None and sender_id == recipient_id:
        return None

    user_settings = await notification_database_services.get_settings(db, recipient_id)
    if user_settings is not None and not user_settings.is_enabled(notification_type):
        logger.debug(f"User {recipient_id} muted {notification_type.value} notifications")
        return None

    notification = Notification(
        recipient_id=recipient_id,
        sender_id=sender_id,
        type=notification_type,
        title=title[:200],
        message=message,
        entity_type=entity_type,
        entity_id=entity_id,
        is_read=False,
        read_at=None,
    )
    db.add(notification)
    await db.flush()
    return notification


async def notify_user_followed(db: AsyncSession, follower: User, followed_user_id: int) -> Optional[Notification]:
    return await create_notification(
        db,
        recipient_id=followed_user_id,
        sender_id=follower.id,
        notification_type=NotificationType.USER_FOLLOWED,
        title="New follower",
        message=f"{follower.nickname} started following you",
        entity_type=EntityType.USER,
        entity_id=follower.id,
    )


async def notify_followers_of_new_prompt(db: AsyncSession, author: User, prompt: Prompt) -> int:
    title = _short_title(prompt.title)
    sent = 0
    for follower_id in await follow_database_services.get_follower_ids(db, author.id):
        notification = await create_notification(
            db,
            recipient_id=follower_id,
            sender_id=author.id,
            notification_type=NotificationType.NEW_PROMPT_FROM_FOLLOWED,
            title=f"New prompt from {author.nickname}",
            message=f"{author.nickname} published a new prompt: {title}",
            entity_type=EntityType.PROMPT,
            entity_id=prompt.id,
        )
        if notification is not None:
            sent += 1
    logger.info(f"Notified {sent} followers of user {author.id} about prompt {prompt.id}")
    return sent


async def notify_prompt_liked(db: AsyncSession, liker: User, prompt: Prompt) -> Optional[Notification]:
    return await create_notification(
        db,
        recipient_id=prompt.author_id,
        sender_id=liker.id,
        notification_type=NotificationType.PROMPT_LIKED,
        title="Your prompt was liked",
        message=f"{liker.nickname} liked your prompt: {_short_title(prompt.title)}",
        entity_type=EntityType.PROMPT,
        entity_id=prompt.id,
    )


async def notify_prompt_rated(db: AsyncSession, rater: User, prompt: Prompt, rating: int) -> Optional[Notification]:
    return await create_notification(
        db,
        recipient_id=prompt.author_id,
        sender_id=rater.id,
        notification_type=NotificationType.PROMPT_RATED,
        title="Your prompt was rated",
        message=f"{rater.nickname} rated your prompt \"{_short_title(prompt.title)}\" {_stars(rating)}",
        entity_type=EntityType.RATING,
        entity_id=prompt.id,
    )


async def notify_prompt_bookmarked(db: AsyncSession, bookmarker: User, prompt: Prompt) -> Optional[Notification]:
    return await create_notification(
        db,
        recipient_id=prompt.author_id,
        sender_id=bookmarker.id,
        notification_type=NotificationType.PROMPT_BOOKMARKED,
        title="Your prompt was bookmarked",
        message=f"{bookmarker.nickname} bookmarked your prompt: {_short_title(prompt.title)}",
        entity_type=EntityType.BOOKMARK,
        entity_id=prompt.id,
    )


async def get_user_notifications(
    db: AsyncSession,
    user_id: int,
    page: PageParams,
    unread_only: bool = False,
    notification_type: Optional[NotificationType] = None,
) -> PageResponse[NotificationResponse]:
    notifications, total = await notification_database_services.list_user_notifications(
        db, user_id, page.offset, page.size, unread_only=unread_only, notification_type=notification_type
    )
    content = [NotificationResponse.model_validate(notification) for notification in notifications]
    return PageResponse[NotificationResponse].build(content, total, page.page, page.size)


async def _get_owned_notification(db: AsyncSession, user_id: int, notification_id: int) -> Notification:
    notification = await notification_database_services.get_notification_by_id(db, notification_id)
    if notification is None:
        raise NotificationNotFoundException()
    if notification.recipient_id != user_id:
        raise ForbiddenException("You can only access your own notifications")
    return notification


async def mark_as_read(db: AsyncSession, user_id: int, notification_id: int) -> None:
    notification = await _get_owned_notification(db, user_id, notification_id)
    notification.mark_as_read()
    await db.commit()


async def mark_all_as_read(db: AsyncSession, user_id: int) -> int:
    updated = await notification_database_services.mark_all_read(db, user_id)
    await db.commit()
    logger.info(f"Marked {updated} notifications as read for user {user_id}")
    return updated


async def delete_notification(db: AsyncSession, user_id: int, notification_id: int) -> None:
    notification = await _get_owned_notification(db, user_id, notification_id)
    await db.delete(notification)
    await db.commit()


async def get_unread_count(db: AsyncSession, user_id: int) -> int:
    return await notification_database_services.count_unread(db, user_id)


async def _get_or_create_settings(db: AsyncSession, user_id: int) -> NotificationSettings:
    user_settings = await notification_database_services.get_settings(db, user_id)
    if user_settings is None:
        user_settings = NotificationSettings(user_id=user_id)
        db.add(user_settings)
        await db.flush()
    return user_settings


def _settings_response(user_settings: NotificationSettings) -> NotificationSettingsResponse:
    return NotificationSettingsResponse(
        new_prompt_from_followed=user_settings.new_prompt_from_followed,
        user_followed=user_settings.user_followed,
        prompt_liked=user_settings.prompt_liked,
        prompt_rated=user_settings.prompt_rated,
        prompt_bookmarked=user_settings.prompt_bookmarked,
        system_announcements=user_settings.system_announcement,
        updated_at=user_settings.updated_at,
    )


async def get_settings(db: AsyncSession, user_id: int) -> NotificationSettingsResponse:
    user_settings = await _get_or_create_settings(db, user_id)
    await db.commit()
    return _settings_response(user_settings)


async def update_settings(
    db: AsyncSession, user_id: int, request: NotificationSettingsRequest
) -> NotificationSettingsResponse:
    user_settings = await _get_or_create_settings(db, user_id)
    user_settings.new_prompt_from_followed = request.new_prompt_from_followed
    user_settings.user_followed = request.user_followed
    user_settings.prompt_liked = request.prompt_liked
    user_settings.prompt_rated = request.prompt_rated
    user_settings.prompt_bookmarked = request.prompt_bookmarked
    user_settings.system_announcement = request.system_announcements
    await db.commit()
    return _settings_response(user_settings)


async def cleanup_old_notifications(db: AsyncSession) -> int:
    """Delete read notifications past their retention and long-ignored unread ones."""
    now = utcnow()
    deleted = await notification_database_services.delete_old_notifications(
        db,
        read_before=now - timedelta(days=settings.NOTIFICATION_READ_RETENTION_DAYS),
        unread_before=now - timedelta(days=settings.NOTIFICATION_UNREAD_RETENTION_DAYS),
    )
    await db.commit()
    logger.info(f"Cleaned up {deleted} old notifications")
    return deleted
