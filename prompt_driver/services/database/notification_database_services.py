# prompt_driver/services/database/notification_database_services.py
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, delete, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.data.database import utcnow
from prompt_driver.models.database_models.notification import Notification, NotificationType
from prompt_driver.models.database_models.notification_settings import NotificationSettings
from prompt_driver.services.database.database_services import paginate


async def get_notification_by_id(db: AsyncSession, notification_id: int) -> Optional[Notification]:
    result = await db.execute(select(Notification).filter(Notification.id == notification_id))
    return result.scalars().first()


async def list_user_notifications(
    db: AsyncSession,
    user_id: int,
    offset: int,
    limit: int,
    unread_only: bool = False,
    notification_type: Optional[NotificationType] = None,
) -> Tuple[List[Notification], int]:
    query = select(Notification).where(Notification.recipient_id == user_id)
    if unread_only:
        query = query.where(Notification.is_read.is_(False))
    if notification_type is not None:
        query = query.where(Notification.type == notification_type)
    query = query.order_by(desc(Notification.created_at), desc(Notification.id))
    return await paginate(db, query, offset, limit)


async def count_unread(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count(Notification.id)).where(
            Notification.recipient_id == user_id, Notification.is_read.is_(False)
        )
    )
    return result.scalar_one()


async def mark_all_read(db: AsyncSession, user_id: int) -> int:
    notifications = Notification.__table__
    result = await db.execute(
        notifications.update()
        .where(notifications.c.recipient_id == user_id, notifications.c.is_read.is_(False))
        .values(is_read=True, read_at=utcnow())
    )
    return result.rowcount


async def get_settings(db: AsyncSession, user_id: int) -> Optional[NotificationSettings]:
    result = await db.execute(select(NotificationSettings).filter(NotificationSettings.user_id == user_id))
    return result.scalars().first()


async def delete_old_notifications(db: AsyncSession, read_before: datetime, unread_before: datetime) -> int:
    result = await db.execute(
        delete(Notification)
        .where(
            or_(
                and_(Notification.is_read.is_(True), Notification.created_at < read_before),
                and_(Notification.is_read.is_(False), Notification.created_at < unread_before),
            )
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
