# prompt_driver/models/notification_models.py
from datetime import datetime
from typing import Optional

from prompt_driver.models.common_models import CamelModel
from prompt_driver.models.database_models.notification import EntityType, NotificationType


class NotificationSenderResponse(CamelModel):
    id: int
    nickname: str


class NotificationResponse(CamelModel):
    id: int
    type: NotificationType
    title: str
    message: str
    entity_type: Optional[EntityType] = None
    entity_id: Optional[int] = None
    sender: Optional[NotificationSenderResponse] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime


class NotificationSettingsRequest(CamelModel):
    new_prompt_from_followed: bool
    user_followed: bool
    prompt_liked: bool
    prompt_rated: bool
    prompt_bookmarked: bool
    system_announcements: bool


class NotificationSettingsResponse(NotificationSettingsRequest):
    updated_at: datetime
