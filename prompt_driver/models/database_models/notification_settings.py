# prompt_driver/models/database_models/notification_settings.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer

from prompt_driver.data.database import Base, utcnow
from prompt_driver.models.database_models.notification import NotificationType


class NotificationSettings(Base):
    __tablename__ = "notification_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    new_prompt_from_followed = Column(Boolean, default=True, nullable=False)
    user_followed = Column(Boolean, default=True, nullable=False)
    prompt_liked = Column(Boolean, default=True, nullable=False)
    prompt_rated = Column(Boolean, default=True, nullable=False)
    prompt_bookmarked = Column(Boolean, default=True, nullable=False)
    system_announcement = Column(Boolean, default=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def is_enabled(self, notification_type: NotificationType) -> bool:
        # Unflushed rows still hold None for defaulted columns
        value = getattr(self, notification_type.value.lower())
        return True if value is None else bool(value)
