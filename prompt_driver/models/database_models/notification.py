# prompt_driver/models/database_models/notification.py
import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from prompt_driver.data.database import Base, utcnow


class NotificationType(str, enum.Enum):
    NEW_PROMPT_FROM_FOLLOWED = "NEW_PROMPT_FROM_FOLLOWED"
    USER_FOLLOWED = "USER_FOLLOWED"
    PROMPT_LIKED = "PROMPT_LIKED"
    PROMPT_RATED = "PROMPT_RATED"
    PROMPT_BOOKMARKED = "PROMPT_BOOKMARKED"
    SYSTEM_ANNOUNCEMENT = "SYSTEM_ANNOUNCEMENT"


class EntityType(str, enum.Enum):
    USER = "USER"
    PROMPT = "PROMPT"
    RATING = "RATING"
    BOOKMARK = "BOOKMARK"


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_recipient_read", "recipient_id", "is_read"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    type = Column(Enum(NotificationType, name="notification_type"), nullable=False)
    entity_type = Column(Enum(EntityType, name="notification_entity_type"), nullable=True)
    entity_id = Column(Integer, nullable=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)

    sender = relationship("User", foreign_keys=[sender_id], lazy="selectin")

    def mark_as_read(self):
        if not self.is_read:
            self.is_read = True
            self.read_at = utcnow()
