# prompt_driver/models/database_models/user.py
import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, LargeBinary, String

from prompt_driver.data.database import Base, utcnow
from prompt_driver.models.database_models.bookmark_folder import BookmarkFolder
from prompt_driver.models.database_models.notification import Notification
from prompt_driver.models.database_models.notification_settings import NotificationSettings
from prompt_driver.models.database_models.prompt import Prompt
from prompt_driver.models.database_models.prompt_bookmark import PromptBookmark
from prompt_driver.models.database_models.prompt_like import PromptLike
from prompt_driver.models.database_models.prompt_rating import PromptRating
from prompt_driver.models.database_models.refresh_token import RefreshToken
from prompt_driver.models.database_models.user_follow import UserFollow


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(LargeBinary, nullable=False)
    nickname = Column(String(30), unique=True, index=True, nullable=False)
    role = Column(Enum(UserRole, name="user_role"), default=UserRole.USER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    follower_count = Column(Integer, default=0, nullable=False)
    following_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
