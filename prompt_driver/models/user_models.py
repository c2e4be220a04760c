# prompt_driver/models/user_models.py
from datetime import datetime

from pydantic import Field

from prompt_driver.models.auth_models import NICKNAME_PATTERN
from prompt_driver.models.common_models import CamelModel


class AuthorResponse(CamelModel):
    id: int
    nickname: str


class UserResponse(CamelModel):
    id: int
    email: str
    nickname: str
    follower_count: int = 0
    following_count: int = 0
    created_at: datetime
    updated_at: datetime


class PublicUserResponse(CamelModel):
    id: int
    nickname: str
    follower_count: int = 0
    following_count: int = 0
    created_at: datetime


class UpdateUserRequest(CamelModel):
    nickname: str = Field(min_length=2, max_length=30, pattern=NICKNAME_PATTERN)
