# prompt_driver/models/follow_models.py
from datetime import datetime

from prompt_driver.models.common_models import CamelModel


class FollowStatusResponse(CamelModel):
    is_following: bool
    is_followed_by: bool


class FollowUserResponse(CamelModel):
    """An entry in a follower or following list."""

    id: int
    nickname: str
    follower_count: int
    following_count: int
    prompt_count: int
    is_following: bool
    followed_at: datetime
