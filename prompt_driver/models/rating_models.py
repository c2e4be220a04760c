# prompt_driver/models/rating_models.py
from datetime import datetime
from typing import Dict, Optional

from pydantic import Field

from prompt_driver.models.common_models import CamelModel


class RatingRequest(CamelModel):
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=1000)


class RatingResponse(CamelModel):
    id: int
    prompt_id: int
    user_id: int
    user_nickname: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class RatingWriteResponse(CamelModel):
    id: int
    rating: int
    average_rating: Optional[float] = None
    rating_count: int
    message: str


class DeleteRatingResponse(CamelModel):
    average_rating: Optional[float] = None
    rating_count: int
    message: str = "Rating deleted successfully"


class RatingStatsResponse(CamelModel):
    average_rating: Optional[float] = None
    rating_count: int
    user_rating: Optional[int] = None
    distribution: Dict[int, int]


class RatingCommentResponse(CamelModel):
    id: int
    user_id: int
    user_nickname: str
    rating: int
    comment: str
    created_at: datetime
