# prompt_driver/models/prompt_models.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from prompt_driver.models.common_models import CamelModel
from prompt_driver.models.user_models import AuthorResponse

MAX_TAGS = 5


class PromptCreateRequest(CamelModel):
    title: str = Field(min_length=5, max_length=100)
    description: str = Field(min_length=10, max_length=300)
    content: str = Field(min_length=20, max_length=10000)
    category: str = Field(min_length=1)
    tags: List[str] = Field(default_factory=list)
    is_public: bool = True

    @field_validator("title", "description", "content", "category")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, tags: List[str]) -> List[str]:
        # Tags behave as a set; keep first-seen order
        unique_tags = list(dict.fromkeys(tag.strip() for tag in tags))
        if len(unique_tags) > MAX_TAGS:
            raise ValueError(f"Maximum {MAX_TAGS} tags allowed")
        for tag in unique_tags:
            if not 2 <= len(tag) <= 20:
                raise ValueError("Each tag must be between 2 and 20 characters")
        return unique_tags


class PromptUpdateRequest(PromptCreateRequest):
    is_public: Optional[bool] = None


class PromptListResponse(CamelModel):
    id: int
    title: str
    description: str
    content: str
    category: str
    tags: List[str]
    author: AuthorResponse
    like_count: int
    view_count: int
    bookmark_count: int
    average_rating: Optional[float] = None
    rating_count: int
    is_public: bool
    created_at: datetime
    updated_at: datetime


class PromptResponse(PromptListResponse):
    is_liked: Optional[bool] = None
    is_bookmarked: Optional[bool] = None
    user_rating: Optional[int] = None


class LikeResponse(CamelModel):
    liked: bool
    like_count: int


class CategoryResponse(CamelModel):
    id: str
    name: str
    description: str
