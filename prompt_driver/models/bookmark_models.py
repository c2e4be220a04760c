# prompt_driver/models/bookmark_models.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from prompt_driver.models.common_models import CamelModel
from prompt_driver.models.user_models import AuthorResponse


class BookmarkFolderRequest(CamelModel):
    name: str = Field(min_length=3, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Folder name must be between 3 and 50 characters")
        return value


class MoveBookmarkRequest(CamelModel):
    folder_id: Optional[int] = None


class BookmarkFolderResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    bookmark_count: int
    created_at: datetime
    updated_at: datetime


class BookmarkToggleResponse(CamelModel):
    bookmarked: bool
    bookmark_count: int


class BookmarkStatusResponse(CamelModel):
    bookmarked: bool


class BookmarkedPromptInfo(CamelModel):
    id: int
    title: str
    description: str
    category: str
    tags: List[str]
    author: AuthorResponse
    like_count: int
    view_count: int
    bookmark_count: int
    average_rating: Optional[float] = None
    rating_count: int
    created_at: datetime


class BookmarkFolderInfo(CamelModel):
    id: int
    name: str


class BookmarkResponse(CamelModel):
    id: int
    prompt: BookmarkedPromptInfo
    folder: Optional[BookmarkFolderInfo] = None
    created_at: datetime


class MoveBookmarkResponse(CamelModel):
    id: int
    prompt_id: int
    folder_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
