# prompt_driver/models/common_models.py
import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema that speaks camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PageResponse(CamelModel, Generic[T]):
    content: List[T]
    total_elements: int
    total_pages: int
    page: int
    size: int
    first: bool
    last: bool

    @classmethod
    def build(cls, content: List[T], total_elements: int, page: int, size: int) -> "PageResponse[T]":
        total_pages = math.ceil(total_elements / size) if size else 0
        return cls(
            content=content,
            total_elements=total_elements,
            total_pages=total_pages,
            page=page,
            size=size,
            first=page == 0,
            last=page >= total_pages - 1,
        )


class CountResponse(CamelModel):
    count: int
