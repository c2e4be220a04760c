# prompt_driver/api/routes/rating_routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.dependencies import (
    PageParams,
    get_current_user,
    get_current_user_optional,
    page_params,
    small_page_params,
)
from prompt_driver.data.database import get_db
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.user import User
from prompt_driver.models.rating_models import (
    DeleteRatingResponse,
    RatingCommentResponse,
    RatingRequest,
    RatingResponse,
    RatingStatsResponse,
    RatingWriteResponse,
)
from prompt_driver.services import rating_services

router = APIRouter()
user_ratings_router = APIRouter()


@router.post("", response_model=RatingWriteResponse, status_code=status.HTTP_201_CREATED)
async def create_rating(
    prompt_id: int, rating_data: RatingRequest, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
):
    """Rate a prompt once; the author cannot rate their own prompt."""
    return await rating_services.create_rating(db, prompt_id, user, rating_data.rating, rating_data.comment)


@router.put("", response_model=RatingWriteResponse)
async def update_rating(
    prompt_id: int, rating_data: RatingRequest, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
):
    return await rating_services.update_rating(db, prompt_id, user, rating_data.rating, rating_data.comment)


@router.delete("", response_model=DeleteRatingResponse)
async def delete_rating(prompt_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await rating_services.delete_rating(db, prompt_id, user)


@router.get("/user", response_model=RatingResponse)
async def get_my_rating(prompt_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """The caller's rating on this prompt, or 204 when they have not rated it."""
    rating = await rating_services.get_rating(db, prompt_id, user)
    if rating is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return rating


@router.get("", response_model=PageResponse[RatingResponse])
async def list_ratings(
    prompt_id: int,
    page: PageParams = Depends(small_page_params),
    with_comments: bool = Query(False, alias="withComments"),
    db: AsyncSession = Depends(get_db),
):
    return await rating_services.get_prompt_ratings(db, prompt_id, page, with_comments=with_comments)


@router.get("/stats", response_model=RatingStatsResponse)
async def get_rating_stats(
    prompt_id: int,
    user: Optional[User] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    return await rating_services.get_rating_stats(db, prompt_id, user)


@router.get("/comments", response_model=PageResponse[RatingCommentResponse])
async def list_comments(prompt_id: int, page: PageParams = Depends(small_page_params), db: AsyncSession = Depends(get_db)):
    return await rating_services.get_recent_comments(db, prompt_id, page)


@user_ratings_router.get("", response_model=PageResponse[RatingResponse])
async def list_user_ratings(
    user_id: int,
    page: PageParams = Depends(page_params),
    viewer: Optional[User] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    return await rating_services.get_user_ratings(db, user_id, page, viewer)
