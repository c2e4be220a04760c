# prompt_driver/api/routes/follow_routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.dependencies import PageParams, get_current_user, get_current_user_optional, page_params
from prompt_driver.data.database import get_db
from prompt_driver.models.common_models import PageResponse
from prompt_driver.models.database_models.user import User
from prompt_driver.models.follow_models import FollowStatusResponse, FollowUserResponse
from prompt_driver.models.prompt_models import PromptListResponse
from prompt_driver.services import follow_services

router = APIRouter()


@router.get("/me/feed", response_model=PageResponse[PromptListResponse])
async def get_feed(
    page: PageParams = Depends(page_params), user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
):
    """Public prompts from the users the caller follows, newest first."""
    return await follow_services.get_user_feed(db, user, page)


@router.post("/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def follow(user_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await follow_services.follow_user(db, user, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow(user_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await follow_services.unfollow_user(db, user, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/follow/status", response_model=FollowStatusResponse)
async def follow_status(user_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await follow_services.get_follow_status(db, user, user_id)


@router.get("/{user_id}/followers", response_model=PageResponse[FollowUserResponse])
async def followers(
    user_id: int,
    page: PageParams = Depends(page_params),
    viewer: Optional[User] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    return await follow_services.get_followers(db, user_id, page, viewer)


@router.get("/{user_id}/following", response_model=PageResponse[FollowUserResponse])
async def following(
    user_id: int,
    page: PageParams = Depends(page_params),
    viewer: Optional[User] = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    return await follow_services.get_following(db, user_id, page, viewer)
