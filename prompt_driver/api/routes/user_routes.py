# prompt_driver/api/routes/user_routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.dependencies import get_current_user
from prompt_driver.data.database import get_db
from prompt_driver.models.database_models.user import User
from prompt_driver.models.user_models import PublicUserResponse, UpdateUserRequest, UserResponse
from prompt_driver.services import user_services

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await user_services.get_current_user_profile(db, user)


@router.put("/me", response_model=UserResponse)
async def update_me(
    update_data: UpdateUserRequest, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
):
    return await user_services.update_current_user(db, user, update_data)


@router.get("/{user_id}", response_model=PublicUserResponse)
async def get_user(user_id: int, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await user_services.get_user_profile(db, user_id)
