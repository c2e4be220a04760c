# prompt_driver/services/user_services.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.exceptions import UserAlreadyExistsException, UserNotFoundException
from prompt_driver.models.database_models.user import User
from prompt_driver.models.user_models import PublicUserResponse, UpdateUserRequest, UserResponse
from prompt_driver.services.database import user_database_services

logger = logging.getLogger(__name__)


async def get_current_user_profile(db: AsyncSession, user: User) -> UserResponse:
    await db.refresh(user)
    return UserResponse.model_validate(user)


async def update_current_user(db: AsyncSession, user: User, request: UpdateUserRequest) -> UserResponse:
    if request.nickname != user.nickname and await user_database_services.nickname_exists(
        db, request.nickname, exclude_user_id=user.id
    ):
        raise UserAlreadyExistsException("Nickname is already taken")

    user.nickname = request.nickname
    await db.commit()
    await db.refresh(user)
    logger.info(f"User {user.id} updated their profile")
    return UserResponse.model_validate(user)


async def get_user_profile(db: AsyncSession, user_id: int) -> PublicUserResponse:
    user = await user_database_services.get_user_by_id(db, user_id)
    if user is None:
        raise UserNotFoundException()
    return PublicUserResponse.model_validate(user)
