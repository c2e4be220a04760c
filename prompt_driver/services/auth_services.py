# prompt_driver/services/auth_services.py
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.config import settings
from prompt_driver.core.exceptions import (
    ExpiredTokenException,
    InvalidCredentialsException,
    InvalidTokenException,
    UserAlreadyExistsException,
)
from prompt_driver.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from prompt_driver.data.database import utcnow
from prompt_driver.models.auth_models import AuthResponse, LoginRequest, RegisterRequest, RegisterResponse
from prompt_driver.models.database_models.user import User
from prompt_driver.services.database import refresh_token_database_services, user_database_services

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
    user = await user_database_services.get_user_by_email(db, _normalize_email(email))
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def register(db: AsyncSession, request: RegisterRequest) -> RegisterResponse:
    email = _normalize_email(request.email)
    if await user_database_services.email_exists(db, email):
        raise UserAlreadyExistsException()
    if await user_database_services.nickname_exists(db, request.nickname):
        raise UserAlreadyExistsException("Nickname is already taken")

    try:
        user = await user_database_services.create_user(
            db, email=email, nickname=request.nickname, hashed_password=hash_password(request.password)
        )
    except IntegrityError:
        await db.rollback()
        raise UserAlreadyExistsException()
    await db.commit()
    logger.info(f"Registered user {user.id}")
    return RegisterResponse(id=user.id, email=user.email, nickname=user.nickname, created_at=user.created_at)


async def _issue_tokens(db: AsyncSession, user: User) -> AuthResponse:
    access_token = create_access_token(user.email, user.role.value)
    refresh_token = create_refresh_token(user.email)
    await refresh_token_database_services.create_refresh_token(
        db,
        user_id=user.id,
        token=refresh_token,
        expires_at=utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )
    await refresh_token_database_services.prune_user_refresh_tokens(
        db, user.id, keep=settings.MAX_REFRESH_TOKENS_PER_USER
    )
    return AuthResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="Bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


async def login(db: AsyncSession, request: LoginRequest) -> AuthResponse:
    user = await authenticate_user(db, request.email, request.password)
    if user is None or not user.is_active:
        logger.info("Rejected login attempt")
        raise InvalidCredentialsException()

    response = await _issue_tokens(db, user)
    await db.commit()
    logger.info(f"User {user.id} logged in")
    return response


async def refresh(db: AsyncSession, refresh_token: str) -> AuthResponse:
    """Exchange a stored refresh token for a new token pair.

    The presented token is consumed, so replaying it fails.
    """
    payload = decode_token(refresh_token, REFRESH_TOKEN_TYPE)

    stored_token = await refresh_token_database_services.get_refresh_token(db, refresh_token)
    if stored_token is None:
        raise InvalidTokenException("Refresh token not recognised")
    if stored_token.is_expired():
        await refresh_token_database_services.delete_refresh_token(db, stored_token)
        await db.commit()
        raise ExpiredTokenException()

    user = await user_database_services.get_user_by_id(db, stored_token.user_id)
    if user is None or not user.is_active or user.email != payload["sub"]:
        raise InvalidTokenException()

    await refresh_token_database_services.delete_refresh_token(db, stored_token)
    response = await _issue_tokens(db, user)
    await db.commit()
    return response


async def logout(db: AsyncSession, user: User) -> None:
    deleted = await refresh_token_database_services.delete_user_refresh_tokens(db, user.id)
    await db.commit()
    logger.info(f"User {user.id} logged out, revoked {deleted} refresh tokens")
