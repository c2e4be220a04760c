# prompt_driver/api/routes/auth_routes.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.config import settings
from prompt_driver.core.dependencies import get_current_user
from prompt_driver.core.security import limiter
from prompt_driver.data.database import get_db
from prompt_driver.models.auth_models import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    RegisterResponse,
)
from prompt_driver.models.database_models.user import User
from prompt_driver.services import auth_services

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register(request: Request, register_data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Register a new user."""
    return await auth_services.register(db, register_data)


@router.post("/login", response_model=AuthResponse)
async def login(login_data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Log in with email and password and receive an access/refresh token pair."""
    return await auth_services.login(db, login_data)


@router.post("/refresh", response_model=AuthResponse)
async def refresh_token(refresh_data: RefreshTokenRequest, db: AsyncSession = Depends(get_db)):
    """Rotate a refresh token into a fresh token pair."""
    return await auth_services.refresh(db, refresh_data.refresh_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    """Revoke every refresh token of the current user."""
    await auth_services.logout(db, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
