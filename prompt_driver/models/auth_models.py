# prompt_driver/models/auth_models.py
from datetime import datetime

from pydantic import EmailStr, Field

from prompt_driver.models.common_models import CamelModel

NICKNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class RegisterRequest(CamelModel):
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=6, max_length=128)
    nickname: str = Field(min_length=2, max_length=30, pattern=NICKNAME_PATTERN)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class RegisterResponse(CamelModel):
    id: int
    email: str
    nickname: str
    created_at: datetime


class AuthResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_in: int
