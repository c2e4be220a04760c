# prompt_driver/core/dependencies.py
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_driver.core.config import settings
from prompt_driver.core.exceptions import BusinessException, UnauthorizedAccessException
from prompt_driver.core.security import ACCESS_TOKEN_TYPE, decode_token
from prompt_driver.data.database import get_db
from prompt_driver.models.database_models.user import User
from prompt_driver.services.database.user_database_services import get_user_by_email

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user or fail with 401."""
    if credentials is None:
        raise UnauthorizedAccessException()

    try:
        payload = decode_token(credentials.credentials, ACCESS_TOKEN_TYPE)
    except BusinessException as e:
        logger.debug(f"Rejected access token: {e.message}")
        raise UnauthorizedAccessException()

    user = await get_user_by_email(db, payload["sub"])
    if user is None or not user.is_active:
        raise UnauthorizedAccessException()
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user but anonymous callers get None instead of 401."""
    if credentials is None:
        return None
    try:
        return await get_current_user(credentials, db)
    except UnauthorizedAccessException:
        return None


@dataclass
class PageParams:
    page: int
    size: int

    @property
    def offset(self) -> int:
        return self.page * self.size


def page_params(
    page: int = Query(0, ge=0, description="Page number (0-based)"),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, description="Page size"),
) -> PageParams:
    return PageParams(page=page, size=min(size, settings.MAX_PAGE_SIZE))


def small_page_params(
    page: int = Query(0, ge=0, description="Page number (0-based)"),
    size: int = Query(10, ge=1, description="Page size"),
) -> PageParams:
    return PageParams(page=page, size=min(size, settings.MAX_PAGE_SIZE))
