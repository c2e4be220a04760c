# prompt_driver/core/security.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from slowapi import Limiter
from slowapi.util import get_remote_address

from prompt_driver.core.config import settings
from prompt_driver.core.exceptions import ExpiredTokenException, InvalidTokenException

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str) -> bytes:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())


def verify_password(plain_password: str, hashed_password) -> bool:
    if isinstance(hashed_password, str):
        hashed_password = hashed_password.encode("utf-8")
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password)


def _encode_token(data: dict, token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    issued_at = datetime.now(timezone.utc)
    # jti keeps tokens issued within the same second distinct
    to_encode.update({
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "type": token_type,
        "jti": uuid.uuid4().hex,
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode_token({"sub": email, "role": role}, ACCESS_TOKEN_TYPE, expires_delta)


def create_refresh_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _encode_token({"sub": email}, REFRESH_TOKEN_TYPE, expires_delta)


def decode_token(token: str, expected_type: str) -> dict:
    """Decode a JWT and check its type claim.

    Raises ExpiredTokenException for an expired signature and
    InvalidTokenException for anything else that does not verify.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise ExpiredTokenException()
    except JWTError:
        raise InvalidTokenException()

    if payload.get("type") != expected_type:
        raise InvalidTokenException("Invalid token type")
    if not payload.get("sub"):
        raise InvalidTokenException("Invalid token payload")
    return payload
