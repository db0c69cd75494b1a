"""
Token service.

Access and refresh tokens are signed with independent secrets, so a leaked
key for one kind cannot mint the other. Verification never raises: any
signature, expiry or shape problem comes back as None.
"""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from config import ApplicationConfig


class TokenPayload(BaseModel):
    """Identity claims carried by both token kinds"""

    user_id: str
    email: str
    username: str
    role: str


def _encode(payload: TokenPayload, secret: str, expires_delta: timedelta) -> str:
    now = datetime.now(UTC)
    claims = {
        "user_id": payload.user_id,
        "email": payload.email,
        "username": payload.username,
        "role": payload.role,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, secret, algorithm=ApplicationConfig.JWT_ALGORITHM)


def _decode(token: str, secret: str) -> Optional[TokenPayload]:
    if not token or not isinstance(token, str):
        return None
    try:
        claims = jwt.decode(token, secret, algorithms=[ApplicationConfig.JWT_ALGORITHM])
        return TokenPayload(**claims)
    except (JWTError, ValidationError, TypeError):
        return None


def generate_access_token(payload: TokenPayload) -> str:
    """
    Generate JWT access token

    Args:
        payload: identity claims

    Returns:
        JWT token string (HS256, 4-hour expiry by default)
    """
    return _encode(
        payload,
        ApplicationConfig.JWT_ACCESS_SECRET,
        timedelta(hours=ApplicationConfig.ACCESS_TOKEN_TTL_HOURS),
    )


def generate_refresh_token(payload: TokenPayload) -> str:
    """
    Generate JWT refresh token

    The signature expiry is an upper bound only; the session row's
    expires_at decides whether the token is still usable.
    """
    return _encode(
        payload,
        ApplicationConfig.JWT_REFRESH_SECRET,
        timedelta(days=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS),
    )


def verify_access_token(token: str) -> Optional[TokenPayload]:
    """Decoded payload or None if invalid"""
    return _decode(token, ApplicationConfig.JWT_ACCESS_SECRET)


def verify_refresh_token(token: str) -> Optional[TokenPayload]:
    """Decoded payload or None if invalid"""
    return _decode(token, ApplicationConfig.JWT_REFRESH_SECRET)
