"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """
    Signup command - raw signup intent

    Fields are optional here so the use case can answer with its own
    validation messages.
    """

    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    display_name: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserProfile(BaseModel):
    """Public view of a user. Never carries the password hash."""

    id: str
    email: str
    username: str
    display_name: str
    role: str
    status: str
    created_at: datetime
    updated_at: datetime
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=str(user.id),
            email=user.email,
            username=user.username,
            display_name=user.display_name,
            role=user.role.value if hasattr(user.role, "value") else user.role,
            status=user.status.value if hasattr(user.status, "value") else user.status,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login_at=user.last_login_at,
        )


class AuthResponse(BaseModel):
    """Signup/login output: the profile plus both tokens for the cookies"""

    user: UserProfile
    access_token: str
    refresh_token: str


class RefreshTokenResponse(BaseModel):
    """Rotated token pair"""

    access_token: str
    refresh_token: str


class CurrentUserResponse(BaseModel):
    """
    Current user lookup

    access_token is set only when the access cookie was missing or invalid
    and a still-valid refresh token was used to mint a new one.
    """

    user: UserProfile
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class MessageResponse(BaseModel):
    """Generic message response"""

    message: str
