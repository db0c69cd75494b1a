"""
Session Entity

Server-side record that makes a refresh token revocable.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from src.domain.base import utc_now


class Session(SQLModel, table=True):
    """
    Session entity - binds one issued refresh token to a user.

    Business Rules:
    - refresh_token holds the exact signed token string (unique)
    - Tokens rotate in place on each refresh
    - expires_at is checked at lookup time; expired rows are deleted on use
    - Deleted on logout, on password reset (all rows for the user)
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    refresh_token: str = Field(sa_column=Column(Text, unique=True, nullable=False))

    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)
