"""
RateLimitWindow Entity

Request counter for one (identity, action) pair in one fixed window.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class RateLimitWindow(SQLModel, table=True):
    """
    RateLimitWindow entity.

    identity is the API key id for action "api" and the client IP for
    "login" / "signup". window_start is aligned to multiples of the window
    size since the epoch. Rows are created lazily on the first request and
    at most one row exists per (identity, action, window_start).
    """

    __tablename__ = "rate_limit_windows"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identity: str = Field(max_length=255)
    action: str = Field(max_length=32)
    window_start: datetime = Field(sa_column=Column(DateTime, nullable=False))
    request_count: int = Field(default=0)

    __table_args__ = (
        Index(
            "idx_rate_limit_lookup", "identity", "action", "window_start", unique=True
        ),
    )
