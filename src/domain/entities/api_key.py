"""
ApiKey Entity

Long-lived bearer credentials for programmatic access.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now
from .enums import ApiKeyStatus


class ApiKey(SQLModel, table=True):
    """
    ApiKey entity.

    Business Rules:
    - Only the SHA-256 hash of the key is stored; the secret is shown once
    - key_prefix is a display-only truncation ("ink_xxxxxxxx...")
    - A user may hold at most 5 active keys
    - Revocation is a soft delete (status=revoked)
    """

    __tablename__ = "api_keys"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    name: str = Field(max_length=100)
    key_hash: str = Field(unique=True, index=True, max_length=64)
    key_prefix: str = Field(max_length=16)

    status: ApiKeyStatus = Field(default=ApiKeyStatus.active)

    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_api_key_user_status", "user_id", "status"),)
