"""
AuditEvent Entity

Immutable log of authentication and administration events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utc_now


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity.

    Business Rules:
    - Immutable (never updated or deleted)
    - user_id is the actor; nullable for failed logins of unknown users
    - target_id/target_type name the affected record (user, api_key, ...)
    - Metadata stores additional context (email, reason, previous role, ...)
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    action: str = Field(max_length=100)  # e.g., "login.success", "api_key.create"
    user_id: Optional[UUID] = Field(default=None, index=True)
    target_id: Optional[str] = Field(default=None, max_length=64)
    target_type: Optional[str] = Field(default=None, max_length=50)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_action", "action"),
    )
