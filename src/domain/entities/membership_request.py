"""
MembershipRequest Entity

A reader's request to become a writer, reviewed by a moderator.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel, Text

from src.domain.base import utc_now
from .enums import MembershipRequestStatus


class MembershipRequest(SQLModel, table=True):
    """
    MembershipRequest entity.

    Business Rules:
    - Only readers may submit one
    - At most one pending request per user
    - Approval promotes the user to writer; rejection may carry a reason
    - Reviewed requests are never reopened
    """

    __tablename__ = "membership_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    writing_sample: str = Field(sa_column=Column(Text, nullable=False))
    portfolio_url: Optional[str] = Field(default=None, max_length=500)

    status: MembershipRequestStatus = Field(default=MembershipRequestStatus.pending)

    # Review
    reviewed_by: Optional[UUID] = Field(default=None)
    reviewed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_membership_request_status", "status"),)
