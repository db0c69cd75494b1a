"""
Membership Request DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.app.use_cases.users.dtos import Pagination
from src.domain.entities import MembershipRequest, User


class MembershipRequestInfo(BaseModel):
    """A writer-upgrade request, with the applicant's public details when loaded."""

    id: str
    user_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    writing_sample: str
    portfolio_url: Optional[str] = None
    status: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(
        cls, request: MembershipRequest, applicant: Optional[User] = None
    ) -> "MembershipRequestInfo":
        return cls(
            id=str(request.id),
            user_id=str(request.user_id),
            username=applicant.username if applicant else None,
            display_name=applicant.display_name if applicant else None,
            email=applicant.email if applicant else None,
            writing_sample=request.writing_sample,
            portfolio_url=request.portfolio_url,
            status=request.status.value if hasattr(request.status, "value") else request.status,
            reviewed_by=str(request.reviewed_by) if request.reviewed_by else None,
            reviewed_at=request.reviewed_at,
            rejection_reason=request.rejection_reason,
            created_at=request.created_at,
        )


class MembershipRequestListResponse(BaseModel):
    requests: List[MembershipRequestInfo]
    pagination: Pagination
