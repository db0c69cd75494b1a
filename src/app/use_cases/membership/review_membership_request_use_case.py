"""
Review Membership Request Use Case

A moderator approves or rejects a pending writer-upgrade request.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.audit import audit_event
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import MembershipRequestStatus, UserRole
from src.libs.result import Error, Result, Return
from .dtos import MembershipRequestInfo

logger = logging.getLogger(__name__)

APPROVE = "approve"
REJECT = "reject"


class ReviewMembershipRequestUseCase:
    """
    Use case for reviewing a membership request.

    Business Rules:
    - Caller already holds moderate_users (checked by the route)
    - action is "approve" or "reject"
    - Only pending requests can be reviewed
    - Approval promotes a reader to writer; a user who is no longer a
      reader keeps their role
    - Reviewer and review time are recorded; rejection keeps the reason
    - Audited as membership.approve / membership.reject
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        reviewer_id: UUID,
        request_id: UUID,
        action: Optional[str],
        rejection_reason: Optional[str] = None,
        context: Optional[RequestContext] = None,
    ) -> Result[MembershipRequestInfo]:
        if action not in (APPROVE, REJECT):
            return Return.err(Error("VALIDATION_ERROR", "Invalid action"))

        async with self.uow:
            request = await self.uow.membership_requests.get_by_id(request_id)
            if request is None:
                return Return.err(Error("REQUEST_NOT_FOUND", "Request not found"))

            if request.status != MembershipRequestStatus.pending:
                return Return.err(
                    Error("ALREADY_PROCESSED", "Request has already been processed")
                )

            applicant = await self.uow.users.get_by_id(request.user_id)
            if applicant is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            now = utc_now()
            request.reviewed_by = reviewer_id
            request.reviewed_at = now

            metadata = {}
            if action == APPROVE:
                request.status = MembershipRequestStatus.approved
                if applicant.role == UserRole.reader:
                    metadata = {"from": applicant.role.value, "to": UserRole.writer.value}
                    applicant.role = UserRole.writer
                    applicant.updated_at = now
                    applicant = await self.uow.users.update(applicant)
            else:
                request.status = MembershipRequestStatus.rejected
                request.rejection_reason = (rejection_reason or "").strip() or None

            request = await self.uow.membership_requests.update(request)

            await self.uow.audit_events.create(
                audit_event(
                    f"membership.{action}",
                    context,
                    user_id=reviewer_id,
                    target_id=applicant.id,
                    target_type="user",
                    metadata={"request_id": str(request.id), **metadata},
                )
            )
            await self.uow.commit()

            logger.info(f"Membership request {request.id} {request.status.value}")
            return Return.ok(MembershipRequestInfo.from_entity(request, applicant))
