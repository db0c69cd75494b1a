"""
Request Writer Upgrade Use Case

A reader asks to become a writer.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.audit import audit_event
from src.app.services.background import BestEffortRunner, best_effort
from src.app.services.email_sender import IEmailSender
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import MembershipRequest, UserRole
from src.libs.result import Error, Result, Return
from .dtos import MembershipRequestInfo

logger = logging.getLogger(__name__)

MAX_PORTFOLIO_URL_LENGTH = 500


class RequestWriterUpgradeUseCase:
    """
    Use case for submitting a membership request.

    Business Rules:
    - Only readers can ask; writers and admins get ALREADY_WRITER
    - A user has at most one pending request
    - writing_sample (why they want to write) is required
    - Audited as membership.request
    - The super admin is notified best-effort after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        runner: BestEffortRunner = best_effort,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.runner = runner

    async def execute(
        self,
        user_id: UUID,
        writing_sample: Optional[str],
        portfolio_url: Optional[str] = None,
        context: Optional[RequestContext] = None,
    ) -> Result[MembershipRequestInfo]:
        portfolio_url = portfolio_url.strip() if portfolio_url else None
        if portfolio_url and len(portfolio_url) > MAX_PORTFOLIO_URL_LENGTH:
            return Return.err(
                Error("VALIDATION_ERROR", "Portfolio URL must be 500 characters or less")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.role != UserRole.reader:
                return Return.err(Error("ALREADY_WRITER", "Already a writer"))

            if await self.uow.membership_requests.get_pending_by_user_id(user.id):
                return Return.err(
                    Error("REQUEST_PENDING", "You already have a pending request")
                )

            if not writing_sample or not writing_sample.strip():
                return Return.err(
                    Error("VALIDATION_ERROR", "Please tell us why you want to become a writer")
                )
            writing_sample = writing_sample.strip()

            request = await self.uow.membership_requests.create(
                MembershipRequest(
                    user_id=user.id,
                    writing_sample=writing_sample,
                    portfolio_url=portfolio_url or None,
                )
            )

            await self.uow.audit_events.create(
                audit_event(
                    "membership.request",
                    context,
                    user_id=user.id,
                    target_id=request.id,
                    target_type="membership_request",
                )
            )
            await self.uow.commit()

            info = MembershipRequestInfo.from_entity(request, user)

        logger.info(f"Membership request submitted by {info.username}")
        self.runner.submit(
            self.email_sender.send_new_request_notification(
                info.display_name, info.username, info.email, writing_sample
            ),
            "membership request notification",
        )
        return Return.ok(info)
