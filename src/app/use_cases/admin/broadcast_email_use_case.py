"""
Broadcast Email Use Case

Sends an admin-authored email to active users, one message at a time.
"""

import asyncio
import logging
from typing import List, Optional

from pydantic import BaseModel

from config import ApplicationConfig
from src.app.services.email_sender import EmailDeliveryError, IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class BroadcastEmailResponse(BaseModel):
    sent: int
    failed: int
    total: int


class BroadcastEmailUseCase:
    """
    Use case for bulk email.

    Business Rules:
    - Subject and HTML body are required
    - Recipients are active users, optionally limited to some roles
    - Messages go out sequentially with a fixed delay between them to
      stay under the provider's rate limit
    - A failed recipient is counted and the batch continues
    """

    def __init__(self, uow: UnitOfWork, email_sender: IEmailSender, delay_ms: Optional[int] = None):
        self.uow = uow
        self.email_sender = email_sender
        self.delay_ms = ApplicationConfig.BULK_EMAIL_DELAY_MS if delay_ms is None else delay_ms

    async def execute(
        self, subject: str, html: str, roles: Optional[List[str]] = None
    ) -> Result[BroadcastEmailResponse]:
        if not subject or not subject.strip():
            return Return.err(Error("VALIDATION_ERROR", "Subject is required"))
        if not html or not html.strip():
            return Return.err(Error("VALIDATION_ERROR", "Message body is required"))

        try:
            role_filter = [UserRole(role) for role in roles] if roles else None
        except ValueError:
            return Return.err(Error("VALIDATION_ERROR", "Invalid role filter"))

        async with self.uow:
            users = await self.uow.users.list_active(role_filter)
            recipients = [user.email for user in users]

        if not recipients:
            return Return.err(Error("NO_RECIPIENTS", "No recipients found"))

        sent = failed = 0
        for index, recipient in enumerate(recipients):
            if index and self.delay_ms:
                await asyncio.sleep(self.delay_ms / 1000)
            try:
                await self.email_sender.send_email(recipient, subject, html)
                sent += 1
            except EmailDeliveryError as e:
                failed += 1
                logger.warning(f"Broadcast delivery failed for one recipient: {e}")

        logger.info(f"Broadcast finished: {sent} sent, {failed} failed")
        return Return.ok(BroadcastEmailResponse(sent=sent, failed=failed, total=len(recipients)))
