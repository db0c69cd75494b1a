"""
Request Password Reset Use Case

Issues a single-use reset token and mails it.
"""

import hashlib
import logging
import secrets
from datetime import timedelta

from config import ApplicationConfig
from src.app.services.background import BestEffortRunner, best_effort
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import PasswordResetToken, UserStatus
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If an account exists with this email, a reset link has been sent."


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Always answers with the same message so accounts cannot be enumerated
    - Missing and non-active users get no token
    - Earlier unused tokens of the user are deleted first
    - Token is 256 random bits in hex; only its SHA-256 hash is stored
    - Expires after 1 hour
    - The email goes out after commit; delivery failure is logged only
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

    async def execute(self, email: str) -> Result[MessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email address of the account

        Returns:
            Result with the generic message, or a validation Error when no
            email was given
        """
        if not email or not email.strip():
            return Return.err(Error("VALIDATION_ERROR", "Email is required"))

        response = MessageResponse(message=RESET_REQUESTED_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None or user.status != UserStatus.active:
                logger.info("Password reset requested for unknown or inactive account")
                return Return.ok(response)

            await self.uow.password_reset_tokens.delete_unused_by_user_id(user.id)

            token = secrets.token_hex(32)
            await self.uow.password_reset_tokens.create(
                PasswordResetToken(
                    user_id=user.id,
                    token_hash=hash_reset_token(token),
                    expires_at=utc_now()
                    + timedelta(minutes=ApplicationConfig.PASSWORD_RESET_TTL_MINUTES),
                )
            )
            await self.uow.commit()

            recipient = user.email
            name = user.display_name or user.username

        self.runner.submit(
            self.email_sender.send_password_reset_email(recipient, name, token),
            "password reset email",
        )
        return Return.ok(response)
