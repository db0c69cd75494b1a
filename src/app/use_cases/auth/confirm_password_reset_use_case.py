"""
Confirm Password Reset Use Case

Consumes a reset token and sets a new password.
"""

import logging

from src.app.services.audit import audit_event
from src.app.services.credentials import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse
from .request_password_reset_use_case import hash_reset_token
from .signup_use_case import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

RESET_LINK_INVALID = "This reset link is invalid, expired, or has already been used"


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is looked up by its SHA-256 hash
    - Unknown, used and expired tokens are distinct internal causes that
      share one external message
    - New password must be at least 8 characters
    - Password change and used_at are committed together; the token stays
      consumed even if deleting sessions fails afterwards
    - All of the user's sessions are deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def _reject(self, code: str) -> Result[MessageResponse]:
        logger.warning(f"Password reset rejected: {code}")
        return Return.err(Error(code, RESET_LINK_INVALID))

    async def execute(self, token: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute confirm password reset use case.

        Errors:
            - VALIDATION_ERROR: missing input or short password
            - INVALID_TOKEN: token not found
            - TOKEN_ALREADY_USED: token was consumed before
            - TOKEN_EXPIRED: token is past its expiry
        """
        if not token or not new_password:
            return Return.err(Error("VALIDATION_ERROR", "Token and new password are required"))

        if len(new_password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error("VALIDATION_ERROR", "Password must be at least 8 characters")
            )

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_by_token_hash(
                hash_reset_token(token)
            )
            if reset_token is None:
                return self._reject("INVALID_TOKEN")

            now = utc_now()
            if reset_token.used_at is not None:
                return self._reject("TOKEN_ALREADY_USED")

            if reset_token.expires_at <= now:
                return self._reject("TOKEN_EXPIRED")

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return self._reject("INVALID_TOKEN")

            user.password_hash = await hash_password(new_password)
            user.updated_at = now
            await self.uow.users.update(user)

            reset_token.used_at = now
            await self.uow.password_reset_tokens.update(reset_token)

            await self.uow.audit_events.create(
                audit_event(
                    "password.reset",
                    user_id=user.id,
                    target_id=user.id,
                    target_type="user",
                )
            )
            await self.uow.commit()

            removed = await self.uow.sessions.delete_all_by_user_id(user.id)
            await self.uow.commit()
            logger.info(f"Password reset completed; {removed} session(s) revoked")

        return Return.ok(MessageResponse(message="Password has been reset successfully"))
