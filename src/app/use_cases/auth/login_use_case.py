"""
Login Use Case

Authenticates by email or username and opens a session.
"""

import logging
from datetime import timedelta

from config import ApplicationConfig
from src.app.services.audit import audit_event
from src.app.services.credentials import burn_password_check, verify_password
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Session, UserStatus
from src.libs.result import Error, Result, Return
from ._tokens import issue_token_pair
from .dtos import AuthResponse, UserProfile

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid credentials")


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Unknown user and wrong password answer identically; a dummy hash
      check keeps the timing similar
    - The password is checked before the account status, so only the
      account holder learns the account is suspended
    - Every attempt is audited (login.success / login.failed with reason)
    - Creates a session with a 7-day expiry and updates last_login_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identifier: str, password: str, context: RequestContext
    ) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            identifier: Email or username
            password: Plain text password
            context: Caller IP and user agent

        Returns:
            Result with AuthResponse, or Error
        """
        if not identifier or not password:
            return Return.err(Error("VALIDATION_ERROR", "Email and password are required"))

        async with self.uow:
            user = await self.uow.users.get_by_email_or_username(identifier)

            if user is None:
                await burn_password_check(password)
                await self._record_failure(identifier, "user_not_found", context)
                return Return.err(INVALID_CREDENTIALS)

            if not await verify_password(password, user.password_hash):
                await self._record_failure(user.email, "invalid_password", context, user.id)
                return Return.err(INVALID_CREDENTIALS)

            if user.status != UserStatus.active:
                await self._record_failure(user.email, "account_suspended", context, user.id)
                return Return.err(Error("ACCOUNT_INACTIVE", "Account is suspended or deleted"))

            access_token, refresh_token = issue_token_pair(user)

            await self.uow.sessions.create(
                Session(
                    user_id=user.id,
                    refresh_token=refresh_token,
                    expires_at=utc_now() + timedelta(days=ApplicationConfig.LOGIN_SESSION_TTL_DAYS),
                    user_agent=context.user_agent,
                    ip_address=context.ip_address,
                )
            )

            user.last_login_at = utc_now()
            user = await self.uow.users.update(user)

            await self.uow.audit_events.create(
                audit_event("login.success", context, user_id=user.id, metadata={"email": user.email})
            )
            await self.uow.commit()

            return Return.ok(
                AuthResponse(
                    user=UserProfile.from_user(user),
                    access_token=access_token,
                    refresh_token=refresh_token,
                )
            )

    async def _record_failure(self, email: str, reason: str, context: RequestContext, user_id=None):
        logger.info(f"Login failed: {reason}")
        await self.uow.audit_events.create(
            audit_event(
                "login.failed",
                context,
                user_id=user_id,
                metadata={"email": email, "reason": reason},
            )
        )
        await self.uow.commit()
