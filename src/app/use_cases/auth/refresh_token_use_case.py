"""
Refresh Token Use Case

Rotates the refresh token held by a session.
"""

import logging
from datetime import timedelta

from config import ApplicationConfig
from src.api.utils.jwt import verify_refresh_token
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import UserStatus
from src.libs.result import Error, Result, Return
from ._tokens import issue_token_pair
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - Token must verify against the refresh secret
    - A session row must hold exactly this token; the row's expires_at
      governs, not the token's own expiry
    - Expired sessions and sessions of missing or inactive users are deleted
    - Rotation is a conditional update on the old token; when two requests
      race with the same token only one wins, the other sees "Session not found"
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: RequestContext) -> Result[RefreshTokenResponse]:
        presented = context.refresh_token
        if not presented:
            return Return.err(Error("NO_REFRESH_TOKEN", "No refresh token"))

        if verify_refresh_token(presented) is None:
            return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

        async with self.uow:
            session = await self.uow.sessions.get_by_refresh_token(presented)
            if session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            now = utc_now()
            if session.expires_at <= now:
                await self.uow.sessions.delete_by_id(session.id)
                await self.uow.commit()
                return Return.err(Error("SESSION_EXPIRED", "Session expired"))

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None or user.status != UserStatus.active:
                await self.uow.sessions.delete_by_id(session.id)
                await self.uow.commit()
                return Return.err(Error("USER_INACTIVE", "User not found or inactive"))

            access_token, refresh_token = issue_token_pair(user)

            rotated = await self.uow.sessions.rotate_refresh_token(
                session.id,
                presented,
                refresh_token,
                now + timedelta(days=ApplicationConfig.LOGIN_SESSION_TTL_DAYS),
            )
            if not rotated:
                logger.warning(f"Refresh token already rotated for session {session.id}")
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            await self.uow.commit()

            return Return.ok(
                RefreshTokenResponse(access_token=access_token, refresh_token=refresh_token)
            )
