from typing import Optional
from uuid import UUID

from src.api.utils.jwt import TokenPayload, generate_access_token, verify_access_token, verify_refresh_token
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import UserStatus
from src.libs.result import Error, Result, Return
from .dtos import CurrentUserResponse, UserProfile


class GetCurrentUserUseCase:
    """
    Use case behind GET /auth/me.

    Business Rules:
    - The access token cookie identifies the caller
    - When it is missing or invalid, a refresh token with a live session
      stands in and a new access token is minted for the cookie
    - The profile is read fresh from the database
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, context: RequestContext) -> Result[CurrentUserResponse]:
        payload: Optional[TokenPayload] = None
        new_access_token = None

        if context.access_token:
            payload = verify_access_token(context.access_token)

        async with self.uow:
            if payload is None and context.refresh_token:
                payload = await self._from_refresh_token(context.refresh_token)
                if payload is not None:
                    new_access_token = generate_access_token(payload)

            if payload is None:
                return Return.err(Error("NOT_AUTHENTICATED", "Not authenticated"))

            user = await self.uow.users.get_by_id(UUID(payload.user_id))
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.status != UserStatus.active:
                return Return.err(Error("ACCOUNT_INACTIVE", "Account is suspended or deleted"))

            return Return.ok(
                CurrentUserResponse(
                    user=UserProfile.from_user(user),
                    access_token=new_access_token,
                    refresh_token=context.refresh_token if new_access_token else None,
                )
            )

    async def _from_refresh_token(self, token: str) -> Optional[TokenPayload]:
        payload = verify_refresh_token(token)
        if payload is None:
            return None
        session = await self.uow.sessions.get_by_refresh_token(token)
        if session is None or session.expires_at <= utc_now():
            return None
        return payload
