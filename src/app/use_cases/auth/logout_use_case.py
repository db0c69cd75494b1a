import logging
from typing import Optional

from src.api.utils.jwt import verify_refresh_token
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logout.

    Deletes the session behind a still-verifying refresh token. Backend
    failures are logged and never reach the caller: the route clears the
    cookies whatever happens here. uow is None when no datastore is
    configured; the delete is then skipped.
    """

    def __init__(self, uow: Optional[UnitOfWork]):
        self.uow = uow

    async def execute(self, context: RequestContext) -> Result[None]:
        token = context.refresh_token
        if not token or verify_refresh_token(token) is None:
            return Return.ok(None)

        if self.uow is None:
            logger.warning("Datastore not configured, logout skips the session delete")
            return Return.ok(None)

        try:
            async with self.uow:
                await self.uow.sessions.delete_by_refresh_token(token)
                await self.uow.commit()
        except Exception:
            logger.exception("Logout could not delete the session")

        return Return.ok(None)
