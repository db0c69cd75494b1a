from uuid import UUID

from src.app.services.audit import audit_event
from src.app.services.credentials import hash_password, verify_password
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.libs.result import Error, Result, Return
from .dtos import MessageResponse
from .signup_use_case import MIN_PASSWORD_LENGTH


class ChangePasswordUseCase:
    """Authenticated password change; the current password must verify."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        current_password: str,
        new_password: str,
        context: RequestContext = None,
    ) -> Result[MessageResponse]:
        if not current_password or not new_password:
            return Return.err(
                Error("VALIDATION_ERROR", "Current password and new password are required")
            )
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error("VALIDATION_ERROR", "New password must be at least 8 characters")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not await verify_password(current_password, user.password_hash):
                return Return.err(Error("INVALID_PASSWORD", "Current password is incorrect"))

            user.password_hash = await hash_password(new_password)
            user.updated_at = utc_now()
            await self.uow.users.update(user)

            await self.uow.audit_events.create(
                audit_event("password.change", context, user_id=user.id, target_id=user.id, target_type="user")
            )
            await self.uow.commit()

        return Return.ok(MessageResponse(message="Password changed successfully"))
