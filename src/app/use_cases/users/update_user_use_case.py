"""
Update User Use Case

Admin moderation of another user's role and status.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.audit import audit_event
from src.app.services.authorization import is_super_admin
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserProfile
from src.domain.base import utc_now
from src.domain.entities import UserRole, UserStatus
from src.libs.result import Error, Result, Return
from .dtos import UpdateUserCommand

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """
    Use case for changing a user's role and/or status.

    Business Rules:
    - Caller already holds moderate_users (checked by the route)
    - Granting super_admin, or editing a super_admin, needs super_admin
    - Callers cannot change their own role or status
    - Each change is audited (user.role_change / user.status_change)
    - Leaving active status deletes all of the user's sessions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        actor_role: str,
        target_user_id: UUID,
        command: UpdateUserCommand,
        context: Optional[RequestContext] = None,
    ) -> Result[UserProfile]:
        if command.role is None and command.status is None:
            return Return.err(Error("VALIDATION_ERROR", "Nothing to update"))

        try:
            new_role = UserRole(command.role) if command.role is not None else None
            new_status = UserStatus(command.status) if command.status is not None else None
        except ValueError:
            return Return.err(Error("VALIDATION_ERROR", "Invalid role or status"))

        if actor_id == target_user_id:
            return Return.err(
                Error("CANNOT_MODIFY_SELF", "You cannot change your own role or status")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(target_user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not is_super_admin(actor_role) and (
                new_role == UserRole.super_admin or user.role == UserRole.super_admin
            ):
                return Return.err(Error("ACCESS_DENIED", "Access denied"))

            if new_role is not None and new_role != user.role:
                await self.uow.audit_events.create(
                    audit_event(
                        "user.role_change",
                        context,
                        user_id=actor_id,
                        target_id=user.id,
                        target_type="user",
                        metadata={"from": user.role.value, "to": new_role.value},
                    )
                )
                user.role = new_role

            leaving_active = False
            if new_status is not None and new_status != user.status:
                await self.uow.audit_events.create(
                    audit_event(
                        "user.status_change",
                        context,
                        user_id=actor_id,
                        target_id=user.id,
                        target_type="user",
                        metadata={"from": user.status.value, "to": new_status.value},
                    )
                )
                leaving_active = user.status == UserStatus.active
                user.status = new_status

            user.updated_at = utc_now()
            user = await self.uow.users.update(user)

            if leaving_active:
                removed = await self.uow.sessions.delete_all_by_user_id(user.id)
                logger.info(f"User {user.id} deactivated; {removed} session(s) revoked")

            await self.uow.commit()
            return Return.ok(UserProfile.from_user(user))
