from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserProfile
from src.domain.entities import UserStatus
from src.libs.result import Error, Result, Return


class GetUserProfileUseCase:
    """Profile of an active user, looked up by id"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[UserProfile]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))
            if user.status != UserStatus.active:
                return Return.err(Error("ACCOUNT_INACTIVE", "Account is suspended or deleted"))
            return Return.ok(UserProfile.from_user(user))
