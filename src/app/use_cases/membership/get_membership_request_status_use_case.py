from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import MembershipRequestInfo


class GetMembershipRequestStatusUseCase:
    """The caller's most recent membership request, or None when they never asked."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[Optional[MembershipRequestInfo]]:
        async with self.uow:
            request = await self.uow.membership_requests.get_latest_by_user_id(user_id)
            if request is None:
                return Return.ok(None)
            return Return.ok(MembershipRequestInfo.from_entity(request))
