from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import MembershipRequestInfo


class GetMembershipRequestUseCase:
    """One membership request with applicant details, for moderators."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, request_id: UUID) -> Result[MembershipRequestInfo]:
        async with self.uow:
            request = await self.uow.membership_requests.get_by_id(request_id)
            if request is None:
                return Return.err(Error("REQUEST_NOT_FOUND", "Request not found"))

            applicant = await self.uow.users.get_by_id(request.user_id)
            return Return.ok(MembershipRequestInfo.from_entity(request, applicant))
