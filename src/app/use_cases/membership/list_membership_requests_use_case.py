import math

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.dtos import Pagination
from src.domain.entities import MembershipRequestStatus
from src.libs.result import Error, Result, Return
from .dtos import MembershipRequestInfo, MembershipRequestListResponse

MAX_PAGE_SIZE = 100


class ListMembershipRequestsUseCase:
    """
    Paginated membership requests for moderators.

    Business Rules:
    - Filtered by one status, pending by default
    - Newest first; limit is capped at 100
    - Each entry carries the applicant's username, display name and email
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, status: str = "pending", page: int = 1, limit: int = 20
    ) -> Result[MembershipRequestListResponse]:
        if page < 1 or limit < 1:
            return Return.err(Error("VALIDATION_ERROR", "page and limit must be positive"))
        limit = min(limit, MAX_PAGE_SIZE)

        try:
            status_filter = MembershipRequestStatus(status)
        except ValueError:
            return Return.err(Error("VALIDATION_ERROR", "Invalid status filter"))

        async with self.uow:
            requests, total = await self.uow.membership_requests.list_by_status(
                status_filter, page, limit
            )

            items = []
            for request in requests:
                applicant = await self.uow.users.get_by_id(request.user_id)
                items.append(MembershipRequestInfo.from_entity(request, applicant))

            return Return.ok(
                MembershipRequestListResponse(
                    requests=items,
                    pagination=Pagination(
                        page=page,
                        limit=limit,
                        total=total,
                        totalPages=math.ceil(total / limit) if total else 0,
                    ),
                )
            )
