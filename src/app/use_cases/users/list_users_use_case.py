import math
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole, UserStatus
from src.libs.result import Error, Result, Return
from src.app.use_cases.auth.dtos import UserProfile
from .dtos import Pagination, UserListResponse

MAX_PAGE_SIZE = 100


class ListUsersUseCase:
    """
    Paginated user listing for moderators.

    Business Rules:
    - Newest users first
    - Optional role and status filters
    - page starts at 1; limit is capped at 100
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        page: int = 1,
        limit: int = 20,
        role: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Result[UserListResponse]:
        if page < 1 or limit < 1:
            return Return.err(Error("VALIDATION_ERROR", "page and limit must be positive"))
        limit = min(limit, MAX_PAGE_SIZE)

        try:
            role_filter = UserRole(role) if role else None
            status_filter = UserStatus(status) if status else None
        except ValueError:
            return Return.err(Error("VALIDATION_ERROR", "Invalid role or status filter"))

        async with self.uow:
            users, total = await self.uow.users.list_paginated(
                page, limit, role=role_filter, status=status_filter
            )
            return Return.ok(
                UserListResponse(
                    users=[UserProfile.from_user(user) for user in users],
                    pagination=Pagination(
                        page=page,
                        limit=limit,
                        total=total,
                        totalPages=math.ceil(total / limit) if total else 0,
                    ),
                )
            )
