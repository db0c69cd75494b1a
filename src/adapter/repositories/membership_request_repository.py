from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.membership_request_repository import IMembershipRequestRepository
from src.domain.entities import MembershipRequest, MembershipRequestStatus


class MembershipRequestRepository(IMembershipRequestRepository):
    """MembershipRequest repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, request: MembershipRequest) -> MembershipRequest:
        """Create a new membership request"""
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get_by_id(self, request_id: UUID) -> Optional[MembershipRequest]:
        """Get membership request by ID"""
        stmt = select(MembershipRequest).where(MembershipRequest.id == request_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_user_id(self, user_id: UUID) -> Optional[MembershipRequest]:
        """Get the user's pending request, if any"""
        stmt = select(MembershipRequest).where(
            MembershipRequest.user_id == user_id,
            MembershipRequest.status == MembershipRequestStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_latest_by_user_id(self, user_id: UUID) -> Optional[MembershipRequest]:
        """Get the user's most recent request of any status"""
        stmt = (
            select(MembershipRequest)
            .where(MembershipRequest.user_id == user_id)
            .order_by(MembershipRequest.created_at.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_by_status(
        self, status: MembershipRequestStatus, page: int, limit: int
    ) -> Tuple[List[MembershipRequest], int]:
        """List requests in one status, newest first, with a total count"""
        stmt = (
            select(MembershipRequest)
            .where(MembershipRequest.status == status)
            .order_by(MembershipRequest.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        count_stmt = (
            select(func.count())
            .select_from(MembershipRequest)
            .where(MembershipRequest.status == status)
        )
        result = await self.session.exec(stmt)
        requests = list(result.all())
        total = (await self.session.exec(count_stmt)).one()
        return requests, total

    async def update(self, request: MembershipRequest) -> MembershipRequest:
        """Update existing membership request"""
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request
