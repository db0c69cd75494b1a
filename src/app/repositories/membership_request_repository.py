from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import MembershipRequest, MembershipRequestStatus


class IMembershipRequestRepository(ABC):
    """MembershipRequest repository interface - application layer"""

    @abstractmethod
    async def create(self, request: MembershipRequest) -> MembershipRequest:
        """Create a new membership request"""
        pass

    @abstractmethod
    async def get_by_id(self, request_id: UUID) -> Optional[MembershipRequest]:
        """Get membership request by ID"""
        pass

    @abstractmethod
    async def get_pending_by_user_id(self, user_id: UUID) -> Optional[MembershipRequest]:
        """Get the user's pending request, if any"""
        pass

    @abstractmethod
    async def get_latest_by_user_id(self, user_id: UUID) -> Optional[MembershipRequest]:
        """Get the user's most recent request of any status"""
        pass

    @abstractmethod
    async def list_by_status(
        self, status: MembershipRequestStatus, page: int, limit: int
    ) -> Tuple[List[MembershipRequest], int]:
        """List requests in one status, newest first. Returns (requests, total count)"""
        pass

    @abstractmethod
    async def update(self, request: MembershipRequest) -> MembershipRequest:
        """Update existing membership request"""
        pass
