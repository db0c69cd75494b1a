from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import RateLimitWindow


class IRateLimitWindowRepository(ABC):
    """RateLimitWindow repository interface - application layer"""

    @abstractmethod
    async def get(
        self, identity: str, action: str, window_start: datetime
    ) -> Optional[RateLimitWindow]:
        """Get the counter row for one (identity, action, window)"""
        pass

    @abstractmethod
    async def create(self, window: RateLimitWindow) -> Optional[RateLimitWindow]:
        """Create a counter row, or return None when the window already exists.

        A None result means the pending transaction was rolled back.
        """
        pass

    @abstractmethod
    async def increment(self, window_id: UUID) -> None:
        """Add one to request_count"""
        pass

    @abstractmethod
    async def delete_before(self, action: str, window_start: datetime) -> int:
        """Delete counters of one action from earlier windows, return the count"""
        pass
