from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ApiKey


class IApiKeyRepository(ABC):
    """ApiKey repository interface - application layer"""

    @abstractmethod
    async def create(self, api_key: ApiKey) -> ApiKey:
        """Create a new API key"""
        pass

    @abstractmethod
    async def get_by_id(self, key_id: UUID) -> Optional[ApiKey]:
        """Get API key by ID"""
        pass

    @abstractmethod
    async def get_by_hash(self, key_hash: str) -> Optional[ApiKey]:
        """Get API key by SHA-256 hash of the secret"""
        pass

    @abstractmethod
    async def list_by_user_id(self, user_id: UUID) -> List[ApiKey]:
        """List a user's keys, newest first"""
        pass

    @abstractmethod
    async def count_active_by_user_id(self, user_id: UUID) -> int:
        """Count a user's active keys"""
        pass

    @abstractmethod
    async def update(self, api_key: ApiKey) -> ApiKey:
        """Update existing API key"""
        pass

    @abstractmethod
    async def touch_last_used(self, key_id: UUID, used_at: datetime) -> None:
        """Set last_used_at without loading the row"""
        pass
