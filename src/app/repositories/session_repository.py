from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_refresh_token(self, refresh_token: str) -> Optional[Session]:
        """Find session by exact refresh token value"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def rotate_refresh_token(
        self,
        session_id: UUID,
        old_refresh_token: str,
        new_refresh_token: str,
        expires_at: datetime,
    ) -> bool:
        """
        Replace the refresh token of a session only if it still holds
        old_refresh_token. Returns False when another request rotated it first.
        """
        pass

    @abstractmethod
    async def delete_by_id(self, session_id: UUID) -> bool:
        """Delete a session. Returns True if a row was deleted."""
        pass

    @abstractmethod
    async def delete_by_refresh_token(self, refresh_token: str) -> int:
        """Delete the session holding this refresh token. Returns count."""
        pass

    @abstractmethod
    async def delete_all_by_user_id(self, user_id: UUID) -> int:
        """Delete all sessions for a user. Returns count of deleted sessions."""
        pass
