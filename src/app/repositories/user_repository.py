from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import User, UserRole, UserStatus


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_email_or_username(self, identifier: str) -> Optional[User]:
        """Get user whose email or username matches the identifier"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def list_paginated(
        self,
        page: int,
        limit: int,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
    ) -> Tuple[List[User], int]:
        """List users newest first. Returns (users, total count)"""
        pass

    @abstractmethod
    async def list_active(self, roles: Optional[List[UserRole]] = None) -> List[User]:
        """List active users, optionally restricted to the given roles"""
        pass
