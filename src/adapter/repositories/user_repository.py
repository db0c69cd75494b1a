from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User, UserRole, UserStatus


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        stmt = select(User).where(User.username == username.strip().lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email_or_username(self, identifier: str) -> Optional[User]:
        """Get user whose email or username matches the identifier"""
        value = identifier.strip().lower()
        stmt = select(User).where(or_(User.email == value, User.username == value))
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def list_paginated(
        self,
        page: int,
        limit: int,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
    ) -> Tuple[List[User], int]:
        """List users newest first with a total count for pagination"""
        stmt = select(User)
        count_stmt = select(func.count()).select_from(User)
        if role is not None:
            stmt = stmt.where(User.role == role)
            count_stmt = count_stmt.where(User.role == role)
        if status is not None:
            stmt = stmt.where(User.status == status)
            count_stmt = count_stmt.where(User.status == status)

        stmt = stmt.order_by(User.created_at.desc()).offset((page - 1) * limit).limit(limit)

        result = await self.session.exec(stmt)
        users = list(result.all())
        total = (await self.session.exec(count_stmt)).one()
        return users, total

    async def list_active(self, roles: Optional[List[UserRole]] = None) -> List[User]:
        """List active users, optionally restricted to the given roles"""
        stmt = select(User).where(User.status == UserStatus.active)
        if roles:
            stmt = stmt.where(User.role.in_(roles))
        stmt = stmt.order_by(User.created_at)
        result = await self.session.exec(stmt)
        return list(result.all())
