from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.api_key_repository import IApiKeyRepository
from src.domain.entities import ApiKey, ApiKeyStatus


class ApiKeyRepository(IApiKeyRepository):
    """ApiKey repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, api_key: ApiKey) -> ApiKey:
        """Create a new API key"""
        self.session.add(api_key)
        await self.session.flush()
        await self.session.refresh(api_key)
        return api_key

    async def get_by_id(self, key_id: UUID) -> Optional[ApiKey]:
        """Get API key by ID"""
        stmt = select(ApiKey).where(ApiKey.id == key_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_hash(self, key_hash: str) -> Optional[ApiKey]:
        """Get API key by hash"""
        stmt = select(ApiKey).where(ApiKey.key_hash == key_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_user_id(self, user_id: UUID) -> List[ApiKey]:
        """List a user's keys, newest first"""
        stmt = (
            select(ApiKey)
            .where(ApiKey.user_id == user_id)
            .order_by(ApiKey.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_active_by_user_id(self, user_id: UUID) -> int:
        """Count a user's active keys"""
        stmt = select(func.count()).select_from(ApiKey).where(
            ApiKey.user_id == user_id, ApiKey.status == ApiKeyStatus.active
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def update(self, api_key: ApiKey) -> ApiKey:
        """Update existing API key"""
        self.session.add(api_key)
        await self.session.flush()
        await self.session.refresh(api_key)
        return api_key

    async def touch_last_used(self, key_id: UUID, used_at: datetime) -> None:
        """Set last_used_at without loading the row"""
        stmt = (
            update(ApiKey)
            .where(ApiKey.id == key_id)
            .values(last_used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()
