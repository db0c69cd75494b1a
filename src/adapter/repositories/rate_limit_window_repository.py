import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.rate_limit_window_repository import IRateLimitWindowRepository
from src.domain.entities import RateLimitWindow

logger = logging.getLogger(__name__)


class RateLimitWindowRepository(IRateLimitWindowRepository):
    """RateLimitWindow repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(
        self, identity: str, action: str, window_start: datetime
    ) -> Optional[RateLimitWindow]:
        """Get the counter row for one (identity, action, window)"""
        stmt = select(RateLimitWindow).where(
            RateLimitWindow.identity == identity,
            RateLimitWindow.action == action,
            RateLimitWindow.window_start == window_start,
        ).execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, window: RateLimitWindow) -> Optional[RateLimitWindow]:
        """Create a counter row, None if a concurrent request created it first"""
        self.session.add(window)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            logger.info(f"Rate limit window for {window.action} already exists")
            return None
        await self.session.refresh(window)
        return window

    async def increment(self, window_id: UUID) -> None:
        """Increment in SQL so the stored count never goes backwards"""
        stmt = (
            update(RateLimitWindow)
            .where(RateLimitWindow.id == window_id)
            .values(request_count=RateLimitWindow.request_count + 1)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_before(self, action: str, window_start: datetime) -> int:
        """Delete counters of one action whose window started before window_start"""
        stmt = (
            delete(RateLimitWindow)
            .where(
                RateLimitWindow.action == action,
                RateLimitWindow.window_start < window_start,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
