from datetime import datetime
from typing import Callable
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.api_key_usage import IApiKeyUsageRecorder


class ApiKeyUsageRecorder(IApiKeyUsageRecorder):
    """Opens its own session so a late write never touches the request's session"""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def record(self, key_id: UUID, used_at: datetime) -> None:
        async with self.session_factory() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                await uow.api_keys.touch_last_used(key_id, used_at)
                await uow.commit()
