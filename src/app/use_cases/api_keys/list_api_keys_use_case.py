from typing import List
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import ApiKeyInfo


class ListApiKeysUseCase:
    """A user's keys, newest first, metadata only"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[ApiKeyInfo]]:
        async with self.uow:
            keys = await self.uow.api_keys.list_by_user_id(user_id)
            return Return.ok([ApiKeyInfo.from_entity(key) for key in keys])
