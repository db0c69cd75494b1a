from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID


class IApiKeyUsageRecorder(ABC):
    """Records when a key was last used, outside the request's transaction"""

    @abstractmethod
    async def record(self, key_id: UUID, used_at: datetime) -> None:
        pass
