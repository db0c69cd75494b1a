import logging
from typing import Optional
from uuid import UUID

from src.app.services.audit import audit_event
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import ApiKeyStatus
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class RevokeApiKeyUseCase:
    """
    Revoke API Key Use Case

    Business Rules:
    - Soft delete: status becomes revoked, the row stays
    - Only the owner may revoke; API_KEY_FORBIDDEN is kept distinct from
      API_KEY_NOT_FOUND internally, the route answers both the same way
    - Audited as api_key.revoke
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, key_id: UUID, requesting_user_id: UUID, context: Optional[RequestContext] = None
    ) -> Result[None]:
        async with self.uow:
            api_key = await self.uow.api_keys.get_by_id(key_id)
            if api_key is None:
                return Return.err(Error("API_KEY_NOT_FOUND", "API key not found"))

            if api_key.user_id != requesting_user_id:
                logger.warning(f"User {requesting_user_id} tried to revoke key {key_id} they do not own")
                return Return.err(Error("API_KEY_FORBIDDEN", "API key not found"))

            api_key.status = ApiKeyStatus.revoked
            api_key.updated_at = utc_now()
            await self.uow.api_keys.update(api_key)

            await self.uow.audit_events.create(
                audit_event(
                    "api_key.revoke",
                    context,
                    user_id=requesting_user_id,
                    target_id=key_id,
                    target_type="api_key",
                    metadata={"name": api_key.name},
                )
            )
            await self.uow.commit()

        return Return.ok(None)
