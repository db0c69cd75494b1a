from datetime import timedelta
from typing import Optional
from uuid import UUID

from config import ApplicationConfig
from src.app.services.api_keys import generate_api_key
from src.app.services.audit import audit_event
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import ApiKey
from src.libs.result import Error, Result, Return
from .dtos import ApiKeyWithSecret

MAX_NAME_LENGTH = 100


class CreateApiKeyUseCase:
    """
    Create API Key Use Case

    Business Rules:
    - Name is required, at most 100 characters
    - expires_in_days, when given, must be a positive whole number
    - A user may hold at most MAX_ACTIVE_API_KEYS active keys
    - Only the SHA-256 hash and a display prefix are stored
    - The secret is returned in this response only
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        name: Optional[str],
        expires_in_days: Optional[int] = None,
        context: Optional[RequestContext] = None,
    ) -> Result[ApiKeyWithSecret]:
        if not name or not name.strip():
            return Return.err(Error("VALIDATION_ERROR", "Key name is required"))

        name = name.strip()
        if len(name) > MAX_NAME_LENGTH:
            return Return.err(
                Error("VALIDATION_ERROR", "Key name must be 100 characters or less")
            )

        if expires_in_days is not None and expires_in_days <= 0:
            return Return.err(
                Error("VALIDATION_ERROR", "expires_in_days must be a positive number")
            )

        async with self.uow:
            max_keys = ApplicationConfig.MAX_ACTIVE_API_KEYS
            active = await self.uow.api_keys.count_active_by_user_id(user_id)
            if active >= max_keys:
                return Return.err(
                    Error(
                        "API_KEY_LIMIT_REACHED",
                        f"Maximum of {max_keys} active API keys allowed",
                    )
                )

            generated = generate_api_key()
            expires_at = None
            if expires_in_days is not None:
                expires_at = utc_now() + timedelta(days=expires_in_days)

            api_key = await self.uow.api_keys.create(
                ApiKey(
                    user_id=user_id,
                    name=name,
                    key_hash=generated.hash,
                    key_prefix=generated.prefix,
                    expires_at=expires_at,
                )
            )

            await self.uow.audit_events.create(
                audit_event(
                    "api_key.create",
                    context,
                    user_id=user_id,
                    target_id=api_key.id,
                    target_type="api_key",
                    metadata={"name": name},
                )
            )
            await self.uow.commit()

            info = ApiKeyWithSecret(
                **ApiKeyWithSecret.from_entity(api_key).model_dump(exclude={"secret"}),
                secret=generated.key,
            )

        return Return.ok(info)
