from src.app.services.api_key_usage import IApiKeyUsageRecorder
from src.app.services.api_keys import has_api_key_format, hash_api_key
from src.app.services.background import BestEffortRunner, best_effort
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import ApiKeyStatus
from src.libs.result import Error, Result, Return
from .dtos import ValidatedApiKey


class ValidateApiKeyUseCase:
    """
    Validate API Key Use Case

    Business Rules:
    - Keys without the ink_ marker are rejected before touching the database
    - Lookup is by SHA-256 hash, never by plaintext
    - Revoked and expired keys are rejected
    - last_used_at is updated best-effort, outside this request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        usage_recorder: IApiKeyUsageRecorder,
        runner: BestEffortRunner = best_effort,
    ):
        self.uow = uow
        self.usage_recorder = usage_recorder
        self.runner = runner

    async def execute(self, presented_key: str) -> Result[ValidatedApiKey]:
        if not has_api_key_format(presented_key):
            return Return.err(Error("INVALID_API_KEY_FORMAT", "Invalid API key format"))

        async with self.uow:
            api_key = await self.uow.api_keys.get_by_hash(hash_api_key(presented_key))
            if api_key is None:
                return Return.err(Error("INVALID_API_KEY", "Invalid API key"))

            if api_key.status != ApiKeyStatus.active:
                return Return.err(Error("API_KEY_REVOKED", "API key has been revoked"))

            now = utc_now()
            if api_key.expires_at is not None and api_key.expires_at <= now:
                return Return.err(Error("API_KEY_EXPIRED", "API key has expired"))

            validated = ValidatedApiKey(user_id=str(api_key.user_id), key_id=str(api_key.id))
            key_id = api_key.id

        self.runner.submit(self.usage_recorder.record(key_id, now), "api key last_used_at")
        return Return.ok(validated)
