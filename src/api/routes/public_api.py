from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Response, status

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.rate_limit import enforce_rate_limit
from src.app.services.api_key_usage import IApiKeyUsageRecorder
from src.app.services.api_keys import extract_bearer_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.api_keys import ValidateApiKeyUseCase
from src.app.use_cases.users import GetUserProfileUseCase
from src.depends import get_api_key_usage_recorder, get_unit_of_work
from src.libs.result import Error

router = APIRouter(prefix="/v1", tags=["Public API"])


@router.get("/me", status_code=status.HTTP_200_OK)
async def api_me(
    response: Response,
    authorization: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    usage_recorder: IApiKeyUsageRecorder = Depends(get_api_key_usage_recorder),
):
    """
    Key Owner Profile

    Authenticated with "Authorization: Bearer ink_..." and limited per key.
    Every response after the key is accepted carries X-RateLimit-* headers.

    Raises:
        - 401 Unauthorized: Missing header or invalid, revoked or expired key
        - 403 Forbidden: Key owner no longer active
        - 404 Not Found: Key owner no longer exists
        - 429 Too Many Requests: Per-key rate limit
    """
    key = extract_bearer_key(authorization)
    if key is None:
        raise ClientError(
            Error(
                "MISSING_API_KEY",
                "Missing or invalid Authorization header. Use: Bearer <api_key>",
            ),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    validation = await ValidateApiKeyUseCase(uow, usage_recorder).execute(key)
    if validation.is_err():
        raise ClientError(validation.error, status_code=status.HTTP_401_UNAUTHORIZED)

    rate_limit = await enforce_rate_limit(
        uow,
        validation.value.key_id,
        "api",
        ApplicationConfig.API_RATE_LIMIT,
        ApplicationConfig.API_RATE_WINDOW_SECONDS,
        "Rate limit exceeded",
    )
    headers = rate_limit.headers()

    result = await GetUserProfileUseCase(uow).execute(UUID(validation.value.user_id))
    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND, headers=headers)
        elif error.code == "ACCOUNT_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN, headers=headers)
        raise ServerError(error)

    response.headers.update(headers)
    return {"success": True, "data": result.value}
