from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.jwt import TokenPayload
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.api_keys import CreateApiKeyUseCase, ListApiKeysUseCase, RevokeApiKeyUseCase
from src.depends import get_current_user, get_request_context, get_unit_of_work

router = APIRouter(prefix="/api-keys", tags=["API Keys"])


@router.get("", status_code=status.HTTP_200_OK)
async def list_api_keys(
    current_user: TokenPayload = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the caller's API keys (metadata only)"""
    result = await ListApiKeysUseCase(uow).execute(UUID(current_user.user_id))
    if result.is_err():
        raise ServerError(result.error)
    return {"success": True, "data": result.value}


class CreateApiKeyRequest(BaseModel):
    """Create API key HTTP request payload"""

    name: Optional[str] = Field(None, description="Label for the key (max 100 chars)")
    expires_in_days: Optional[int] = Field(None, description="Lifetime in days; omit for no expiry")


@router.post("", status_code=status.HTTP_200_OK)
async def create_api_key(
    request: CreateApiKeyRequest,
    current_user: TokenPayload = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """
    Create API Key

    The secret is in this response only; store it now.

    Raises:
        - 400 Bad Request: Invalid name/expiry or the active key limit is reached
        - 401 Unauthorized: Not authenticated
    """
    result = await CreateApiKeyUseCase(uow).execute(
        UUID(current_user.user_id), request.name, request.expires_in_days, context
    )

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "API_KEY_LIMIT_REACHED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return {"success": True, "data": result.value}


@router.delete("/{key_id}", status_code=status.HTTP_200_OK)
async def revoke_api_key(
    key_id: UUID,
    current_user: TokenPayload = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """
    Revoke API Key

    Raises:
        - 401 Unauthorized: Not authenticated
        - 404 Not Found: No such key for this caller
    """
    result = await RevokeApiKeyUseCase(uow).execute(key_id, UUID(current_user.user_id), context)

    if result.is_err():
        error = result.error
        if error.code in ("API_KEY_NOT_FOUND", "API_KEY_FORBIDDEN"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return {"success": True, "message": "API key revoked"}
