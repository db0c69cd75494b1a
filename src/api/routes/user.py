from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.jwt import TokenPayload
from src.app.services.authorization import Capability
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ChangePasswordUseCase
from src.app.use_cases.users import ListUsersUseCase, UpdateUserCommand, UpdateUserUseCase
from src.depends import get_current_user, get_request_context, get_unit_of_work, require_capability

router = APIRouter(prefix="/users", tags=["User"])


class ChangePasswordRequest(BaseModel):
    """Change password HTTP request payload"""

    current_password: Optional[str] = Field(None, description="Current password")
    new_password: Optional[str] = Field(None, description="New password (min 8 chars)")


@router.post("/change-password", status_code=status.HTTP_200_OK)
async def change_password(
    request: ChangePasswordRequest,
    current_user: TokenPayload = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """
    Change Password

    Raises:
        - 400 Bad Request: Invalid input or wrong current password
        - 401 Unauthorized: Not authenticated
        - 404 Not Found: User no longer exists
    """
    result = await ChangePasswordUseCase(uow).execute(
        UUID(current_user.user_id), request.current_password, request.new_password, context
    )

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return {"success": True, "message": result.value.message}


@router.get("", status_code=status.HTTP_200_OK)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    role: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    current_user: TokenPayload = Depends(require_capability(Capability.moderate_users)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Users (admin, super_admin)

    Raises:
        - 400 Bad Request: Invalid filter
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Access denied
    """
    result = await ListUsersUseCase(uow).execute(page, limit, role, status_filter)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return {
        "success": True,
        "data": result.value.users,
        "pagination": result.value.pagination,
    }


class UpdateUserRequest(BaseModel):
    """Role and/or status change"""

    role: Optional[str] = Field(None, description="reader, writer, admin or super_admin")
    status: Optional[str] = Field(None, description="active, suspended or deleted")


@router.patch("/{user_id}", status_code=status.HTTP_200_OK)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    current_user: TokenPayload = Depends(require_capability(Capability.moderate_users)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """
    Update User Role / Status (admin, super_admin)

    Raises:
        - 400 Bad Request: Invalid role/status or self-modification
        - 403 Forbidden: super_admin involved and caller is not super_admin
        - 404 Not Found: User not found
    """
    result = await UpdateUserUseCase(uow).execute(
        UUID(current_user.user_id),
        current_user.role,
        user_id,
        UpdateUserCommand(role=request.role, status=request.status),
        context,
    )

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "CANNOT_MODIFY_SELF"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "ACCESS_DENIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return {"success": True, "data": result.value}
