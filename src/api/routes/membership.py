from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.jwt import TokenPayload
from src.app.services.authorization import Capability
from src.app.services.email_sender import IEmailSender
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.membership import (
    GetMembershipRequestStatusUseCase,
    GetMembershipRequestUseCase,
    ListMembershipRequestsUseCase,
    RequestWriterUpgradeUseCase,
    ReviewMembershipRequestUseCase,
)
from src.depends import (
    get_current_user,
    get_email_sender,
    get_request_context,
    get_unit_of_work,
    require_capability,
)

router = APIRouter(prefix="/membership", tags=["Membership"])


class UpgradeRequest(BaseModel):
    """Writer upgrade HTTP request payload"""

    writing_sample: Optional[str] = Field(None, description="Why the reader wants to write")
    portfolio_url: Optional[str] = Field(None, description="Link to earlier writing")


@router.post("/upgrade", status_code=status.HTTP_200_OK)
async def request_upgrade(
    request: UpgradeRequest,
    current_user: TokenPayload = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    context: RequestContext = Depends(get_request_context),
):
    """
    Request Writer Upgrade

    Raises:
        - 400 Bad Request: Not a reader, request already pending, or no writing sample
        - 401 Unauthorized: Not authenticated
        - 404 Not Found: User no longer exists
    """
    result = await RequestWriterUpgradeUseCase(uow, email_sender).execute(
        UUID(current_user.user_id), request.writing_sample, request.portfolio_url, context
    )

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "ALREADY_WRITER", "REQUEST_PENDING"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return {"success": True, "data": result.value, "message": "Request submitted successfully"}


@router.get("/request/status", status_code=status.HTTP_200_OK)
async def request_status(
    current_user: TokenPayload = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """The caller's latest membership request; data is null when there is none"""
    result = await GetMembershipRequestStatusUseCase(uow).execute(UUID(current_user.user_id))
    if result.is_err():
        raise ServerError(result.error)
    return {"success": True, "data": result.value}


@router.get("/requests", status_code=status.HTTP_200_OK)
async def list_requests(
    status_filter: str = Query("pending", alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    current_user: TokenPayload = Depends(require_capability(Capability.moderate_users)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Membership Requests (admin, super_admin)

    Raises:
        - 400 Bad Request: Invalid status filter
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Access denied
    """
    result = await ListMembershipRequestsUseCase(uow).execute(status_filter, page, limit)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return {
        "success": True,
        "data": result.value.requests,
        "pagination": result.value.pagination,
    }


@router.get("/{request_id}", status_code=status.HTTP_200_OK)
async def get_request(
    request_id: UUID,
    current_user: TokenPayload = Depends(require_capability(Capability.moderate_users)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Membership Request Detail (admin, super_admin)

    Raises:
        - 404 Not Found: Request not found
    """
    result = await GetMembershipRequestUseCase(uow).execute(request_id)

    if result.is_err():
        error = result.error
        if error.code == "REQUEST_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return {"success": True, "data": result.value}


class ReviewRequest(BaseModel):
    """Membership review HTTP request payload"""

    action: Optional[str] = Field(None, description="approve or reject")
    rejection_reason: Optional[str] = Field(None, description="Optional reason kept with the request")


@router.patch("/{request_id}", status_code=status.HTTP_200_OK)
async def review_request(
    request_id: UUID,
    request: ReviewRequest,
    current_user: TokenPayload = Depends(require_capability(Capability.moderate_users)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """
    Approve / Reject Membership Request (admin, super_admin)

    Raises:
        - 400 Bad Request: Invalid action or request already processed
        - 404 Not Found: Request or applicant not found
    """
    result = await ReviewMembershipRequestUseCase(uow).execute(
        UUID(current_user.user_id), request_id, request.action, request.rejection_reason, context
    )

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "ALREADY_PROCESSED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("REQUEST_NOT_FOUND", "USER_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    message = "Request approved" if request.action == "approve" else "Request rejected"
    return {"success": True, "data": result.value, "message": message}
