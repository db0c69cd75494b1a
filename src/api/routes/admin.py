from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.jwt import TokenPayload
from src.app.services.authorization import Capability
from src.app.services.email_sender import IEmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import BroadcastEmailUseCase
from src.app.use_cases.audit import GetAuditLogsUseCase
from src.depends import get_email_sender, get_unit_of_work, require_capability

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/audit-logs", status_code=status.HTTP_200_OK)
async def get_audit_logs(
    limit: int = Query(10, ge=1, le=100),
    current_user: TokenPayload = Depends(require_capability(Capability.view_audit_logs)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Recent Audit Logs (super_admin only)

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Access denied
    """
    result = await GetAuditLogsUseCase(uow).execute(limit)
    if result.is_err():
        raise ServerError(result.error)
    return {"success": True, "data": result.value}


class BroadcastEmailRequest(BaseModel):
    """Admin broadcast HTTP request payload"""

    subject: Optional[str] = Field(None, description="Email subject")
    html: Optional[str] = Field(None, description="HTML body, sent as written")
    roles: Optional[List[str]] = Field(None, description="Limit to these roles; omit for all")


@router.post("/email/send", status_code=status.HTTP_200_OK)
async def send_broadcast_email(
    request: BroadcastEmailRequest,
    current_user: TokenPayload = Depends(require_capability(Capability.email_broadcast)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Broadcast Email (super_admin only)

    Raises:
        - 400 Bad Request: Missing subject/body, bad role filter, no recipients
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Access denied
    """
    result = await BroadcastEmailUseCase(uow, email_sender).execute(
        request.subject, request.html, request.roles
    )

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "NO_RECIPIENTS"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return {"success": True, "data": result.value}
