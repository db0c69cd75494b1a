from typing import Optional
from uuid import UUID

from src.app.services.request_context import RequestContext
from src.domain.entities import AuditEvent


def audit_event(
    action: str,
    context: Optional[RequestContext] = None,
    user_id: Optional[UUID] = None,
    target_id=None,
    target_type: Optional[str] = None,
    metadata: Optional[dict] = None,
) -> AuditEvent:
    """Build an audit row stamped with the caller's IP and user agent."""
    return AuditEvent(
        action=action,
        user_id=user_id,
        target_id=str(target_id) if target_id is not None else None,
        target_type=target_type,
        event_metadata=metadata or {},
        ip_address=context.ip_address if context else None,
        user_agent=context.user_agent if context else None,
    )
