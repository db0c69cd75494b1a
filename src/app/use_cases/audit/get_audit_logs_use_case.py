"""
Get Audit Logs Use Case

Recent audit events for super admins.
"""

from typing import Any, Dict, List

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return

MAX_LIMIT = 100


class GetAuditLogsUseCase:
    """
    Use case for retrieving the latest audit events.

    Business Rules:
    - Caller holds view_audit_logs (checked by the route)
    - Newest first, at most 100 per call
    - The actor's username is attached when the user still exists
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, limit: int = 10) -> Result[List[Dict[str, Any]]]:
        limit = max(1, min(limit, MAX_LIMIT))

        async with self.uow:
            events = await self.uow.audit_events.list_recent(limit)

            usernames = {}
            logs = []
            for event in events:
                username = None
                if event.user_id:
                    if event.user_id not in usernames:
                        user = await self.uow.users.get_by_id(event.user_id)
                        usernames[event.user_id] = user.username if user else None
                    username = usernames[event.user_id]

                logs.append(
                    {
                        "id": str(event.id),
                        "action": event.action,
                        "user_id": str(event.user_id) if event.user_id else None,
                        "username": username,
                        "target_id": event.target_id,
                        "target_type": event.target_type,
                        "details": event.event_metadata or {},
                        "ip_address": event.ip_address,
                        "created_at": event.created_at.isoformat() + "Z",
                    }
                )

            return Return.ok(logs)
