from abc import ABC, abstractmethod

from src.app.repositories.api_key_repository import IApiKeyRepository
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.membership_request_repository import IMembershipRequestRepository
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.repositories.rate_limit_window_repository import IRateLimitWindowRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    password_reset_tokens: IPasswordResetTokenRepository
    api_keys: IApiKeyRepository
    rate_limit_windows: IRateLimitWindowRepository
    audit_events: IAuditEventRepository
    membership_requests: IMembershipRequestRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
