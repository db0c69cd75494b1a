import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.background import BestEffortRunner
from src.app.services.request_context import RequestContext
from tests.fixtures.email import RecordingEmailSender


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    from config import ApplicationConfig

    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Every repository method is awaitable
    uow.users = AsyncMock()
    uow.sessions = AsyncMock()
    uow.password_reset_tokens = AsyncMock()
    uow.api_keys = AsyncMock()
    uow.rate_limit_windows = AsyncMock()
    uow.audit_events = AsyncMock()
    uow.membership_requests = AsyncMock()
    return uow


@pytest.fixture
def runner():
    return BestEffortRunner()


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def context():
    return RequestContext(ip_address="203.0.113.7", user_agent="pytest")
