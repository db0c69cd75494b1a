import pytest
from starlette.requests import Request

from src.depends import get_request_context


def _request(headers=None, client=("198.51.100.4", 51234)) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/auth/login",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "client": client,
    }
    return Request(scope)


@pytest.fixture
def trust_proxy(monkeypatch):
    from config import ApplicationConfig

    monkeypatch.setattr(ApplicationConfig, "TRUST_PROXY_HEADERS", True)


@pytest.fixture
def distrust_proxy(monkeypatch):
    from config import ApplicationConfig

    monkeypatch.setattr(ApplicationConfig, "TRUST_PROXY_HEADERS", False)


def test_forwarded_headers_are_ignored_by_default(distrust_proxy):
    request = _request({"X-Forwarded-For": "203.0.113.7", "X-Real-IP": "203.0.113.8"})

    assert get_request_context(request).ip_address == "198.51.100.4"


def test_forwarded_for_first_hop_when_trusted(trust_proxy):
    request = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})

    assert get_request_context(request).ip_address == "203.0.113.7"


def test_real_ip_when_trusted_and_no_forwarded_for(trust_proxy):
    request = _request({"X-Real-IP": " 203.0.113.8 "})

    assert get_request_context(request).ip_address == "203.0.113.8"


def test_missing_client_falls_back_to_loopback(distrust_proxy):
    request = _request(client=None)

    assert get_request_context(request).ip_address == "127.0.0.1"


def test_cookies_and_user_agent_are_captured(distrust_proxy):
    request = _request(
        {"User-Agent": "pytest", "Cookie": "access_token=abc; refresh_token=def"}
    )

    context = get_request_context(request)

    assert context.user_agent == "pytest"
    assert context.access_token == "abc"
    assert context.refresh_token == "def"
