import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import Session
from tests.utils.json_compare import exclude_keys
from tests.utils.users import get_user


@pytest.mark.asyncio
async def test_signup_creates_account_session_and_cookies(client: AsyncClient, db_session, test_data, email_sender):
    """Signup with valid details

    Given a new visitor
    When they sign up with email, username, password and display name
    Then the account is created as an active reader
    And a session row holds the refresh token
    And both auth cookies are set
    And the response never includes the password hash
    """
    payload = test_data.get_copy("reader")

    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]
    assert "password_hash" not in user
    assert exclude_keys(user, {"id", "created_at", "updated_at", "last_login_at"}) == {
        "email": "a@b.com",
        "username": "abc123",
        "display_name": "A",
        "role": "reader",
        "status": "active",
    }

    assert client.cookies.get("access_token")
    refresh_token = client.cookies.get("refresh_token")
    assert refresh_token

    db_user = await get_user(db_session, "a@b.com")
    sessions = (await db_session.exec(select(Session).where(Session.user_id == db_user.id))).all()
    assert [s.refresh_token for s in sessions] == [refresh_token]


@pytest.mark.asyncio
async def test_signup_notifies_super_admin(client: AsyncClient, test_data, email_sender):
    from src.app.services.background import best_effort

    await client.post("/auth/signup", json=test_data.get_copy("reader"))
    await best_effort.drain()

    assert email_sender.new_reader_notifications == ["abc123"]


@pytest.mark.asyncio
async def test_signup_normalizes_case(client: AsyncClient, test_data):
    response = await client.post("/auth/signup", json=test_data.get_copy("writer"))

    assert response.status_code == 201
    assert response.json()["data"]["email"] == "writer@inkhouse.dev"
    assert response.json()["data"]["username"] == "quill_writer"


@pytest.mark.asyncio
async def test_signup_duplicate_email_is_case_insensitive(client: AsyncClient, test_data):
    await client.post("/auth/signup", json=test_data.get_copy("reader"))

    payload = test_data.get_copy("reader")
    payload["email"] = "A@B.COM"
    payload["username"] = "someone_else"
    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Email is already registered"}


@pytest.mark.asyncio
async def test_signup_duplicate_username(client: AsyncClient, test_data):
    await client.post("/auth/signup", json=test_data.get_copy("reader"))

    payload = test_data.get_copy("reader")
    payload["email"] = "other@b.com"
    payload["username"] = "ABC123"
    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Username is already taken"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field,value,message",
    [
        ("email", "no-at-sign", "Invalid email format"),
        ("username", "x!", "Username must be 3-20 characters, alphanumeric and underscores only"),
        ("password", "short", "Password must be at least 8 characters"),
        ("display_name", "", "All fields are required"),
    ],
)
async def test_signup_validation(client: AsyncClient, test_data, field, value, message):
    payload = test_data.get_copy("reader")
    payload[field] = value

    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == message
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_signup_rate_limit(client: AsyncClient, test_data, monkeypatch):
    from config import ApplicationConfig

    monkeypatch.setattr(ApplicationConfig, "SIGNUP_RATE_LIMIT", 1)
    payload = test_data.get_copy("reader")
    await client.post("/auth/signup", json=payload)

    response = await client.post("/auth/signup", json=test_data.get_copy("writer"))

    assert response.status_code == 429
    assert response.json()["error"] == "Too many signup attempts. Please try again later."
    assert response.headers["X-RateLimit-Remaining"] == "0"
