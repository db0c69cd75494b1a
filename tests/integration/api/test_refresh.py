from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.base import utc_now
from src.domain.entities import Session, UserStatus
from tests.utils.cookies import cookie_header, is_cookie_cleared
from tests.utils.users import set_status, signup


@pytest.mark.asyncio
async def test_refresh_rotates_and_invalidates_previous_token(client: AsyncClient, test_data):
    """Refresh rotation

    Given a signed-in user holding refresh token T
    When they refresh
    Then they get new cookies and T stops working
    """
    await signup(client, test_data.get_copy("reader"))
    old_refresh = client.cookies.get("refresh_token")
    old_access = client.cookies.get("access_token")

    response = await client.post("/auth/refresh")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    new_refresh = client.cookies.get("refresh_token")
    assert new_refresh and new_refresh != old_refresh
    assert client.cookies.get("access_token") != old_access

    replay = await client.post("/auth/refresh", headers=cookie_header(refresh_token=old_refresh))

    assert replay.status_code == 401
    assert replay.json()["error"] == "Session not found"
    assert is_cookie_cleared(replay, "refresh_token")
    assert is_cookie_cleared(replay, "access_token")


@pytest.mark.asyncio
async def test_rotated_token_keeps_working(client: AsyncClient, test_data):
    await signup(client, test_data.get_copy("reader"))

    for _ in range(3):
        response = await client.post("/auth/refresh")
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_refresh_without_cookie(client: AsyncClient):
    response = await client.post("/auth/refresh")

    assert response.status_code == 401
    assert response.json()["error"] == "No refresh token"
    assert is_cookie_cleared(response, "refresh_token")


@pytest.mark.asyncio
async def test_refresh_with_garbage_token(client: AsyncClient):
    response = await client.post("/auth/refresh", headers=cookie_header(refresh_token="garbage"))

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid refresh token"


@pytest.mark.asyncio
async def test_expired_session_is_removed(client: AsyncClient, db_session, test_data):
    await signup(client, test_data.get_copy("reader"))
    token = client.cookies.get("refresh_token")

    session = (await db_session.exec(select(Session).where(Session.refresh_token == token))).one()
    session.expires_at = utc_now() - timedelta(minutes=1)
    db_session.add(session)
    await db_session.commit()

    response = await client.post("/auth/refresh")

    assert response.status_code == 401
    assert response.json()["error"] == "Session expired"
    remaining = (await db_session.exec(select(Session).where(Session.refresh_token == token))).all()
    assert remaining == []


@pytest.mark.asyncio
async def test_suspended_user_cannot_refresh(client: AsyncClient, db_session, test_data):
    reader = test_data.get_copy("reader")
    await signup(client, reader)
    await set_status(db_session, reader["email"], UserStatus.suspended)

    response = await client.post("/auth/refresh")

    assert response.status_code == 401
    assert response.json()["error"] == "User not found or inactive"
    assert is_cookie_cleared(response, "access_token")
