from datetime import timedelta

import pytest

from src.api.utils.jwt import generate_access_token, generate_refresh_token, verify_access_token
from src.app.services.request_context import RequestContext
from src.app.use_cases.auth import GetCurrentUserUseCase, LogoutUseCase
from src.app.use_cases.auth._tokens import token_payload
from src.domain.entities import UserStatus
from tests.fixtures.factories import make_session, make_user


@pytest.mark.asyncio
async def test_logout_deletes_session(mock_uow):
    token = generate_refresh_token(token_payload(make_user()))

    result = await LogoutUseCase(mock_uow).execute(RequestContext(refresh_token=token))

    assert result.is_ok()
    mock_uow.sessions.delete_by_refresh_token.assert_awaited_once_with(token)


@pytest.mark.asyncio
async def test_logout_with_invalid_token_still_succeeds(mock_uow):
    result = await LogoutUseCase(mock_uow).execute(RequestContext(refresh_token="garbage"))

    assert result.is_ok()
    mock_uow.sessions.delete_by_refresh_token.assert_not_called()


@pytest.mark.asyncio
async def test_logout_swallows_backend_failure(mock_uow):
    mock_uow.sessions.delete_by_refresh_token.side_effect = RuntimeError("db gone")
    token = generate_refresh_token(token_payload(make_user()))

    result = await LogoutUseCase(mock_uow).execute(RequestContext(refresh_token=token))

    assert result.is_ok()


@pytest.mark.asyncio
async def test_logout_without_a_datastore_skips_the_delete():
    token = generate_refresh_token(token_payload(make_user()))

    result = await LogoutUseCase(None).execute(RequestContext(refresh_token=token))

    assert result.is_ok()


@pytest.mark.asyncio
async def test_me_with_access_token(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    context = RequestContext(access_token=generate_access_token(token_payload(user)))

    result = await GetCurrentUserUseCase(mock_uow).execute(context)

    assert result.value.user.id == str(user.id)
    assert result.value.access_token is None


@pytest.mark.asyncio
async def test_me_falls_back_to_refresh_token(mock_uow):
    user = make_user()
    refresh = generate_refresh_token(token_payload(user))
    mock_uow.sessions.get_by_refresh_token.return_value = make_session(user, refresh)
    mock_uow.users.get_by_id.return_value = user

    result = await GetCurrentUserUseCase(mock_uow).execute(
        RequestContext(access_token="expired", refresh_token=refresh)
    )

    assert result.is_ok()
    assert verify_access_token(result.value.access_token).user_id == str(user.id)
    assert result.value.refresh_token == refresh


@pytest.mark.asyncio
async def test_me_ignores_refresh_token_without_live_session(mock_uow):
    user = make_user()
    refresh = generate_refresh_token(token_payload(user))
    mock_uow.sessions.get_by_refresh_token.return_value = make_session(
        user, refresh, expires_in=timedelta(seconds=-1)
    )

    result = await GetCurrentUserUseCase(mock_uow).execute(RequestContext(refresh_token=refresh))

    assert result.error.code == "NOT_AUTHENTICATED"


@pytest.mark.asyncio
async def test_me_for_suspended_account(mock_uow):
    user = make_user(status=UserStatus.suspended)
    mock_uow.users.get_by_id.return_value = user
    context = RequestContext(access_token=generate_access_token(token_payload(user)))

    result = await GetCurrentUserUseCase(mock_uow).execute(context)

    assert result.error.code == "ACCOUNT_INACTIVE"
