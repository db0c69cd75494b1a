import bcrypt
import pytest

from src.app.use_cases.auth import ChangePasswordUseCase
from tests.fixtures.factories import make_user


@pytest.mark.asyncio
async def test_change_password(mock_uow, context):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(user.id, "longenough1", "even-longer-2", context)

    assert result.is_ok()
    assert bcrypt.checkpw(b"even-longer-2", user.password_hash.encode())
    assert mock_uow.audit_events.create.call_args.args[0].action == "password.change"


@pytest.mark.asyncio
async def test_wrong_current_password(mock_uow, context):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await ChangePasswordUseCase(mock_uow).execute(user.id, "nope-nope", "even-longer-2", context)

    assert result.error.message == "Current password is incorrect"
    mock_uow.users.update.assert_not_called()


@pytest.mark.asyncio
async def test_short_new_password(mock_uow, context):
    result = await ChangePasswordUseCase(mock_uow).execute(make_user().id, "longenough1", "short", context)

    assert result.error.message == "New password must be at least 8 characters"
