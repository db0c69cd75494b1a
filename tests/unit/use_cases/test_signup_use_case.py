import pytest

from src.app.use_cases.auth import SignupCommand, SignupUseCase
from src.domain.entities import Session, User, UserRole, UserStatus
from tests.fixtures.factories import make_user


def command(**overrides):
    fields = dict(email="A@B.com", username="abc123", password="longenough1", display_name="A")
    fields.update(overrides)
    return SignupCommand(**fields)


@pytest.fixture
def use_case(mock_uow, email_sender, runner):
    mock_uow.users.get_by_email.return_value = None
    mock_uow.users.get_by_username.return_value = None
    mock_uow.users.create.side_effect = lambda user: user
    return SignupUseCase(mock_uow, email_sender, runner)


@pytest.mark.asyncio
async def test_signup_creates_reader_and_session(use_case, mock_uow, context, email_sender, runner):
    result = await use_case.execute(command(), context)

    assert result.is_ok()
    created: User = mock_uow.users.create.call_args.args[0]
    assert created.email == "a@b.com"
    assert created.role == UserRole.reader
    assert created.status == UserStatus.active
    assert created.password_hash.startswith("$2b$")

    session: Session = mock_uow.sessions.create.call_args.args[0]
    assert session.user_id == created.id
    assert session.refresh_token == result.value.refresh_token
    assert session.ip_address == "203.0.113.7"
    mock_uow.commit.assert_awaited()

    assert "password_hash" not in result.value.user.model_dump()

    await runner.drain()
    assert email_sender.new_reader_notifications == ["abc123"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"display_name": ""}, "All fields are required"),
        ({"email": None}, "All fields are required"),
        ({"email": "not-an-email"}, "Invalid email format"),
        ({"username": "ab"}, "Username must be 3-20 characters, alphanumeric and underscores only"),
        ({"username": "has space"}, "Username must be 3-20 characters, alphanumeric and underscores only"),
        ({"password": "short"}, "Password must be at least 8 characters"),
    ],
)
async def test_signup_validation(use_case, mock_uow, context, overrides, message):
    result = await use_case.execute(command(**overrides), context)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == message
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_signup_rejects_taken_email(use_case, mock_uow, context):
    mock_uow.users.get_by_email.return_value = make_user()

    result = await use_case.execute(command(), context)

    assert result.error.code == "EMAIL_TAKEN"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_signup_rejects_taken_username(use_case, mock_uow, context):
    mock_uow.users.get_by_username.return_value = make_user()

    result = await use_case.execute(command(), context)

    assert result.error.code == "USERNAME_TAKEN"
    assert result.error.message == "Username is already taken"


@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_signup(mock_uow, context, runner):
    class BrokenSender:
        async def send_new_reader_notification(self, *args):
            raise RuntimeError("provider down")

    mock_uow.users.get_by_email.return_value = None
    mock_uow.users.get_by_username.return_value = None
    mock_uow.users.create.side_effect = lambda user: user

    result = await SignupUseCase(mock_uow, BrokenSender(), runner).execute(command(), context)
    await runner.drain()

    assert result.is_ok()
