import logging
import re
from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.services.audit import audit_event
from src.app.services.background import BestEffortRunner, best_effort
from src.app.services.credentials import hash_password
from src.app.services.email_sender import IEmailSender
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Session, User, UserRole, UserStatus
from src.libs.result import Error, Result, Return
from ._tokens import issue_token_pair
from .dtos import AuthResponse, SignupCommand, UserProfile

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
MIN_PASSWORD_LENGTH = 8


def validate_signup(command: SignupCommand) -> Optional[Error]:
    if not (command.email and command.username and command.password and command.display_name):
        return Error("VALIDATION_ERROR", "All fields are required")
    if not EMAIL_PATTERN.match(command.email.strip()):
        return Error("VALIDATION_ERROR", "Invalid email format")
    if not USERNAME_PATTERN.match(command.username.strip()):
        return Error(
            "VALIDATION_ERROR",
            "Username must be 3-20 characters, alphanumeric and underscores only",
        )
    if len(command.password) < MIN_PASSWORD_LENGTH:
        return Error("VALIDATION_ERROR", "Password must be at least 8 characters")
    return None


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand + RequestContext
    - Output: Result[AuthResponse]

    Business Logic:
    1. Validate fields (email format, username shape, password length)
    2. Reject taken email or username (case-insensitive)
    3. Create the user as reader/active with a bcrypt hash
    4. Create a session holding the refresh token (30-day expiry)
    5. Commit, then notify the super admin best-effort
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        runner: BestEffortRunner = best_effort,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.runner = runner

    async def execute(self, command: SignupCommand, context: RequestContext) -> Result[AuthResponse]:
        validation_error = validate_signup(command)
        if validation_error:
            return Return.err(validation_error)

        email = command.email.strip().lower()
        username = command.username.strip().lower()
        display_name = command.display_name.strip()

        async with self.uow:
            if await self.uow.users.get_by_email(email):
                return Return.err(Error("EMAIL_TAKEN", "Email is already registered"))

            if await self.uow.users.get_by_username(username):
                return Return.err(Error("USERNAME_TAKEN", "Username is already taken"))

            user = User(
                email=email,
                username=username,
                display_name=display_name,
                password_hash=await hash_password(command.password),
                role=UserRole.reader,
                status=UserStatus.active,
            )
            user = await self.uow.users.create(user)

            access_token, refresh_token = issue_token_pair(user)

            await self.uow.sessions.create(
                Session(
                    user_id=user.id,
                    refresh_token=refresh_token,
                    expires_at=utc_now() + timedelta(days=ApplicationConfig.SIGNUP_SESSION_TTL_DAYS),
                    user_agent=context.user_agent,
                    ip_address=context.ip_address,
                )
            )

            await self.uow.audit_events.create(
                audit_event(
                    "user.signup",
                    context,
                    user_id=user.id,
                    target_id=user.id,
                    target_type="user",
                    metadata={"email": email, "username": username},
                )
            )

            await self.uow.commit()

            profile = UserProfile.from_user(user)

        logger.info(f"New reader signed up: {username}")
        self.runner.submit(
            self.email_sender.send_new_reader_notification(display_name, username, email),
            "new reader notification",
        )

        return Return.ok(
            AuthResponse(user=profile, access_token=access_token, refresh_token=refresh_token)
        )
