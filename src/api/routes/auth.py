from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.cookies import clear_auth_cookies, set_auth_cookies
from src.api.utils.rate_limit import enforce_rate_limit
from src.app.services.email_sender import IEmailSender
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ConfirmPasswordResetUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    RequestPasswordResetUseCase,
    SignupCommand,
    SignupUseCase,
)
from src.depends import (
    get_email_sender,
    get_optional_unit_of_work,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Field rules (email shape, username pattern, password length) are
    checked by the use case so the messages stay consistent.
    """

    email: Optional[str] = Field(None, description="User email address")
    username: Optional[str] = Field(None, description="3-20 letters, digits or underscores")
    password: Optional[str] = Field(None, description="User password (min 8 chars)")
    display_name: Optional[str] = Field(None, description="Name shown on posts")


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    context: RequestContext = Depends(get_request_context),
):
    """
    Reader Signup

    Creates a reader account, opens a session and sets the auth cookies.

    Raises:
        - 400 Bad Request: Invalid input or email/username taken
        - 429 Too Many Requests: Signup rate limit for this IP
    """
    await enforce_rate_limit(
        uow,
        context.ip_address,
        "signup",
        ApplicationConfig.SIGNUP_RATE_LIMIT,
        ApplicationConfig.SIGNUP_RATE_WINDOW_SECONDS,
        "Too many signup attempts. Please try again later.",
    )

    command = SignupCommand(**request.model_dump())
    result = await SignupUseCase(uow, email_sender).execute(command, context)

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "EMAIL_TAKEN", "USERNAME_TAKEN"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_auth_cookies(response, result.value.access_token, result.value.refresh_token)
    return {"success": True, "data": result.value.user}


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    email accepts either the email address or the username.
    """

    email: Optional[str] = Field(None, description="Email address or username")
    password: Optional[str] = Field(None, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """
    User Login

    Raises:
        - 400 Bad Request: Missing identifier or password
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account suspended or deleted
        - 429 Too Many Requests: Login rate limit for this IP
    """
    await enforce_rate_limit(
        uow,
        context.ip_address,
        "login",
        ApplicationConfig.LOGIN_RATE_LIMIT,
        ApplicationConfig.LOGIN_RATE_WINDOW_SECONDS,
        "Too many login attempts. Please try again later.",
    )

    result = await LoginUseCase(uow).execute(request.email, request.password, context)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "ACCOUNT_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    set_auth_cookies(response, result.value.access_token, result.value.refresh_token)
    return {"success": True, "data": result.value.user}


@router.post("/refresh", status_code=status.HTTP_200_OK)
async def refresh(
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """
    Refresh Token Rotation

    Reads the refresh_token cookie, rotates it in place and sets both
    cookies anew. Any failure clears both cookies.

    Raises:
        - 401 Unauthorized: Missing, invalid, rotated-away or expired token,
          or the user is no longer active
    """
    result = await RefreshTokenUseCase(uow).execute(context)

    if result.is_err():
        raise ClientError(
            result.error, status_code=status.HTTP_401_UNAUTHORIZED, clear_cookies=True
        )

    set_auth_cookies(response, result.value.access_token, result.value.refresh_token)
    return {"success": True}


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    response: Response,
    uow: Optional[UnitOfWork] = Depends(get_optional_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """Logout. Always succeeds and always clears the cookies."""
    await LogoutUseCase(uow).execute(context)
    clear_auth_cookies(response)
    return {"success": True}


@router.get("/me", status_code=status.HTTP_200_OK)
async def me(
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    context: RequestContext = Depends(get_request_context),
):
    """
    Current User

    Falls back to the refresh token when the access token is missing or
    invalid, and then re-issues the access cookie.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 403 Forbidden: Account suspended or deleted
        - 404 Not Found: User no longer exists
    """
    result = await GetCurrentUserUseCase(uow).execute(context)

    if result.is_err():
        error = result.error
        if error.code == "NOT_AUTHENTICATED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ACCOUNT_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    if result.value.access_token:
        set_auth_cookies(response, result.value.access_token, result.value.refresh_token)
    return {"success": True, "data": result.value.user}


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: Optional[str] = Field(None, description="Account email address")


@router.post("/forgot-password", status_code=status.HTTP_200_OK)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Answers with the same message whether or not the account exists.

    Raises:
        - 400 Bad Request: No email given
    """
    result = await RequestPasswordResetUseCase(uow, email_sender).execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return {"success": True, "message": result.value.message}


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: Optional[str] = Field(None, description="Token from the reset email")
    password: Optional[str] = Field(None, description="New password (min 8 chars)")


@router.post("/reset-password", status_code=status.HTTP_200_OK)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm Password Reset

    Sets the new password, consumes the token and signs the user out
    everywhere.

    Raises:
        - 400 Bad Request: Invalid input, or the link is invalid, expired
          or already used
    """
    result = await ConfirmPasswordResetUseCase(uow).execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in (
            "VALIDATION_ERROR",
            "INVALID_TOKEN",
            "TOKEN_ALREADY_USED",
            "TOKEN_EXPIRED",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return {"success": True, "message": result.value.message}
