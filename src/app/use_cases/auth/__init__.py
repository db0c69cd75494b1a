"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .get_current_user_use_case import GetCurrentUserUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .change_password_use_case import ChangePasswordUseCase
from .dtos import (
    SignupCommand,
    UserProfile,
    AuthResponse,
    RefreshTokenResponse,
    CurrentUserResponse,
    MessageResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "GetCurrentUserUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "ChangePasswordUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "UserProfile",
    "AuthResponse",
    "RefreshTokenResponse",
    "CurrentUserResponse",
    "MessageResponse",
]
