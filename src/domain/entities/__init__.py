"""
Inkhouse Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserRole,
    UserStatus,
    ApiKeyStatus,
    MembershipRequestStatus,
)

# Export all entities
from .user import User
from .session import Session
from .password_reset_token import PasswordResetToken
from .api_key import ApiKey
from .rate_limit_window import RateLimitWindow
from .audit_event import AuditEvent
from .membership_request import MembershipRequest

__all__ = [
    # Enums
    "UserRole",
    "UserStatus",
    "ApiKeyStatus",
    "MembershipRequestStatus",
    # Entities
    "User",
    "Session",
    "PasswordResetToken",
    "ApiKey",
    "RateLimitWindow",
    "AuditEvent",
    "MembershipRequest",
]
