"""
Inkhouse Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform role. Access checks use explicit role sets, never ordering."""

    reader = "reader"
    writer = "writer"
    admin = "admin"
    super_admin = "super_admin"


class UserStatus(str, Enum):
    """User account status. Only active users may authenticate."""

    active = "active"
    suspended = "suspended"
    deleted = "deleted"


class ApiKeyStatus(str, Enum):
    """API key status"""

    active = "active"
    revoked = "revoked"


class MembershipRequestStatus(str, Enum):
    """Reader-to-writer upgrade request status. Only pending requests can be reviewed."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"
