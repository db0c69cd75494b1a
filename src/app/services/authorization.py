"""
Authorization policy.

Each capability lists the exact roles allowed to use it. Checks are set
membership, not rank comparison: admin sits above writer in the hierarchy
but is still excluded from the super_admin-only capabilities.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional

from src.domain.entities import UserRole


class Capability(str, Enum):
    authenticate = "authenticate"
    write_posts = "write_posts"
    suggestions = "suggestions"
    moderate_users = "moderate_users"
    view_stats = "view_stats"
    view_audit_logs = "view_audit_logs"
    email_broadcast = "email_broadcast"
    author_feature_updates = "author_feature_updates"
    send_newsletter = "send_newsletter"


_ALL_ROLES = frozenset(UserRole)
_WRITERS = frozenset({UserRole.writer, UserRole.admin, UserRole.super_admin})
_ADMINS = frozenset({UserRole.admin, UserRole.super_admin})
_SUPER_ADMIN = frozenset({UserRole.super_admin})

CAPABILITY_ROLES: Dict[Capability, FrozenSet[UserRole]] = {
    Capability.authenticate: _ALL_ROLES,
    Capability.write_posts: _WRITERS,
    Capability.suggestions: _WRITERS,
    Capability.moderate_users: _ADMINS,
    Capability.view_stats: _ADMINS,
    Capability.view_audit_logs: _SUPER_ADMIN,
    Capability.email_broadcast: _SUPER_ADMIN,
    Capability.author_feature_updates: _SUPER_ADMIN,
    Capability.send_newsletter: _SUPER_ADMIN,
}


def _to_role(role) -> Optional[UserRole]:
    if isinstance(role, UserRole):
        return role
    try:
        return UserRole(role)
    except ValueError:
        return None


def is_allowed(role, capability: Capability) -> bool:
    """True if the role (enum or its string value) may use the capability."""
    parsed = _to_role(role)
    if parsed is None:
        return False
    return parsed in CAPABILITY_ROLES[capability]


def is_admin(role) -> bool:
    return _to_role(role) in _ADMINS


def is_super_admin(role) -> bool:
    return _to_role(role) == UserRole.super_admin
