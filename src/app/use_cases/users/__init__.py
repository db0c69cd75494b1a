"""
User Management Use Cases

All user-related business logic.
"""

from .get_user_profile_use_case import GetUserProfileUseCase
from .list_users_use_case import ListUsersUseCase
from .update_user_use_case import UpdateUserUseCase
from .dtos import Pagination, UpdateUserCommand, UserListResponse

__all__ = [
    "GetUserProfileUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
    "Pagination",
    "UpdateUserCommand",
    "UserListResponse",
]
