"""
User Management DTOs
"""

from typing import List, Optional

from pydantic import BaseModel

from src.app.use_cases.auth.dtos import UserProfile


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class UserListResponse(BaseModel):
    users: List[UserProfile]
    pagination: Pagination


class UpdateUserCommand(BaseModel):
    """Admin change to another user's role and/or status"""

    role: Optional[str] = None
    status: Optional[str] = None
