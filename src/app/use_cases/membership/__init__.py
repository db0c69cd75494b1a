"""
Membership Use Cases

Reader-to-writer upgrade requests and their review.
"""

from .get_membership_request_status_use_case import GetMembershipRequestStatusUseCase
from .get_membership_request_use_case import GetMembershipRequestUseCase
from .list_membership_requests_use_case import ListMembershipRequestsUseCase
from .request_writer_upgrade_use_case import RequestWriterUpgradeUseCase
from .review_membership_request_use_case import ReviewMembershipRequestUseCase
from .dtos import MembershipRequestInfo, MembershipRequestListResponse

__all__ = [
    "GetMembershipRequestStatusUseCase",
    "GetMembershipRequestUseCase",
    "ListMembershipRequestsUseCase",
    "RequestWriterUpgradeUseCase",
    "ReviewMembershipRequestUseCase",
    "MembershipRequestInfo",
    "MembershipRequestListResponse",
]
