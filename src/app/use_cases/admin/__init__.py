"""Admin use cases for platform-wide operations."""

from .broadcast_email_use_case import BroadcastEmailResponse, BroadcastEmailUseCase

__all__ = [
    "BroadcastEmailUseCase",
    "BroadcastEmailResponse",
]
