"""
API Key Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import ApiKey


class ApiKeyInfo(BaseModel):
    """Key metadata. Never carries the hash or the secret."""

    id: str
    user_id: str
    name: str
    key_prefix: str
    status: str
    expires_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, api_key: ApiKey) -> "ApiKeyInfo":
        return cls(
            id=str(api_key.id),
            user_id=str(api_key.user_id),
            name=api_key.name,
            key_prefix=api_key.key_prefix,
            status=api_key.status.value if hasattr(api_key.status, "value") else api_key.status,
            expires_at=api_key.expires_at,
            last_used_at=api_key.last_used_at,
            created_at=api_key.created_at,
            updated_at=api_key.updated_at,
        )


class ApiKeyWithSecret(ApiKeyInfo):
    """Returned once, at creation"""

    secret: str


class ValidatedApiKey(BaseModel):
    """Identity behind a valid presented key"""

    user_id: str
    key_id: str
