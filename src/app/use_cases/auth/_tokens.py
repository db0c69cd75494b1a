from typing import Tuple

from src.api.utils.jwt import TokenPayload, generate_access_token, generate_refresh_token
from src.domain.entities import User


def token_payload(user: User) -> TokenPayload:
    role = user.role.value if hasattr(user.role, "value") else user.role
    return TokenPayload(
        user_id=str(user.id), email=user.email, username=user.username, role=role
    )


def issue_token_pair(user: User) -> Tuple[str, str]:
    """(access_token, refresh_token) for the user's current identity claims"""
    payload = token_payload(user)
    return generate_access_token(payload), generate_refresh_token(payload)
