"""API key material: generation, hashing and bearer header parsing."""

import hashlib
import secrets
from typing import NamedTuple, Optional

API_KEY_PREFIX = "ink_"
_DISPLAY_PREFIX_LENGTH = 12


class GeneratedApiKey(NamedTuple):
    key: str
    hash: str
    prefix: str


def hash_api_key(key: str) -> str:
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def generate_api_key() -> GeneratedApiKey:
    """256 random bits in hex behind the fixed marker prefix."""
    key = f"{API_KEY_PREFIX}{secrets.token_hex(32)}"
    return GeneratedApiKey(
        key=key,
        hash=hash_api_key(key),
        prefix=key[:_DISPLAY_PREFIX_LENGTH] + "...",
    )


def has_api_key_format(key: Optional[str]) -> bool:
    return bool(key) and key.startswith(API_KEY_PREFIX)


def extract_bearer_key(authorization: Optional[str]) -> Optional[str]:
    """Return the key from "Bearer <key>", or None for any other header form."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    key = authorization[len("Bearer "):].strip()
    return key or None
