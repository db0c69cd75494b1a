"""
Credential hashing.

bcrypt with a fresh salt per call. Both operations run in a worker thread
so a slow hash suspends only the request that asked for it.
"""

import asyncio

import bcrypt

from config import ApplicationConfig

# bcrypt only looks at the first 72 bytes; newer releases reject longer input
_BCRYPT_MAX_BYTES = 72

# Dummy hashes by cost factor
_dummy_hashes = {}


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def _dummy_hash() -> str:
    rounds = ApplicationConfig.BCRYPT_ROUNDS
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = bcrypt.hashpw(
            b"inkhouse-dummy-password", bcrypt.gensalt(rounds)
        ).decode("utf-8")
    return _dummy_hashes[rounds]


def _hash(password: str) -> str:
    rounds = ApplicationConfig.BCRYPT_ROUNDS
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds)).decode("utf-8")


def _verify(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        # Malformed or empty stored hash
        return False


async def hash_password(password: str) -> str:
    return await asyncio.to_thread(_hash, password)


async def verify_password(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(_verify, password, password_hash)


async def burn_password_check(password: str) -> None:
    """Spend the time of one verification when there is no user to check against."""
    await asyncio.to_thread(lambda: _verify(password, _dummy_hash()))
