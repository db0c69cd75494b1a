from datetime import UTC, datetime, timedelta

from jose import jwt

from config import ApplicationConfig
from src.api.utils.jwt import (
    TokenPayload,
    generate_access_token,
    generate_refresh_token,
    verify_access_token,
    verify_refresh_token,
)

PAYLOAD = TokenPayload(
    user_id="6f0f7c1e-0000-4000-8000-000000000001",
    email="a@b.com",
    username="abc123",
    role="reader",
)


def test_access_token_round_trip():
    token = generate_access_token(PAYLOAD)

    assert verify_access_token(token) == PAYLOAD


def test_refresh_token_round_trip():
    token = generate_refresh_token(PAYLOAD)

    assert verify_refresh_token(token) == PAYLOAD


def test_tokens_do_not_cross_secrets():
    assert verify_access_token(generate_refresh_token(PAYLOAD)) is None
    assert verify_refresh_token(generate_access_token(PAYLOAD)) is None


def test_tokens_minted_back_to_back_differ():
    assert generate_refresh_token(PAYLOAD) != generate_refresh_token(PAYLOAD)


def test_access_token_expires_in_four_hours():
    token = generate_access_token(PAYLOAD)
    claims = jwt.get_unverified_claims(token)

    assert claims["exp"] - claims["iat"] == 4 * 60 * 60


def test_refresh_token_expires_in_thirty_days():
    token = generate_refresh_token(PAYLOAD)
    claims = jwt.get_unverified_claims(token)

    assert claims["exp"] - claims["iat"] == 30 * 24 * 60 * 60


def test_expired_token_is_rejected():
    past = datetime.now(UTC) - timedelta(hours=5)
    token = jwt.encode(
        {**PAYLOAD.model_dump(), "iat": past, "exp": past + timedelta(hours=4)},
        ApplicationConfig.JWT_ACCESS_SECRET,
        algorithm="HS256",
    )

    assert verify_access_token(token) is None


def test_garbage_never_raises():
    assert verify_access_token("not.a.jwt") is None
    assert verify_access_token("") is None
    assert verify_access_token(None) is None
    assert verify_refresh_token("a" * 500) is None


def test_token_missing_claims_is_rejected():
    token = jwt.encode(
        {"user_id": "only-this", "exp": datetime.now(UTC) + timedelta(hours=1)},
        ApplicationConfig.JWT_ACCESS_SECRET,
        algorithm="HS256",
    )

    assert verify_access_token(token) is None
