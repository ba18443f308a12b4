"""Tests for password hashing and token helpers."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from canteen.config import get_settings
from canteen.exceptions import AuthError
from canteen.identity.security import (
    create_access_token,
    decode_access_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    reset_token_expiry,
    verify_password,
)
from protean.exceptions import ValidationError


class TestPasswords:
    def test_hash_verifies_against_original(self):
        password_hash = hash_password("correct-horse")
        assert password_hash != "correct-horse"
        assert verify_password("correct-horse", password_hash)
        assert not verify_password("wrong-horse", password_hash)

    def test_short_password_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            hash_password("short")
        assert exc.value.messages == {"password": ["Password must be at least 8 characters"]}

    def test_password_over_72_bytes_is_rejected(self):
        with pytest.raises(ValidationError):
            hash_password("x" * 73)

    def test_verify_tolerates_missing_values(self):
        assert not verify_password(None, "hash")
        assert not verify_password("password", None)


class TestAccessTokens:
    def test_round_trip_claims(self):
        token = create_access_token("user-1", "a@campus.edu", "student")
        claims = decode_access_token(token)
        assert claims["user_id"] == "user-1"
        assert claims["email"] == "a@campus.edu"
        assert claims["role"] == "student"

    def test_tampered_token_is_rejected(self):
        token = create_access_token("user-1", "a@campus.edu", "student")
        with pytest.raises(AuthError):
            header, payload, _ = token.split(".")
            decode_access_token(f"{header}.{payload}.{'A' * 43}")

    def test_expired_token_is_rejected(self):
        settings = get_settings()
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode(
            {"user_id": "user-1", "iat": past, "exp": past + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(AuthError) as exc:
            decode_access_token(token)
        assert exc.value.messages == {"token": ["Invalid or expired token"]}

    def test_token_signed_with_other_secret_is_rejected(self):
        token = jwt.encode({"user_id": "user-1", "exp": datetime.now(UTC) + timedelta(hours=1)}, "other", "HS256")
        with pytest.raises(AuthError):
            decode_access_token(token)


class TestResetTokens:
    def test_generated_hash_matches_raw_token(self):
        raw, digest = generate_reset_token()
        assert raw != digest
        assert hash_reset_token(raw) == digest
        assert len(digest) == 64

    def test_tokens_are_unique(self):
        assert generate_reset_token()[0] != generate_reset_token()[0]

    def test_expiry_uses_configured_ttl(self):
        now = datetime(2026, 1, 1, tzinfo=UTC)
        assert reset_token_expiry(now) == now + timedelta(minutes=get_settings().reset_token_ttl_minutes)
