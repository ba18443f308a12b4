"""Password hashing, bearer tokens and password-reset tokens."""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt
from protean.exceptions import ValidationError

from canteen.config import get_settings
from canteen.exceptions import AuthError

MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def validate_password(password, field="password"):
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({field: [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError({field: [f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes"]})


def hash_password(password: str) -> str:
    """Validate a new password and return its salted bcrypt hash."""
    validate_password(password)
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str | None, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))


# ---------------------------------------------------------------------------
# Bearer tokens
# ---------------------------------------------------------------------------
def create_access_token(user_id: str, email: str, role: str) -> str:
    settings = get_settings()
    now = datetime.now(UTC)
    claims = {
        "user_id": str(user_id),
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_expire_hours),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry, returning the claims.

    Raises:
        AuthError: for any malformed, tampered or expired token.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "user_id"]},
        )
    except jwt.PyJWTError as exc:
        raise AuthError({"token": ["Invalid or expired token"]}) from exc
    return claims


# ---------------------------------------------------------------------------
# Password reset tokens
# ---------------------------------------------------------------------------
def generate_reset_token() -> tuple[str, str]:
    """Return ``(raw_token, token_hash)``; only the hash is ever stored."""
    raw_token = secrets.token_hex(20)
    return raw_token, hash_reset_token(raw_token)


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def reset_token_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(UTC)
    return now + timedelta(minutes=get_settings().reset_token_ttl_minutes)
