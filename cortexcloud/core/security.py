"""Password hashing and bearer token helpers."""

import hashlib
import hmac
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from cortexcloud.core.config import settings
from cortexcloud.core.errors import UnauthorizedError

INVALID_TOKEN_DETAIL = "Invalid or expired token."


def hash_password(password: str, salt: str | None = None) -> str:
    """Return the salted SHA-256 hex digest of a password."""
    salted = password + (settings.password_salt if salt is None else salt)
    return hashlib.sha256(salted.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), password_hash)


def create_access_token(
    *,
    user_id: uuid.UUID,
    email: str,
    name: str,
    expires_in: timedelta | None = None,
) -> str:
    """Issue a signed token identifying the user."""
    issued_at = datetime.now(UTC)
    lifetime = expires_in or timedelta(minutes=settings.jwt_expires_minutes)
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "name": name,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """Validate a token and return the user id it was issued for."""
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        return uuid.UUID(claims["sub"])
    except (jwt.PyJWTError, ValueError) as exc:
        raise UnauthorizedError(INVALID_TOKEN_DETAIL) from exc


def get_token_from_header(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization.removeprefix("Bearer ").strip() or None
