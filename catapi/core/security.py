"""Security helpers (password hashing and JWT tokens)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from argon2 import PasswordHasher, exceptions as argon_exc
from jose import JWTError, jwt

from catapi.core.config import Settings

_ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Create an Argon2 hash; the salt is generated per call."""
    return _ph.hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    if not stored_hash:
        return False
    try:
        return _ph.verify(stored_hash, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


class TokenError(Exception):
    """Raised when a bearer token cannot be decoded or has expired."""


def create_access_token(settings: Settings, subject: str, claims: dict[str, Any] | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = dict(claims or {})
    payload.update(
        {
            "sub": subject,
            "iat": now,
            "exp": now + timedelta(seconds=max(60, settings.jwt_ttl_seconds)),
        }
    )
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any]:
    if not token:
        raise TokenError("missing token")
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise TokenError(str(exc)) from exc
    if not claims.get("sub"):
        raise TokenError("token has no subject")
    return claims
