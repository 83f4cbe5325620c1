"""
Authentication use cases: credential login and bearer-token resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from catapi.core.config import Settings
from catapi.core.errors import NotAuthorizedError
from catapi.core.security import TokenError, create_access_token, decode_access_token, verify_password
from catapi.db.models import User
from catapi.repositories.sql_repository import SQLRepository
from catapi.schemas import Credentials
from catapi.services.user_service import public_user

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


@dataclass
class LoginResult:
    token: str
    user: dict
    message: str = "Login successful"


class AuthService:
    """Issues JWTs for valid credentials and maps tokens back to users."""

    def __init__(self, repository: SQLRepository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings

    def login(self, credentials: Credentials) -> LoginResult:
        user = self.repository.get_user_by_email(credentials.email)
        if not user or not verify_password(credentials.password, user.password):
            logger.info("Rejected login for %s", credentials.email)
            raise NotAuthorizedError("Incorrect username/password")
        token = create_access_token(self.settings, user.id, {"role": user.role})
        return LoginResult(token=token, user=public_user(user))

    def user_from_token(self, token: str) -> User:
        try:
            claims = decode_access_token(self.settings, token)
        except TokenError as exc:
            raise NotAuthorizedError("Not authorized") from exc
        user = self.repository.get_user(claims["sub"])
        if not user:
            raise NotAuthorizedError("Not authorized")
        return user

    def user_from_header(self, authorization: Optional[str]) -> Optional[User]:
        """Resolve an ``Authorization: Bearer`` header; anonymous when absent or invalid."""
        value = (authorization or "").strip()
        if not value.lower().startswith(BEARER_PREFIX):
            return None
        try:
            return self.user_from_token(value[len(BEARER_PREFIX):].strip())
        except NotAuthorizedError:
            return None
