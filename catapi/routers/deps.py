"""Shared router dependencies: services from app.state and the bearer-token user."""
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catapi.core.config import Settings
from catapi.core.errors import NotAuthorizedError
from catapi.db.models import User
from catapi.services.auth_service import AuthService
from catapi.services.cat_service import CatService
from catapi.services.user_service import UserService

_bearer = HTTPBearer(auto_error=False)


def _state(request: Request, name: str):
    value = getattr(getattr(request.app, "state", None), name, None)
    if value is None:
        raise RuntimeError(f"{name} is not configured")
    return value


def get_settings_dep(request: Request) -> Settings:
    return _state(request, "settings")


def get_user_service(request: Request) -> UserService:
    return _state(request, "user_service")


def get_cat_service(request: Request) -> CatService:
    return _state(request, "cat_service")


def get_auth_service(request: Request) -> AuthService:
    return _state(request, "auth_service")


def current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise NotAuthorizedError("Not authorized")
    return auth.user_from_token(credentials.credentials)
