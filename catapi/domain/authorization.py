"""Ownership policy shared by the REST routers and the GraphQL resolvers."""
from __future__ import annotations

import logging
from typing import Any, Optional

from catapi.core.errors import NotAuthorizedError
from catapi.db.models import ROLE_ADMIN

logger = logging.getLogger(__name__)


def is_admin(role: Any) -> bool:
    return str(role or "").strip().lower() == ROLE_ADMIN


def can_modify(owner_id: Optional[str], caller_id: Optional[str], caller_role: Any) -> bool:
    """Owner or admin may mutate a record."""
    if is_admin(caller_role):
        return True
    if not owner_id or not caller_id:
        return False
    return str(owner_id) == str(caller_id)


def ensure_authenticated(caller) -> None:
    if caller is None:
        raise NotAuthorizedError("Not authorized")


def ensure_can_modify(owner_id: Optional[str], caller) -> None:
    ensure_authenticated(caller)
    if not can_modify(owner_id, caller.id, caller.role):
        logger.warning("User %s denied write on record owned by %s", caller.id, owner_id)
        raise NotAuthorizedError("Not authorized")


def ensure_admin(caller) -> None:
    ensure_authenticated(caller)
    if not is_admin(caller.role):
        logger.warning("User %s denied admin operation", caller.id)
        raise NotAuthorizedError("Admin only")
