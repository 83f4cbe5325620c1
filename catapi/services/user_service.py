"""User use cases: registration, profile updates and admin moderation."""

from __future__ import annotations

import logging

from catapi.core.errors import BadRequestError, NotFoundError
from catapi.core.security import hash_password
from catapi.db.models import User
from catapi.domain.authorization import ensure_admin, ensure_authenticated
from catapi.repositories.sql_repository import DuplicateEmailError, SQLRepository
from catapi.schemas import UserCreate, UserModify

logger = logging.getLogger(__name__)


def public_user(entity: User) -> dict:
    """Projection safe to return to clients: no password, no role."""
    return {
        "id": entity.id,
        "user_name": entity.user_name,
        "email": entity.email,
    }


class UserService:
    """Reads and writes users through the repository, hashing passwords on the way in."""

    def __init__(self, repository: SQLRepository) -> None:
        self.repository = repository

    # -------------------------------------- helpers --------------------------------------
    def _changes(self, data: UserModify) -> dict:
        values = data.model_dump(exclude_none=True)
        if "password" in values:
            values["password"] = hash_password(values["password"])
        return values

    def _update(self, user_id: str, data: UserModify) -> User:
        try:
            entity = self.repository.update_user(user_id, self._changes(data))
        except DuplicateEmailError as exc:
            raise BadRequestError("Email already in use") from exc
        if not entity:
            raise NotFoundError("User not found")
        return entity

    def _delete(self, user_id: str) -> User:
        entity = self.repository.delete_user(user_id)
        if not entity:
            raise NotFoundError("User not found")
        logger.info("Deleted user %s", user_id)
        return entity

    # -------------------------------------- queries --------------------------------------
    def list_users(self) -> list[dict]:
        return [public_user(u) for u in self.repository.list_users()]

    def get_user(self, user_id: str) -> dict:
        entity = self.repository.get_user(user_id)
        if not entity:
            raise NotFoundError("User not found")
        return public_user(entity)

    def check_token(self, caller: User | None) -> dict:
        ensure_authenticated(caller)
        return public_user(caller)

    # -------------------------------------- mutations --------------------------------------
    def create_user(self, data: UserCreate) -> dict:
        try:
            entity = self.repository.create_user(
                user_name=data.user_name,
                email=data.email,
                password_hash=hash_password(data.password),
            )
        except DuplicateEmailError as exc:
            raise BadRequestError("Email already in use") from exc
        logger.info("Created user %s", entity.id)
        return public_user(entity)

    def update_current(self, caller: User | None, data: UserModify) -> dict:
        ensure_authenticated(caller)
        return public_user(self._update(caller.id, data))

    def delete_current(self, caller: User | None) -> dict:
        ensure_authenticated(caller)
        return public_user(self._delete(caller.id))

    def update_as_admin(self, caller: User | None, user_id: str, data: UserModify) -> dict:
        ensure_admin(caller)
        return public_user(self._update(user_id, data))

    def delete_as_admin(self, caller: User | None, user_id: str) -> dict:
        ensure_admin(caller)
        return public_user(self._delete(user_id))
