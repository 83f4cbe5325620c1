"""
Cat use cases. Every write goes through the shared ownership policy.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple

from catapi.core.config import Settings
from catapi.core.errors import BadRequestError, NotFoundError
from catapi.db.models import Cat, User
from catapi.domain.authorization import ensure_admin, ensure_authenticated, ensure_can_modify
from catapi.domain.geo import rectangle_bounds
from catapi.repositories.sql_repository import SQLRepository
from catapi.schemas import CatAdminModify, CatCreate, CatModify
from catapi.services.user_service import public_user

logger = logging.getLogger(__name__)


def cat_to_dict(entity: Cat) -> dict:
    return {
        "id": entity.id,
        "cat_name": entity.cat_name,
        "weight": entity.weight,
        "filename": entity.filename,
        "birthdate": entity.birthdate.isoformat() if entity.birthdate else None,
        "location": entity.location,
        "owner": public_user(entity.owner) if entity.owner is not None else None,
    }


def _changes(data: CatModify) -> dict:
    values = data.model_dump(exclude_none=True, exclude={"location", "owner"})
    if data.location is not None:
        values["lng"] = data.location.lng
        values["lat"] = data.location.lat
    return values


class CatService:
    def __init__(self, repository: SQLRepository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings

    def _load(self, cat_id: str) -> Cat:
        entity = self.repository.get_cat(cat_id)
        if not entity:
            raise NotFoundError("Cat not found")
        return entity

    def _update(self, cat_id: str, values: dict) -> dict:
        entity = self.repository.update_cat(cat_id, values)
        if not entity:
            raise NotFoundError("Cat not found")
        return cat_to_dict(entity)

    def _delete(self, cat_id: str) -> dict:
        entity = self.repository.delete_cat(cat_id)
        if not entity:
            raise NotFoundError("Cat not found")
        logger.info("Deleted cat %s", cat_id)
        return cat_to_dict(entity)

    # -------------------------------------- queries --------------------------------------
    def list_cats(self) -> list[dict]:
        return [cat_to_dict(c) for c in self.repository.list_cats()]

    def get_cat(self, cat_id: str) -> dict:
        return cat_to_dict(self._load(cat_id))

    def cats_by_owner(self, owner_id: str) -> list[dict]:
        return [cat_to_dict(c) for c in self.repository.get_cats_by_owner(owner_id)]

    def cats_by_area(self, top_right: Mapping[str, Any], bottom_left: Mapping[str, Any]) -> list[dict]:
        try:
            bounds = rectangle_bounds(top_right, bottom_left)
        except ValueError as exc:
            raise BadRequestError(str(exc)) from exc
        return [cat_to_dict(c) for c in self.repository.get_cats_within(bounds)]

    # -------------------------------------- mutations --------------------------------------
    def create_cat(
        self,
        caller: User | None,
        data: CatCreate,
        *,
        filename: Optional[str] = None,
        gps: Optional[Tuple[float, float]] = None,
    ) -> dict:
        """
        Create a cat owned by ``caller``.

        Location precedence: image GPS, then ``data.location``, then the
        configured default point.
        """
        ensure_authenticated(caller)
        if gps is not None:
            lng, lat = gps
        elif data.location is not None:
            lng, lat = data.location.lng, data.location.lat
        else:
            lng, lat = self.settings.default_lng, self.settings.default_lat
        entity = self.repository.create_cat(
            cat_name=data.cat_name,
            weight=data.weight,
            birthdate=data.birthdate,
            filename=filename if filename is not None else data.filename,
            lng=lng,
            lat=lat,
            owner_id=caller.id,
        )
        logger.info("User %s created cat %s", caller.id, entity.id)
        return cat_to_dict(entity)

    def update_cat(self, caller: User | None, cat_id: str, data: CatModify) -> dict:
        ensure_authenticated(caller)
        entity = self._load(cat_id)
        ensure_can_modify(entity.owner_id, caller)
        return self._update(cat_id, _changes(data))

    def delete_cat(self, caller: User | None, cat_id: str) -> dict:
        ensure_authenticated(caller)
        entity = self._load(cat_id)
        ensure_can_modify(entity.owner_id, caller)
        return self._delete(cat_id)

    def update_as_admin(self, caller: User | None, cat_id: str, data: CatAdminModify) -> dict:
        ensure_admin(caller)
        values = _changes(data)
        if data.owner is not None:
            if not self.repository.get_user(data.owner):
                raise BadRequestError("Owner not found")
            values["owner_id"] = data.owner
        return self._update(cat_id, values)

    def delete_as_admin(self, caller: User | None, cat_id: str) -> dict:
        ensure_admin(caller)
        return self._delete(cat_id)
