"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from catapi.db.models import ROLE_USER, ROLES, Cat, User
from catapi.db.session import get_session
from catapi.domain.geo import envelope, within


class DuplicateEmailError(Exception):
    """Raised when a user write collides with the unique email index."""


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def list_users(self) -> list[User]:
        with get_session() as session:
            return list(session.execute(select(User).order_by(User.created_at, User.id)).scalars().all())

    def create_user(self, user_name: str, email: str, password_hash: str, role: str = ROLE_USER) -> User:
        if role not in ROLES:
            raise ValueError(f"Unknown role {role!r}")
        now = datetime.now(timezone.utc)
        entity = User(
            user_name=user_name,
            email=email,
            password=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateEmailError(email) from exc
            session.refresh(entity)
            return entity

    def update_user(self, user_id: str, values: Mapping[str, Any]) -> Optional[User]:
        with get_session() as session:
            entity = session.get(User, user_id)
            if not entity:
                return None
            for key, value in values.items():
                setattr(entity, key, value)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateEmailError(values.get("email", "")) from exc
            session.refresh(entity)
            return entity

    def delete_user(self, user_id: str) -> Optional[User]:
        """Delete a user and the cats they own; returns the removed row."""
        with get_session() as session:
            entity = session.get(User, user_id)
            if not entity:
                return None
            session.execute(delete(Cat).where(Cat.owner_id == user_id))
            session.execute(delete(User).where(User.id == user_id))
            session.commit()
            return entity

    # -------------------------- cats --------------------------
    def _cat_query(self):
        return select(Cat).options(selectinload(Cat.owner))

    def get_cat(self, cat_id: str) -> Optional[Cat]:
        with get_session() as session:
            stmt = self._cat_query().where(Cat.id == cat_id)
            return session.execute(stmt).scalar_one_or_none()

    def list_cats(self) -> list[Cat]:
        with get_session() as session:
            stmt = self._cat_query().order_by(Cat.created_at, Cat.id)
            return list(session.execute(stmt).scalars().all())

    def get_cats_by_owner(self, owner_id: str) -> list[Cat]:
        with get_session() as session:
            stmt = self._cat_query().where(Cat.owner_id == owner_id).order_by(Cat.created_at, Cat.id)
            return list(session.execute(stmt).scalars().all())

    def get_cats_within(self, polygon: Mapping[str, Any]) -> list[Cat]:
        """Cats whose point lies inside ``polygon`` (envelope in SQL, exact test in shapely)."""
        min_lng, min_lat, max_lng, max_lat = envelope(polygon)
        with get_session() as session:
            stmt = (
                self._cat_query()
                .where(Cat.lng.between(min_lng, max_lng), Cat.lat.between(min_lat, max_lat))
                .order_by(Cat.created_at, Cat.id)
            )
            candidates = session.execute(stmt).scalars().all()
        return [cat for cat in candidates if within(cat.lng, cat.lat, polygon)]

    def create_cat(
        self,
        *,
        cat_name: str,
        weight: float,
        birthdate: date,
        filename: str,
        lng: float,
        lat: float,
        owner_id: str,
    ) -> Cat:
        now = datetime.now(timezone.utc)
        entity = Cat(
            cat_name=cat_name,
            weight=weight,
            birthdate=birthdate,
            filename=filename,
            lng=lng,
            lat=lat,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            cat_id = entity.id
            session.expire_all()
            return session.execute(self._cat_query().where(Cat.id == cat_id)).scalar_one()

    def update_cat(self, cat_id: str, values: Mapping[str, Any]) -> Optional[Cat]:
        with get_session() as session:
            entity = session.get(Cat, cat_id)
            if not entity:
                return None
            for key, value in values.items():
                setattr(entity, key, value)
            session.commit()
            session.expire_all()
            return session.execute(self._cat_query().where(Cat.id == cat_id)).scalar_one()

    def delete_cat(self, cat_id: str) -> Optional[Cat]:
        with get_session() as session:
            entity = session.execute(self._cat_query().where(Cat.id == cat_id)).scalar_one_or_none()
            if not entity:
                return None
            session.execute(delete(Cat).where(Cat.id == cat_id))
            session.commit()
            return entity
