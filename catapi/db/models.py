"""SQLAlchemy models for users and their cats."""
from __future__ import annotations

import secrets

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


def new_id() -> str:
    """24 hex characters, the same shape as a document-store object id."""
    return secrets.token_hex(12)


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=new_id)
    user_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(String(16), nullable=False, default=ROLE_USER, server_default=ROLE_USER)
    password = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    cats = relationship("Cat", back_populates="owner", cascade="all,delete-orphan", passive_deletes=True)


class Cat(Base):
    __tablename__ = "cats"

    id = Column(String(24), primary_key=True, default=new_id)
    cat_name = Column(String(255), nullable=False)
    weight = Column(Float, nullable=False)
    filename = Column(String(255), nullable=False, default="")
    birthdate = Column(Date, nullable=False)
    # GeoJSON Point split into columns so the bounding-box envelope can be filtered in SQL
    lng = Column(Float, nullable=False, index=True)
    lat = Column(Float, nullable=False, index=True)
    owner_id = Column(String(24), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    owner = relationship("User", back_populates="cats")

    @property
    def location(self) -> dict:
        return {"type": "Point", "coordinates": [self.lng, self.lat]}
