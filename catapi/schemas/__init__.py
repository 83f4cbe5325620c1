"""Pydantic input models shared by the REST routers and GraphQL resolvers."""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from catapi.core.errors import BadRequestError, validation_message

from .cat import CatAdminModify, CatCreate, CatModify, Coordinates, Location
from .user import Credentials, UserCreate, UserModify

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_input(model: Type[ModelT], data: Mapping[str, Any] | None) -> ModelT:
    """Validate raw input, turning pydantic errors into a BadRequestError."""
    try:
        return model.model_validate(dict(data or {}))
    except ValidationError as exc:
        raise BadRequestError(validation_message(exc.errors())) from exc


__all__ = [
    "CatAdminModify",
    "CatCreate",
    "CatModify",
    "Coordinates",
    "Credentials",
    "Location",
    "UserCreate",
    "UserModify",
    "parse_input",
]
