"""Error taxonomy shared by the REST and GraphQL surfaces."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


class ApiError(Exception):
    """Base error carrying a message, a GraphQL code and an HTTP status."""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(ApiError):
    code = "BAD_USER_INPUT"
    status_code = 400


class NotAuthorizedError(ApiError):
    code = "NOT_AUTHORIZED"
    status_code = 401


class NotFoundError(ApiError):
    code = "NOT_FOUND"
    status_code = 404


class InternalError(ApiError):
    pass


def validation_message(errors: Iterable[Mapping[str, Any]]) -> str:
    """
    Flatten pydantic error dicts into "<msg>: <field>, <msg>: <field>".

    The leading "body"/"query"/"path" location segment added by FastAPI is dropped.
    """
    parts = []
    for error in errors:
        loc = [str(item) for item in error.get("loc", ()) if item not in ("body", "query", "path", "form")]
        field = ".".join(loc) or "input"
        parts.append(f"{error.get('msg', 'Invalid value')}: {field}")
    return ", ".join(parts) or "Invalid input"
