"""
GraphQL surface: executable schema, per-request context and error formatting.

Resolvers call the same services as the REST routers; ApiError subclasses are
reported with ``extensions.code`` (NOT_FOUND, NOT_AUTHORIZED, ...).
"""
from __future__ import annotations

import logging

from ariadne import format_error as default_format_error
from ariadne import make_executable_schema
from graphql import GraphQLError
from starlette.concurrency import run_in_threadpool

from catapi.core.errors import ApiError, InternalError

from . import cat_resolvers, user_resolvers
from .schema import type_defs

logger = logging.getLogger(__name__)

schema = make_executable_schema(
    type_defs,
    cat_resolvers.query,
    cat_resolvers.mutation,
    user_resolvers.query,
    user_resolvers.mutation,
)


async def build_context(request, _data=None) -> dict:
    """Context for one operation: services from app.state plus the bearer-token user."""
    state = request.app.state
    user = await run_in_threadpool(state.auth_service.user_from_header, request.headers.get("authorization"))
    return {
        "request": request,
        "user": user,
        "user_service": state.user_service,
        "cat_service": state.cat_service,
        "auth_service": state.auth_service,
    }


def format_error(error: GraphQLError, debug: bool = False) -> dict:
    formatted = default_format_error(error, debug)
    original = error.original_error
    if original is None:
        return formatted
    extensions = dict(formatted.get("extensions") or {})
    if isinstance(original, ApiError):
        extensions["code"] = original.code
    else:
        logger.error("Unhandled error in resolver", exc_info=original)
        extensions["code"] = InternalError.code
        if not debug:
            formatted["message"] = "Internal server error"
    formatted["extensions"] = extensions
    return formatted


__all__ = ["build_context", "format_error", "schema"]
