from __future__ import annotations

import logging
import os
from typing import Optional

from ariadne.asgi import GraphQL
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from catapi.core.config import Settings, get_settings
from catapi.core.errors import ApiError, validation_message
from catapi.core.logging import configure_logging
from catapi.gql import build_context, format_error, schema
from catapi.repositories.sql_repository import SQLRepository
from catapi.routers import auth as auth_router
from catapi.routers import cats as cats_router
from catapi.routers import users as users_router
from catapi.services.auth_service import AuthService
from catapi.services.cat_service import CatService
from catapi.services.user_service import UserService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _install_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(_request: Request, exc: ApiError):
        return JSONResponse({"message": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError):
        return JSONResponse({"message": validation_message(exc.errors())}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException):
        return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = str(exc) if settings.app_env == "dev" else "Internal server error"
        return JSONResponse({"message": message}, status_code=500)


def create_app(settings: Optional[Settings] = None, repository: Optional[SQLRepository] = None) -> FastAPI:
    """Build the REST + GraphQL application with its services wired on app.state."""
    settings = settings or get_settings()
    repository = repository or SQLRepository()
    configure_logging(level=settings.log_level)

    app = FastAPI(title="Cat API")
    app.state.settings = settings
    app.state.user_service = UserService(repository)
    app.state.auth_service = AuthService(repository, settings)
    app.state.cat_service = CatService(repository, settings)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    _install_error_handlers(app, settings)

    app.include_router(auth_router.router, prefix=settings.api_prefix)
    app.include_router(users_router.router, prefix=settings.api_prefix)
    app.include_router(cats_router.router, prefix=settings.api_prefix)

    graphql_app = GraphQL(
        schema,
        context_value=build_context,
        error_formatter=format_error,
        debug=settings.app_env == "dev",
    )

    @app.get("/graphql")
    async def graphql_explorer(request: Request):
        return await graphql_app.handle_request(request)

    @app.post("/graphql")
    async def graphql_query(request: Request):
        return await graphql_app.handle_request(request)

    os.makedirs(settings.uploads_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")

    logger.info("Cat API ready (env=%s, prefix=%s)", settings.app_env, settings.api_prefix)
    return app
