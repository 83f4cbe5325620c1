"""
Configuration helpers for the cat API.

Routers and services receive a Settings instance instead of reading
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    jwt_secret: str
    jwt_algorithm: str
    jwt_ttl_seconds: int
    uploads_dir: str
    default_lat: float
    default_lng: float
    cors_origins: tuple[str, ...]
    log_level: str
    api_prefix: str = "/api/v1"


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None) -> tuple[str, ...]:
        if not value:
            return ()
        return tuple(item.strip().rstrip("/") for item in value.split(",") if item.strip())

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    cors = _list(os.getenv("CORS_ORIGINS"))
    if not cors and app_env != "prod":
        cors = (
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        )

    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./catapi.db"),
        jwt_secret=os.getenv("JWT_SECRET", "change-me"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_ttl_seconds=_int(os.getenv("JWT_TTL_SECONDS", "86400"), 86400),
        uploads_dir=os.getenv("UPLOADS_DIR", "./uploads"),
        default_lat=_float(os.getenv("DEFAULT_LAT", "61"), 61.0),
        default_lng=_float(os.getenv("DEFAULT_LNG", "24"), 24.0),
        cors_origins=cors,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
