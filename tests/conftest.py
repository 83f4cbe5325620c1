from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Make the catapi package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catapi.core import config as core_config  # noqa: E402
from catapi.core.security import create_access_token, hash_password  # noqa: E402
from catapi.db import models  # noqa: E402
from catapi.db import session as db_session  # noqa: E402
from catapi.db.models import ROLE_ADMIN, ROLE_USER  # noqa: E402
from catapi.repositories.sql_repository import SQLRepository  # noqa: E402

PASSWORD = "correct-horse"


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Temporary SQLite database and uploads directory, with settings/engine caches reset."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("JWT_SECRET", "tests-secret")
    monkeypatch.setenv("APP_ENV", "test")
    _reset_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield tmp_path

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    _reset_caches()


@pytest.fixture()
def settings(db_env):
    return core_config.get_settings()


@pytest.fixture()
def repo(db_env):
    return SQLRepository()


@pytest.fixture()
def make_user(repo):
    counter = {"n": 0}

    def _make(name: str | None = None, *, role: str = ROLE_USER, password: str = PASSWORD):
        counter["n"] += 1
        name = name or f"user{counter['n']}"
        return repo.create_user(
            user_name=name,
            email=f"{name}@example.com",
            password_hash=hash_password(password),
            role=role,
        )

    return _make


@pytest.fixture()
def admin(make_user):
    return make_user("admin", role=ROLE_ADMIN)


@pytest.fixture()
def make_cat(repo):
    def _make(owner, *, name: str = "Mittens", lng: float = 24.9, lat: float = 60.2):
        return repo.create_cat(
            cat_name=name,
            weight=4.2,
            birthdate=date(2020, 5, 17),
            filename="mittens.jpg",
            lng=lng,
            lat=lat,
            owner_id=owner.id,
        )

    return _make


@pytest.fixture()
def auth_header(settings):
    def _header(user) -> dict:
        token = create_access_token(settings, user.id, {"role": user.role})
        return {"Authorization": f"Bearer {token}"}

    return _header


@pytest.fixture()
def client(db_env):
    from fastapi.testclient import TestClient

    from catapi.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
