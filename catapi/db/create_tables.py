"""Create (or recreate) the users/cats schema on the configured database."""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from catapi.core.config import get_settings
from catapi.core.logging import configure_logging

from .session import Base, get_engine
from . import models  # noqa: F401  # registers User/Cat on Base.metadata

logger = logging.getLogger(__name__)


def create_all(*, drop: bool = False) -> None:
    engine = get_engine()
    if drop:
        logger.warning("Dropping all tables on %s", engine.url.render_as_string(hide_password=True))
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def main() -> None:
    ap = argparse.ArgumentParser(description="Create the cat API tables")
    ap.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = ap.parse_args()

    configure_logging(level=get_settings().log_level)
    try:
        create_all(drop=args.drop)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    logger.info("Database tables created")


if __name__ == "__main__":
    main()
