"""ASGI entry point: ``uvicorn catapi.main:app``."""
from __future__ import annotations

import os

import uvicorn

from catapi.app import create_app
from catapi.db.create_tables import create_all

create_all()
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "catapi.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
