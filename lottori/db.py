"""SQLAlchemy engine + session factory for the optional SQL backend.

With the default JSON backend no engine is created. Draws are read once at
startup through ``app.extensions["session_factory"]``, so there is no
per-request session.
"""

from __future__ import annotations

from flask import Flask
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from lottori.models.base import Base


def create_app_engine(database_url: str) -> Engine:
    return create_engine(database_url, pool_pre_ping=True, future=True)


def init_db(app: Flask) -> None:
    """Initialize the database engine when ``DB_BACKEND`` is ``sql``."""

    if str(app.config.get("DB_BACKEND", "json")).lower() != "sql":
        return

    engine = create_app_engine(str(app.config["DATABASE_URL"]))
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    # Production databases are created with scripts/create_tables.py.
    Base.metadata.create_all(bind=engine)

    app.extensions["engine"] = engine
    app.extensions["session_factory"] = session_factory
