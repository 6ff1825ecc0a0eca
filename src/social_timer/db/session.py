"""Engine and session factory for the key-value table.

SQLite is the default database. Its connections are shared with the
threadpool FastAPI runs sync dependencies in, and an in-memory database
only exists for as long as its single connection does.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from social_timer.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for the ORM models."""


# Models register themselves on Base.metadata when imported.
import social_timer.models  # noqa: E402,F401


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for ``url`` with SQLite-specific connection handling."""
    options: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
    return create_engine(url, **options)


engine = build_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create the ``key_value`` table if it does not exist yet."""
    Base.metadata.create_all(bind=engine)
