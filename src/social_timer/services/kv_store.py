"""Key-value storage backends for persisted application state.

The counter treats storage as an opaque get/set-by-key service holding
JSON-encoded values. Three interchangeable backends are provided:

- ``SqlKeyValueStore``: a row per key in the ``key_value`` table
- ``RedisKeyValueStore``: plain Redis strings
- ``MemoryKeyValueStore``: an in-process dict, useful for tests and demos
"""

from __future__ import annotations

import json
import logging
from threading import Lock
from typing import Any, Protocol

import redis
from sqlalchemy import insert, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from social_timer.core.settings import settings
from social_timer.models import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStoreError(RuntimeError):
    """Raised when the underlying storage cannot be read or written."""


class KeyValueStore(Protocol):
    """Minimal interface every storage backend provides."""

    def get_json(self, key: str) -> Any | None:
        """Return the decoded value stored under ``key`` or None if absent."""

    def set_json(self, key: str, value: Any) -> None:
        """Store ``value`` JSON-encoded under ``key``, replacing any prior value."""


def _decode(key: str, raw: str | bytes) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise KeyValueStoreError(f"Stored value for {key!r} is not valid JSON") from exc


_NATIVE_UPSERT = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


class SqlKeyValueStore:
    """Key-value store backed by the ``key_value`` table.

    Writes are single-statement upserts, so concurrent writers to the same
    key never collide on the primary key: the last committed write wins.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_json(self, key: str) -> Any | None:
        try:
            # Writes bypass the identity map, so always reload the row.
            entry = self.db.get(KeyValueEntry, key, populate_existing=True)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise KeyValueStoreError(f"Failed to read {key!r}: {exc}") from exc

        if entry is None:
            return None
        return _decode(key, entry.value)

    def set_json(self, key: str, value: Any) -> None:
        encoded = json.dumps(value)
        try:
            self._upsert(key, encoded)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise KeyValueStoreError(f"Failed to write {key!r}: {exc}") from exc

    def _upsert(self, key: str, encoded: str) -> None:
        table = KeyValueEntry.__table__
        dialect = self.db.get_bind().dialect.name
        native_insert = _NATIVE_UPSERT.get(dialect)
        if native_insert is not None:
            stmt = native_insert(table).values(key=key, value=encoded)
            self.db.execute(
                stmt.on_conflict_do_update(index_elements=[table.c.key], set_={"value": encoded})
            )
            return

        overwrite = update(table).where(table.c.key == key).values(value=encoded)
        if self.db.execute(overwrite).rowcount:
            return
        try:
            with self.db.begin_nested():
                self.db.execute(insert(table).values(key=key, value=encoded))
        except IntegrityError:
            # Another writer inserted the key first.
            self.db.execute(overwrite)


class RedisKeyValueStore:
    """Key-value store backed by Redis strings."""

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    def get_json(self, key: str) -> Any | None:
        try:
            raw = self.client.get(key)
        except redis.RedisError as exc:
            raise KeyValueStoreError(f"Failed to read {key!r}: {exc}") from exc

        if raw is None:
            return None
        return _decode(key, raw)

    def set_json(self, key: str, value: Any) -> None:
        try:
            self.client.set(key, json.dumps(value))
        except redis.RedisError as exc:
            raise KeyValueStoreError(f"Failed to write {key!r}: {exc}") from exc


class MemoryKeyValueStore:
    """Process-local key-value store.

    Values are kept JSON-encoded so reads behave exactly like the
    persistent backends (fresh objects, JSON type coercions).
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = Lock()

    def get_json(self, key: str) -> Any | None:
        with self._lock:
            raw = self._data.get(key)
        if raw is None:
            return None
        return _decode(key, raw)

    def set_json(self, key: str, value: Any) -> None:
        encoded = json.dumps(value)
        with self._lock:
            self._data[key] = encoded

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class _MemoryStoreSingleton:
    """Singleton wrapper for the process-wide memory store."""

    _instance: MemoryKeyValueStore | None = None

    @classmethod
    def get_instance(cls) -> MemoryKeyValueStore:
        if cls._instance is None:
            cls._instance = MemoryKeyValueStore()
        return cls._instance


class _RedisClientSingleton:
    """Singleton wrapper for the shared Redis connection pool."""

    _instance: redis.Redis | None = None

    @classmethod
    def get_instance(cls) -> redis.Redis:
        if cls._instance is None:
            cls._instance = redis.from_url(settings.redis_url)
        return cls._instance


def build_kv_store(db: Session | None = None, backend: str | None = None) -> KeyValueStore:
    """Return the configured key-value store.

    Args:
        db: Database session, required for the ``sql`` backend
        backend: Override for ``settings.kv_backend``

    Returns:
        A store implementing :class:`KeyValueStore`
    """
    backend = backend or settings.kv_backend
    if backend == "sql":
        if db is None:
            raise ValueError("The sql key-value backend requires a database session")
        return SqlKeyValueStore(db)
    if backend == "redis":
        return RedisKeyValueStore(_RedisClientSingleton.get_instance())
    if backend == "memory":
        return _MemoryStoreSingleton.get_instance()

    raise ValueError(f"Unknown key-value backend: {backend!r}")
