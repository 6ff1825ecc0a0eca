# tests/conftest.py
from __future__ import annotations

import asyncio
import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("KV_BACKEND", "sql")

from social_timer.client.api_client import CounterApiError
from social_timer.db.session import Base, build_engine
from social_timer.db.session import get_db as app_get_session
from social_timer.main import app as fastapi_app
from social_timer.services.counter_store import CounterStore, CounterStoreError
from social_timer.services.kv_store import KeyValueStoreError, MemoryKeyValueStore

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def memory_store() -> MemoryKeyValueStore:
    """Return a fresh in-process key-value store."""
    return MemoryKeyValueStore()


class FailingKeyValueStore:
    """Key-value store whose reads and/or writes always fail."""

    def __init__(self, *, fail_reads: bool = True, fail_writes: bool = True) -> None:
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.data: dict[str, object] = {}

    def get_json(self, key: str) -> object | None:
        if self.fail_reads:
            raise KeyValueStoreError("read failed")
        return self.data.get(key)

    def set_json(self, key: str, value: object) -> None:
        if self.fail_writes:
            raise KeyValueStoreError("write failed")
        self.data[key] = value


@pytest.fixture()
def failing_store() -> FailingKeyValueStore:
    return FailingKeyValueStore()


class FakeCounterApi:
    """Stand-in for CounterApiClient backed by a local CounterStore.

    ``gate`` can be cleared to hold ``get_count`` calls in flight.
    """

    def __init__(self, store: CounterStore | None = None) -> None:
        self.store = store or CounterStore(MemoryKeyValueStore())
        self.get_calls: list[int] = []
        self.reset_calls: list[int] = []
        self.fail_resets = False
        self.gate = asyncio.Event()
        self.gate.set()
        self.closed = False

    async def get_count(self, fallback_epoch: int) -> int:
        self.get_calls.append(fallback_epoch)
        await self.gate.wait()
        return self.store.get_or_initialize(fallback_epoch)

    async def reset_count(self, new_epoch: int) -> int:
        self.reset_calls.append(new_epoch)
        if self.fail_resets:
            raise CounterApiError("reset_count responded with 503: write failed")
        try:
            return self.store.set(new_epoch)
        except CounterStoreError as exc:
            raise CounterApiError(str(exc)) from exc

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_api() -> FakeCounterApi:
    return FakeCounterApi()


class FakeClock:
    """Settable clock returning whole Unix seconds."""

    def __init__(self, now: int = 1000) -> None:
        self.now = now

    def __call__(self) -> float:
        return float(self.now)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
