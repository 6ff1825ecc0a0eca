# mypy: ignore-errors
"""Tests for the persisted reset epoch."""

from __future__ import annotations

import pytest

from sqlalchemy.orm import Session

from social_timer.services.counter_store import COUNTER_KEY, CounterStore, CounterStoreError
from social_timer.services.kv_store import SqlKeyValueStore


def test_empty_store_initializes_to_fallback(memory_store) -> None:
    store = CounterStore(memory_store)

    assert store.get_or_initialize(1000) == 1000
    assert memory_store.get_json(COUNTER_KEY) == 1000


def test_initialization_is_idempotent(memory_store) -> None:
    store = CounterStore(memory_store)
    store.get_or_initialize(1000)

    assert store.get_or_initialize(2000) == 1000
    assert memory_store.get_json(COUNTER_KEY) == 1000


def test_set_overwrites(memory_store) -> None:
    store = CounterStore(memory_store)
    store.get_or_initialize(1000)

    assert store.set(1090) == 1090
    assert store.get_or_initialize(5) == 1090


def test_read_failure_reinitializes(failing_store) -> None:
    failing_store.fail_writes = False
    store = CounterStore(failing_store)

    assert store.get_or_initialize(42) == 42
    assert failing_store.data[COUNTER_KEY] == 42


@pytest.mark.parametrize("stored", ["text", -5, 1.5, True, [1]])
def test_invalid_stored_value_reinitializes(memory_store, stored) -> None:
    memory_store.set_json(COUNTER_KEY, stored)
    store = CounterStore(memory_store)

    assert store.get_or_initialize(77) == 77
    assert memory_store.get_json(COUNTER_KEY) == 77


def test_set_failure_is_surfaced(failing_store) -> None:
    with pytest.raises(CounterStoreError):
        CounterStore(failing_store).set(10)


def test_initialization_write_failure_is_surfaced(failing_store) -> None:
    """A failed self-heal write must not pretend the fallback was stored."""
    with pytest.raises(CounterStoreError):
        CounterStore(failing_store).get_or_initialize(10)


def test_custom_key(memory_store) -> None:
    CounterStore(memory_store, key="other").set(3)
    assert memory_store.get_json("other") == 3
    assert memory_store.get_json(COUNTER_KEY) is None


def test_sql_backed_store(db_session) -> None:
    store = CounterStore(SqlKeyValueStore(db_session))

    assert store.get_or_initialize(1000) == 1000
    assert store.get_or_initialize(2000) == 1000
    assert store.set(1090) == 1090
    assert store.get_or_initialize(0) == 1090


def test_concurrent_resets_last_write_wins(db_session, engine) -> None:
    other_session = Session(bind=engine)
    try:
        first = CounterStore(SqlKeyValueStore(db_session))
        second = CounterStore(SqlKeyValueStore(other_session))

        second.set(2000)
        assert first.set(3000) == 3000
        assert second.get_or_initialize(0) == 3000
    finally:
        other_session.close()
