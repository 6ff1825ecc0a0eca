# src/social_timer/services/__init__.py
"""Business logic services for the Social Timer application."""

from .breakdown import ElapsedTime, format_duration, format_elapsed
from .counter_store import COUNTER_KEY, CounterStore, CounterStoreError
from .kv_store import (
    KeyValueStore,
    KeyValueStoreError,
    MemoryKeyValueStore,
    RedisKeyValueStore,
    SqlKeyValueStore,
    build_kv_store,
)

__all__ = [
    "ElapsedTime", "format_elapsed", "format_duration",
    "COUNTER_KEY", "CounterStore", "CounterStoreError",
    "KeyValueStore", "KeyValueStoreError",
    "MemoryKeyValueStore", "RedisKeyValueStore", "SqlKeyValueStore",
    "build_kv_store",
]
