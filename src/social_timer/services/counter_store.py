"""Persisted reset epoch of the shared timer.

The only durable state of the application is a single integer: the Unix
timestamp of the last reset. It lives under one well-known key of the
key-value store. Reads self-heal: a missing or unreadable value is replaced
by the caller's fallback epoch. Writes do not: a failed write is reported
to the caller so a reset is never mistaken for a successful one.

There is no locking. Concurrent resets are last-write-wins.
"""

from __future__ import annotations

import logging
from typing import Final

from social_timer.core.settings import settings
from social_timer.services.kv_store import KeyValueStore, KeyValueStoreError

logger = logging.getLogger(__name__)

COUNTER_KEY: Final[str] = "social_timer_count"


class CounterStoreError(RuntimeError):
    """Raised when the reset epoch cannot be persisted."""


class CounterStore:
    """Get and set the persisted reset epoch."""

    def __init__(self, store: KeyValueStore, key: str | None = None) -> None:
        self.store = store
        self.key = key or settings.counter_key or COUNTER_KEY

    def get_or_initialize(self, fallback_epoch: int) -> int:
        """Return the persisted epoch, initializing it if needed.

        A missing value and a failed read are handled the same way: the
        fallback epoch is written and returned.

        Args:
            fallback_epoch: Epoch to persist when no valid value exists

        Returns:
            The persisted epoch

        Raises:
            CounterStoreError: If initialization was needed and the write failed
        """
        logger.debug("Getting value")
        try:
            value = self.store.get_json(self.key)
        except KeyValueStoreError as exc:
            logger.warning(
                "Error getting value %s, resetting value to %d", exc, fallback_epoch
            )
            return self.set(fallback_epoch)

        if value is None:
            logger.info("No value found, initializing to %d", fallback_epoch)
            return self.set(fallback_epoch)

        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning(
                "Invalid stored value %r, resetting value to %d", value, fallback_epoch
            )
            return self.set(fallback_epoch)

        logger.debug("Got value %d", value)
        return value

    def set(self, new_epoch: int) -> int:
        """Persist ``new_epoch``, overwriting any prior value.

        Raises:
            CounterStoreError: If the underlying store write fails
        """
        logger.info("Resetting value to %d", new_epoch)
        try:
            self.store.set_json(self.key, int(new_epoch))
        except KeyValueStoreError as exc:
            logger.error("Failed to persist epoch %d: %s", new_epoch, exc)
            raise CounterStoreError(str(exc)) from exc
        return new_epoch
