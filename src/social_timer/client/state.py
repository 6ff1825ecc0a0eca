"""Observable state cells for the watcher client.

A cell holds one value and notifies its subscribers synchronously on every
write. Everything the display shows is recomputed from a handful of named
cells, so a write is the only thing that ever triggers a recomputation.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class StateCell(Generic[T]):
    """A named value with explicit change subscriptions."""

    def __init__(self, name: str, value: T) -> None:
        self.name = name
        self._value = value
        self._subscribers: list[Callable[[T], None]] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Store ``value`` and notify subscribers in registration order.

        Subscribers are notified even if the value did not change, so writing
        the same marker twice still triggers a reload.
        """
        self._value = value
        for subscriber in list(self._subscribers):
            subscriber(value)

    def subscribe(self, subscriber: Callable[[T], None]) -> None:
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Callable[[T], None]) -> None:
        try:
            self._subscribers.remove(subscriber)
        except ValueError:
            pass

    def __repr__(self) -> str:
        return f"StateCell({self.name!r}, {self._value!r})"


class ClientState:
    """The named cells shared by the client components.

    Attributes:
        reference_epoch: Last reset epoch confirmed by the server, None until loaded
        current_time: Locally advanced "now" in Unix seconds
        last_update: Marker whose changes trigger a reload of the reference epoch
    """

    def __init__(self, now: int) -> None:
        self.reference_epoch: StateCell[int | None] = StateCell("reference_epoch", None)
        self.current_time: StateCell[int] = StateCell("current_time", now)
        self.last_update: StateCell[int] = StateCell("last_update", now)

    @classmethod
    def from_clock(cls, clock: Callable[[], float] = time.time) -> ClientState:
        return cls(int(clock()))
