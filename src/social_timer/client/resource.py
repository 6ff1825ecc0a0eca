"""Reloading of the authoritative reset epoch.

The resource watches the client's last-update marker. Each marker change
starts a fresh ``get_count`` call; while it is in flight the published
state is ``Loading`` so the display never renders a stale reference. A
newer load supersedes an older one: the older fetch is cancelled and its
result never published. Periodic refreshes re-read the store in the
background and never go back to ``Loading``.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass

from social_timer.client.api_client import CounterApiClient, CounterApiError
from social_timer.client.state import ClientState, StateCell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Loading:
    """A fetch of the reference epoch is in flight."""


@dataclass(frozen=True)
class Ready:
    """The reference epoch has been confirmed by the server."""

    reference_epoch: int


@dataclass(frozen=True)
class Failed:
    """The last fetch failed; the display shows the error."""

    error: str


ResourceState = Loading | Ready | Failed


class ReconciliationResource:
    """Keep ``state.reference_epoch`` in line with the server."""

    def __init__(self, state: ClientState, client: CounterApiClient) -> None:
        self.state = state
        self.client = client
        self.status: StateCell[ResourceState] = StateCell("resource", Loading())
        self._task: asyncio.Task[None] | None = None
        self._attached = False

    def load(self) -> None:
        """Subscribe to the marker and start the initial fetch."""
        if not self._attached:
            self.state.last_update.subscribe(self._on_marker_change)
            self._attached = True
        self._schedule()

    def refresh(self) -> None:
        """Re-read the store without a marker change.

        The published state stays as it is until the fetch completes, and a
        fetch already in flight is left to finish. A failed refresh keeps a
        confirmed reference epoch on screen and is only logged.
        """
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.get_running_loop().create_task(self._fetch(quiet=True))

    async def wait(self) -> None:
        """Wait for the current fetch, if any, to finish."""
        task = self._task
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def close(self) -> None:
        if self._attached:
            self.state.last_update.unsubscribe(self._on_marker_change)
            self._attached = False
        task = self._task
        self._task = None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _on_marker_change(self, marker: int) -> None:
        logger.debug("Last update marker changed to %d", marker)
        self._schedule()

    def _schedule(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self.status.set(Loading())
        self._task = asyncio.get_running_loop().create_task(self._fetch())

    async def _fetch(self, quiet: bool = False) -> None:
        fallback = self.state.current_time.get()
        try:
            epoch = await self.client.get_count(fallback)
        except CounterApiError as exc:
            logger.warning("Failed to load reset epoch: %s", exc)
            if not (quiet and isinstance(self.status.get(), Ready)):
                self.status.set(Failed(str(exc)))
            return

        self.state.reference_epoch.set(epoch)
        self.status.set(Ready(epoch))
