"""Periodic clock advancing the client's local notion of "now"."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TickerError(RuntimeError):
    """Raised when the periodic schedule cannot be installed."""


class ClientTicker:
    """Invoke a callback once per interval until stopped.

    At most one schedule is active at any time. Changing the interval while
    running cancels the current schedule and installs the new one in the same
    synchronous step, so the old schedule can never fire again.
    """

    def __init__(self, callback: Callable[[], None], interval_seconds: float = 1.0) -> None:
        self.callback = callback
        self.interval_seconds = self._validate(interval_seconds)
        self._task: asyncio.Task[None] | None = None

    @staticmethod
    def _validate(interval_seconds: float) -> float:
        if interval_seconds <= 0:
            raise TickerError(f"Tick interval must be positive, got {interval_seconds}")
        return float(interval_seconds)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Install the schedule, replacing any active one.

        Raises:
            TickerError: If called outside a running event loop
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise TickerError("Cannot start ticker without a running event loop") from exc

        self.stop()
        self._task = loop.create_task(self._run(self.interval_seconds))

    def set_interval(self, interval_seconds: float) -> None:
        """Change the interval, restarting the schedule if it is running."""
        self.interval_seconds = self._validate(interval_seconds)
        if self.running:
            self.start()

    def stop(self) -> None:
        """Cancel the active schedule. Safe to call repeatedly."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def close(self) -> None:
        """Stop the schedule and wait for the cancelled task to finish."""
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run(self, interval: float) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + interval

        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            next_tick += interval
            try:
                self.callback()
            except Exception:
                logger.exception("Tick callback failed")
