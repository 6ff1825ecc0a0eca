"""Composition of the watcher client components.

This module provides the TimerClient class that wires the state cells,
the API client, the reconciliation resource, the ticker, the reset
controller and the display together:

- On start the resource loads the reference epoch from the server
- The ticker writes the clock into ``current_time`` once per interval
- The display re-renders on every tick and every resource state change
- ``reset()`` persists a new epoch and triggers a reload
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from social_timer.client.api_client import CounterApiClient
from social_timer.client.display import TimerDisplay
from social_timer.client.reset import ResetController
from social_timer.client.resource import ReconciliationResource
from social_timer.client.state import ClientState
from social_timer.client.ticker import ClientTicker
from social_timer.core.settings import settings

logger = logging.getLogger(__name__)


class TimerClient:
    """A single watcher of the shared timer."""

    def __init__(
        self,
        api: CounterApiClient,
        *,
        locale: str | None = None,
        tick_interval_seconds: float | None = None,
        refresh_interval_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
        sink: Callable[[str], None] = print,
    ) -> None:
        """Initialize the client graph.

        Args:
            api: Client for the server operations
            locale: Language of the rendered sentence
            tick_interval_seconds: Interval of the local clock
            refresh_interval_seconds: Interval of periodic re-reads; 0 disables them
            clock: Source of the current Unix time
            sink: Callable receiving each newly rendered line
        """
        self.api = api
        self.clock = clock
        self.state = ClientState.from_clock(clock)
        self.resource = ReconciliationResource(self.state, api)
        self.display = TimerDisplay(
            self.state, self.resource, locale=locale or settings.locale, sink=sink
        )
        self.resetter = ResetController(self.state, api, clock=clock)
        if tick_interval_seconds is None:
            tick_interval_seconds = settings.tick_interval_seconds
        self.ticker = ClientTicker(self.tick, tick_interval_seconds)

        refresh = (
            settings.refresh_interval_seconds
            if refresh_interval_seconds is None
            else refresh_interval_seconds
        )
        self.refresher = ClientTicker(self.resource.refresh, refresh) if refresh > 0 else None

    def tick(self) -> None:
        self.state.current_time.set(int(self.clock()))

    async def start(self) -> None:
        """Attach the display, start loading and install the schedules."""
        self.display.attach()
        self.display.render()
        self.ticker.start()
        if self.refresher is not None:
            self.refresher.start()
        self.resource.load()
        logger.debug("Timer client started")

    async def reset(self) -> int:
        return await self.resetter.reset()

    async def close(self) -> None:
        await self.ticker.close()
        if self.refresher is not None:
            await self.refresher.close()
        await self.resource.close()
        self.display.detach()
        await self.api.close()
