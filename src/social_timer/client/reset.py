"""Reset action of the watcher client."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from social_timer.client.api_client import CounterApiClient, CounterApiError
from social_timer.client.state import ClientState

logger = logging.getLogger(__name__)


class ResetError(RuntimeError):
    """Raised when the server did not confirm a reset."""


class ResetController:
    """Persist a new reset epoch and point the local state at it."""

    def __init__(
        self,
        state: ClientState,
        client: CounterApiClient,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.state = state
        self.client = client
        self.clock = clock

    async def reset(self) -> int:
        """Reset the shared timer to the current time.

        Local state is only touched after the server confirmed the write.

        Returns:
            The new reset epoch

        Raises:
            ResetError: If the server could not persist the new epoch
        """
        now = int(self.clock())
        logger.info("Resetting timer to %d", now)
        try:
            epoch = await self.client.reset_count(now)
        except CounterApiError as exc:
            logger.error("Reset to %d failed: %s", now, exc)
            raise ResetError(str(exc)) from exc

        self.state.reference_epoch.set(epoch)
        self.state.current_time.set(epoch)
        self.state.last_update.set(epoch)
        return epoch
