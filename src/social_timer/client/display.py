"""Text rendering of the timer for the watcher client."""

from __future__ import annotations

from collections.abc import Callable

from social_timer.client.resource import Failed, Loading, ReconciliationResource
from social_timer.client.state import ClientState
from social_timer.services.breakdown import ElapsedTime, format_elapsed

LOADING_TEXT = "Loading value"


class TimerDisplay:
    """Recompute the displayed sentence whenever its inputs change."""

    def __init__(
        self,
        state: ClientState,
        resource: ReconciliationResource,
        *,
        locale: str = "de",
        sink: Callable[[str], None] = print,
    ) -> None:
        self.state = state
        self.resource = resource
        self.locale = locale
        self.sink = sink
        self.last_rendered: str | None = None

    def attach(self) -> None:
        self.state.current_time.subscribe(self._on_change)
        self.resource.status.subscribe(self._on_change)

    def detach(self) -> None:
        self.state.current_time.unsubscribe(self._on_change)
        self.resource.status.unsubscribe(self._on_change)

    def elapsed_seconds(self) -> int | None:
        """Seconds since the reference epoch, None before the first load.

        Clock skew between client and server is clamped to zero.
        """
        reference = self.state.reference_epoch.get()
        if reference is None:
            return None
        return max(0, self.state.current_time.get() - reference)

    def elapsed(self) -> ElapsedTime | None:
        seconds = self.elapsed_seconds()
        return None if seconds is None else ElapsedTime.from_seconds(seconds)

    def text(self) -> str:
        status = self.resource.status.get()
        if isinstance(status, Loading):
            return LOADING_TEXT
        if isinstance(status, Failed):
            return f"Error: {status.error}"

        elapsed = self.elapsed()
        if elapsed is None:
            return LOADING_TEXT
        return format_elapsed(elapsed, self.locale)

    def render(self) -> str:
        """Send the current text to the sink if it changed since the last render."""
        text = self.text()
        if text != self.last_rendered:
            self.last_rendered = text
            self.sink(text)
        return text

    def _on_change(self, _value: object) -> None:
        self.render()
