# src/social_timer/client/__init__.py
"""Watcher client keeping a local display in line with the server."""

from .api_client import CounterApiClient, CounterApiError
from .app import TimerClient
from .display import TimerDisplay
from .reset import ResetController, ResetError
from .resource import Failed, Loading, ReconciliationResource, Ready
from .state import ClientState, StateCell
from .ticker import ClientTicker, TickerError

__all__ = [
    "ClientState", "StateCell",
    "ClientTicker", "TickerError",
    "CounterApiClient", "CounterApiError",
    "Failed", "Loading", "Ready", "ReconciliationResource",
    "ResetController", "ResetError",
    "TimerClient", "TimerDisplay",
]
