"""HTTP client for the counter server operations.

This module provides the CounterApiClient class used by the watcher to call
``get_count`` and ``reset_count`` on the server.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from social_timer.core.settings import settings

# Configure logger for this module
logger = logging.getLogger(__name__)

# HTTP status codes
HTTP_OK = 200


class CounterApiError(RuntimeError):
    """Raised when a counter operation could not be completed by the server."""


@dataclass(frozen=True)
class CounterApiConfig:
    """Immutable configuration for counter API calls."""

    base_url: str
    api_prefix: str
    timeout_seconds: float


def load_api_config(base_url: str | None = None) -> CounterApiConfig:
    """Build configuration object from global settings."""

    return CounterApiConfig(
        base_url=base_url or settings.server_url,
        api_prefix=settings.api_prefix,
        timeout_seconds=float(settings.http_timeout_seconds),
    )


class CounterApiClient:
    """Async client wrapper for the ``get_count``/``reset_count`` operations."""

    def __init__(
        self,
        config: CounterApiConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_api_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def _call(self, operation: str, payload: dict[str, Any]) -> int:
        client = await self._ensure_client()
        path = f"{self.config.api_prefix}/{operation}"

        try:
            response = await client.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise CounterApiError(f"{operation} request failed: {exc}") from exc

        if response.status_code != HTTP_OK:
            detail = response.text
            try:
                detail = response.json().get("detail", detail)
            except (ValueError, AttributeError):
                pass
            raise CounterApiError(
                f"{operation} responded with {response.status_code}: {detail}"
            )

        try:
            return int(response.json()["epoch"])
        except (ValueError, KeyError, TypeError) as exc:
            raise CounterApiError(f"{operation} returned an invalid payload") from exc

    async def get_count(self, fallback_epoch: int) -> int:
        """Return the persisted reset epoch, initializing it to ``fallback_epoch``."""
        logger.debug("Getting value via resource")
        return await self._call("get_count", {"ep": int(fallback_epoch)})

    async def reset_count(self, new_epoch: int) -> int:
        """Persist ``new_epoch`` as the reset epoch and return it."""
        return await self._call("reset_count", {"counter": int(new_epoch)})

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""

        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None

    async def __aenter__(self) -> CounterApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
