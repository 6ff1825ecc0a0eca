"""End-to-end tests: watcher client against the real application."""
from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
from fastapi import FastAPI

from social_timer.api.dependencies import get_counter_store
from social_timer.client.api_client import CounterApiClient, CounterApiConfig
from social_timer.client.app import TimerClient
from social_timer.client.resource import Ready
from social_timer.services.breakdown import ElapsedTime
from social_timer.services.counter_store import COUNTER_KEY, CounterStore


@pytest.fixture()
def served_store(app: FastAPI, memory_store) -> Iterator:
    app.dependency_overrides[get_counter_store] = lambda: CounterStore(memory_store)
    try:
        yield memory_store
    finally:
        app.dependency_overrides.pop(get_counter_store, None)


def _api(app: FastAPI) -> CounterApiClient:
    config = CounterApiConfig(base_url="http://test", api_prefix="/api", timeout_seconds=5.0)
    return CounterApiClient(config, transport=httpx.ASGITransport(app=app))


@pytest.mark.asyncio
async def test_load_tick_and_reset(app: FastAPI, served_store, clock):
    lines = []
    client = TimerClient(
        _api(app),
        locale="en",
        tick_interval_seconds=60,
        refresh_interval_seconds=0,
        clock=clock,
        sink=lines.append,
    )

    await client.start()
    await client.resource.wait()

    # Empty store: the fallback epoch is returned and persisted.
    assert client.resource.status.get() == Ready(1000)
    assert served_store.get_json(COUNTER_KEY) == 1000

    clock.now = 1090
    client.tick()
    assert client.display.elapsed() == ElapsedTime(minutes=1, seconds=30)
    assert lines[-1] == "0 years, 0 months, 0 days, 0 hours, 1 minute and 30 seconds."

    assert await client.reset() == 1090
    assert client.display.elapsed_seconds() == 0
    await client.resource.wait()

    assert client.resource.status.get() == Ready(1090)
    assert served_store.get_json(COUNTER_KEY) == 1090
    assert lines[-1] == "0 years, 0 months, 0 days, 0 hours, 0 minutes and 0 seconds."

    await client.close()
    assert not client.ticker.running


@pytest.mark.asyncio
async def test_second_client_sees_reset_after_refresh(app: FastAPI, served_store, clock):
    first = TimerClient(_api(app), locale="en", clock=clock, sink=lambda _text: None)
    second = TimerClient(_api(app), locale="en", clock=clock, sink=lambda _text: None)
    await first.start()
    await first.resource.wait()
    await second.start()
    await second.resource.wait()

    clock.now = 2000
    await first.reset()
    await first.resource.wait()

    # The other client keeps its old reference until it re-reads the store.
    assert second.state.reference_epoch.get() == 1000
    second.resource.refresh()
    await second.resource.wait()
    assert second.state.reference_epoch.get() == 2000

    await first.close()
    await second.close()
