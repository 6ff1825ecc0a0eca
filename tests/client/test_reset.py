"""Tests for the client reset action."""
from __future__ import annotations

import pytest

from social_timer.client.display import TimerDisplay
from social_timer.client.reset import ResetController, ResetError
from social_timer.client.resource import ReconciliationResource, Ready
from social_timer.client.state import ClientState


@pytest.mark.asyncio
async def test_reset_persists_and_zeroes_display(fake_api, clock):
    state = ClientState.from_clock(clock)
    resource = ReconciliationResource(state, fake_api)
    display = TimerDisplay(state, resource, locale="en", sink=lambda _text: None)
    resource.load()
    await resource.wait()

    clock.now = 1500
    state.current_time.set(1500)
    assert display.elapsed_seconds() == 500

    epoch = await ResetController(state, fake_api, clock=clock).reset()

    assert epoch == 1500
    assert fake_api.reset_calls == [1500]
    assert fake_api.store.get_or_initialize(0) == 1500
    assert state.reference_epoch.get() == 1500
    assert state.last_update.get() == 1500
    assert display.elapsed_seconds() == 0

    await resource.wait()
    assert resource.status.get() == Ready(1500)
    assert fake_api.get_calls == [1000, 1500]
    await resource.close()


@pytest.mark.asyncio
async def test_failed_reset_leaves_state_untouched(fake_api, clock):
    state = ClientState.from_clock(clock)
    resource = ReconciliationResource(state, fake_api)
    resource.load()
    await resource.wait()

    fake_api.fail_resets = True
    clock.now = 1500
    with pytest.raises(ResetError):
        await ResetController(state, fake_api, clock=clock).reset()

    assert state.reference_epoch.get() == 1000
    assert state.last_update.get() == 1000
    assert fake_api.get_calls == [1000]
    assert fake_api.store.get_or_initialize(0) == 1000
    await resource.close()
