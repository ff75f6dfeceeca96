"""
Tests for the countdown timer.
"""
import asyncio

import pytest

from common.config import InvalidConfiguration
from utils.timer import CountdownTimer, format_time, IDLE, RUNNING, STOPPED, EXPIRED


@pytest.mark.parametrize("seconds, expected", [
    (0, "00:00"),
    (5, "00:05"),
    (60, "01:00"),
    (75, "01:15"),
    (600, "10:00"),
])
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


@pytest.mark.parametrize("duration", [0, -5])
def test_rejects_non_positive_duration(duration):
    with pytest.raises(InvalidConfiguration):
        CountdownTimer(duration)


def test_rejects_non_positive_tick_interval():
    with pytest.raises(InvalidConfiguration):
        CountdownTimer(10, tick_interval=0)


def test_new_timer_is_idle_with_full_duration():
    timer = CountdownTimer(60)
    assert timer.state == IDLE
    assert timer.format_remaining() == "01:00"


def test_tick_does_nothing_unless_running():
    timer = CountdownTimer(3)
    timer.tick()
    assert timer.remaining == 3


def test_expires_once_after_duration_ticks():
    async def scenario():
        expired = []
        ticks = []
        timer = CountdownTimer(2, tick_interval=60, on_tick=lambda t: ticks.append(t.format_remaining()))
        timer.start(lambda: expired.append(True))
        timer.tick()
        assert timer.state == RUNNING
        assert expired == []
        timer.tick()
        assert timer.state == EXPIRED
        assert timer.remaining == 0
        timer.tick()
        assert expired == [True]
        assert ticks == ["00:01", "00:00"]

    asyncio.run(scenario())


def test_scheduled_ticks_expire_the_timer():
    async def scenario():
        expired = []
        timer = CountdownTimer(2, tick_interval=0.01)
        timer.start(lambda: expired.append(True))
        await asyncio.sleep(0.2)
        assert timer.is_expired
        assert expired == [True]

    asyncio.run(scenario())


def test_start_is_idempotent():
    async def scenario():
        expired = []
        timer = CountdownTimer(3, tick_interval=0.01)
        timer.start(lambda: expired.append("first"))
        timer.start(lambda: expired.append("second"))
        await asyncio.sleep(0.2)
        assert expired == ["first"]

    asyncio.run(scenario())


def test_stop_freezes_remaining_and_never_fires():
    async def scenario():
        expired = []
        timer = CountdownTimer(5, tick_interval=60)
        timer.start(lambda: expired.append(True))
        timer.tick()
        timer.stop()
        assert timer.state == STOPPED
        assert timer.remaining == 4
        timer.tick()
        assert timer.remaining == 4
        assert expired == []

    asyncio.run(scenario())


def test_reset_cancels_pending_tick():
    async def scenario():
        expired = []
        timer = CountdownTimer(1, tick_interval=0.02)
        timer.start(lambda: expired.append(True))
        timer.reset()
        await asyncio.sleep(0.1)
        assert timer.state == IDLE
        assert timer.remaining == 1
        assert expired == []

    asyncio.run(scenario())


def test_restart_after_reset_counts_from_full_duration():
    async def scenario():
        timer = CountdownTimer(3, tick_interval=60)
        timer.start()
        timer.tick()
        timer.reset()
        timer.start()
        assert timer.remaining == 3
        timer.tick()
        assert timer.remaining == 2
        timer.stop()

    asyncio.run(scenario())


def test_start_without_event_loop_leaves_timer_idle():
    timer = CountdownTimer(3)
    with pytest.raises(RuntimeError):
        timer.start()
    assert timer.state == IDLE
    assert timer.remaining == 3


def test_start_after_expiry_does_not_fire_again():
    async def scenario():
        expired = []
        timer = CountdownTimer(1, tick_interval=60)
        timer.start(lambda: expired.append("first"))
        timer.tick()
        assert timer.is_expired

        timer.start(lambda: expired.append("second"))
        assert timer.state == EXPIRED
        timer.tick()
        assert expired == ["first"]

    asyncio.run(scenario())
