"""
Countdown timer for Memoji rounds.
"""
import asyncio
import logging

from common.config import InvalidConfiguration, TICK_INTERVAL_SECONDS

logger = logging.getLogger("memoji_bot")

IDLE = "idle"
RUNNING = "running"
STOPPED = "stopped"
EXPIRED = "expired"


def format_time(seconds):
    """Formats a number of seconds as MM:SS."""
    minutes, seconds = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{seconds:02d}"


class CountdownTimer:
    """Counts down from a fixed duration and fires a single expiry callback.

    Ticks are scheduled on the running event loop with ``call_later``.
    ``stop()`` and ``reset()`` cancel the pending tick, and each scheduled
    callback remembers the cycle it belongs to, so nothing from a previous
    cycle can touch the timer after a reset.
    """
    def __init__(self, duration, tick_interval=TICK_INTERVAL_SECONDS, on_tick=None):
        if duration <= 0:
            raise InvalidConfiguration(f"Timer duration must be positive, got {duration!r}")
        if tick_interval <= 0:
            raise InvalidConfiguration(f"Tick interval must be positive, got {tick_interval!r}")

        self.duration = duration
        self.tick_interval = tick_interval
        self.on_tick = on_tick  # Called with the timer after every tick
        self.remaining = duration
        self.state = IDLE
        self._on_expire = None
        self._handle = None
        self._cycle = 0

    @property
    def is_idle(self):
        return self.state == IDLE

    @property
    def is_running(self):
        return self.state == RUNNING

    @property
    def is_expired(self):
        return self.state == EXPIRED

    def start(self, on_expire=None):
        """Starts counting down. Does nothing if the timer is running or has expired."""
        if self.state in (RUNNING, EXPIRED):
            return
        self._schedule()
        self._on_expire = on_expire
        self.state = RUNNING
        logger.debug(f"Timer started with {self.remaining}s remaining")

    def stop(self):
        """Halts the countdown, keeping the remaining time. Never fires the expiry callback."""
        self._cancel()
        if self.state == RUNNING:
            self.state = STOPPED

    def reset(self):
        """Stops the countdown and restores the full duration."""
        self._cancel()
        self.remaining = self.duration
        self.state = IDLE
        self._on_expire = None

    def tick(self):
        """Advances the countdown by one step."""
        if self.state != RUNNING:
            return

        self.remaining -= 1
        if self.on_tick is not None:
            self.on_tick(self)

        if self.remaining <= 0:
            self.remaining = 0
            self._cancel()
            self.state = EXPIRED
            on_expire, self._on_expire = self._on_expire, None
            logger.debug("Timer expired")
            if on_expire is not None:
                on_expire()

    def format_remaining(self):
        """Returns the remaining time as MM:SS."""
        return format_time(self.remaining)

    def _schedule(self):
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.tick_interval, self._on_scheduled_tick, self._cycle)

    def _on_scheduled_tick(self, cycle):
        if cycle != self._cycle or self.state != RUNNING:
            return
        self._handle = None
        self.tick()
        if self.state == RUNNING:
            self._schedule()

    def _cancel(self):
        self._cycle += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
