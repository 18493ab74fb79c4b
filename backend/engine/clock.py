"""
Cooperative timers for the game engines.
Everything runs on one thread: a Scheduler fires callbacks one at a time, so a
timer callback never interleaves with player input or with another callback.
"""

import asyncio
import heapq
import itertools
from typing import Any, Callable


class Timer:
    """One-shot handle returned by Scheduler.call_later."""

    def __init__(self, callback: Callable[[], Any]):
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self.active = True

    def cancel(self) -> None:
        """Cancel the timer. Safe to call more than once or after it fired."""
        if not self.active:
            return
        self.active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def fire(self) -> None:
        if not self.active:
            return
        self.active = False
        self._handle = None
        self._callback()


class Scheduler:
    """Schedules callbacks on the owning thread. Times are in milliseconds."""

    def call_later(self, delay_ms: int, callback: Callable[[], Any]) -> Timer:
        raise NotImplementedError

    def now(self) -> int:
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """
    Virtual-time scheduler driven by advance().
    Used by tests, the demo and the terminal CLI so timing is fully deterministic.
    """

    def __init__(self):
        self._now = 0
        self._queue: list[tuple[int, int, Timer]] = []
        self._sequence = itertools.count()

    def now(self) -> int:
        return self._now

    def call_later(self, delay_ms: int, callback: Callable[[], Any]) -> Timer:
        timer = Timer(callback)
        due = self._now + max(0, int(delay_ms))
        heapq.heappush(self._queue, (due, next(self._sequence), timer))
        return timer

    def advance(self, ms: int) -> int:
        """
        Move virtual time forward by ms, firing every timer that becomes due in order.
        Timers scheduled by a callback fire in the same call if they fall due within the window.
        Returns the number of callbacks fired.
        """
        target = self._now + max(0, int(ms))
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if not timer.active:
                continue
            self._now = due
            timer.fire()
            fired += 1
        self._now = target
        return fired

    def pending(self) -> int:
        """Number of timers still waiting to fire."""
        return sum(1 for _, _, timer in self._queue if timer.active)


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the asyncio event loop (the API server's single loop thread)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> int:
        return int(self._get_loop().time() * 1000)

    def call_later(self, delay_ms: int, callback: Callable[[], Any]) -> Timer:
        timer = Timer(callback)
        timer._handle = self._get_loop().call_later(max(0, delay_ms) / 1000, timer.fire)
        return timer


class GameClock:
    """
    Periodic timer: delivers one on_tick per interval while running.

    stop() is idempotent and may be called from inside on_tick; once stopped no
    further tick is delivered until start() is called again.
    """

    def __init__(self, scheduler: Scheduler, interval_ms: int, on_tick: Callable[[], Any]):
        if interval_ms <= 0:
            raise ValueError(f"Clock interval must be positive, got {interval_ms}")
        self.scheduler = scheduler
        self.interval_ms = interval_ms
        self.on_tick = on_tick
        self.ticks = 0
        self._timer: Timer | None = None

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        if self._timer is None:
            self._arm()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def restart(self) -> None:
        """Stop and start again so the next tick is a full interval away."""
        self.stop()
        self.start()

    def _arm(self) -> None:
        self._timer = self.scheduler.call_later(self.interval_ms, self._fire)

    def _fire(self) -> None:
        # Re-arm before the callback so a stop() inside on_tick cancels the next tick
        self._arm()
        self.ticks += 1
        self.on_tick()
