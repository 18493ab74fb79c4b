"""
Common engine lifecycle.

An engine lives for one session: it is created when the player opens the game,
mutated only by player input and its own timers, and discarded on close or after
finish. Every timer an engine starts is owned by the engine, so teardown() can
cancel all of them and no callback touches the state afterwards.
"""

import random
from dataclasses import dataclass
from typing import Any, Callable

from backend.engine import MAX_STARS, MIN_STARS
from backend.engine.clock import GameClock, Scheduler, Timer
from backend.engine.events import GameEvent, session_closed, session_finished, session_started


@dataclass
class GameResult:
    """What a finished session reports to the score sink."""
    game_id: str
    score: int
    stars: int

    def to_dict(self) -> dict[str, Any]:
        return {"game_id": self.game_id, "score": self.score, "stars": self.stars}


class GameEngine:
    """Base class for all game engines."""

    game_id = ""
    # Timed games only have a result once the player pressed Start
    requires_start = True

    def __init__(self, scheduler: Scheduler, rng: random.Random | None = None):
        self.scheduler = scheduler
        # Injected so tests can supply a seeded or scripted source
        self.rng = rng if rng is not None else random.Random()
        self.events: list[GameEvent] = []
        self.result: GameResult | None = None
        self.closed = False
        self.started = False
        # Set by the container: on_complete(result) after finish, on_close() on close
        self.on_complete: Callable[[GameResult], Any] | None = None
        self.on_close: Callable[[], Any] | None = None
        self._timers: list[Timer] = []
        self._clocks: list[GameClock] = []
        # Bumped whenever pending timers are cancelled; stale callbacks compare against it
        self._generation = 0
        self.emit(session_started(self.game_id))

    # ===== Timers =====

    def make_clock(self, interval_ms: int, on_tick: Callable[[], Any]) -> GameClock:
        clock = GameClock(self.scheduler, interval_ms, on_tick)
        self._clocks.append(clock)
        return clock

    def schedule(self, delay_ms: int, callback: Callable[[], Any]) -> Timer:
        """Run callback once after delay_ms unless the engine cancels its timers first."""
        generation = self._generation

        def run():
            if generation != self._generation or self.ended:
                return
            callback()

        self._timers = [t for t in self._timers if t.active]
        timer = self.scheduler.call_later(delay_ms, run)
        self._timers.append(timer)
        return timer

    def cancel_timers(self) -> None:
        """Cancel every pending one-shot timer and stop every clock."""
        self._generation += 1
        for timer in self._timers:
            timer.cancel()
        self._timers = []
        for clock in self._clocks:
            clock.stop()

    @property
    def has_pending_timers(self) -> bool:
        return any(t.active for t in self._timers) or any(c.running for c in self._clocks)

    # ===== Events =====

    def emit(self, event: GameEvent) -> GameEvent:
        self.events.append(event)
        return event

    def drain_events(self) -> list[GameEvent]:
        """Return and clear the events produced since the last drain."""
        events, self.events = self.events, []
        return events

    # ===== Lifecycle =====

    @property
    def ended(self) -> bool:
        """True once the session was finished or closed; all input is ignored from then on."""
        return self.result is not None or self.closed

    @property
    def can_finish(self) -> bool:
        """Whether finish() would produce a result now. Before the first start only close() ends the session."""
        return not self.ended and (self.started or not self.requires_start)

    def compute_result(self) -> tuple[int, int]:
        """Return (score, stars) for the current state."""
        raise NotImplementedError

    def finish(self) -> GameResult | None:
        """
        End the session and compute its result.
        Only the first call produces a result; later calls, a call after close, or a
        call before the game was started return None.
        """
        if not self.can_finish:
            return None
        self.cancel_timers()
        score, stars = self.compute_result()
        stars = min(MAX_STARS, max(MIN_STARS, int(stars)))
        self.result = GameResult(self.game_id, int(score), stars)
        self.emit(session_finished(self.game_id, self.result.score, self.result.stars))
        if self.on_complete is not None:
            self.on_complete(self.result)
        return self.result

    def close(self) -> None:
        """Ask the container to discard this engine without recording a score."""
        if self.closed:
            return
        self.teardown()
        self.emit(session_closed(self.game_id))
        if self.on_close is not None:
            self.on_close()

    def teardown(self) -> None:
        """Cancel every timer and refuse further input. Idempotent."""
        self.cancel_timers()
        self.closed = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_id": self.game_id,
            "finished": self.result is not None,
            "closed": self.closed,
            "result": self.result.to_dict() if self.result else None,
            "state": self.state.to_dict(),
        }
