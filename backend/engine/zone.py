"""
Games Zone container.

Holds at most one active engine. Opening a game discards whatever was active;
finishing forwards the result to the score sink exactly once; closing discards
the engine without a score.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from backend.engine.actions import Action
from backend.engine.base import GameEngine, GameResult
from backend.engine.clock import Scheduler
from backend.engine.events import GameEvent
from backend.engine.memory_match import MemoryMatchEngine
from backend.engine.puzzle import PuzzleEngine
from backend.engine.quiz import QuizEngine
from backend.engine.reducer import apply_action
from backend.engine.snake import SnakeEngine
from backend.engine.tictactoe import TicTacToeEngine

logger = logging.getLogger(__name__)

ENGINE_TYPES: dict[str, type[GameEngine]] = {
    TicTacToeEngine.game_id: TicTacToeEngine,
    SnakeEngine.game_id: SnakeEngine,
    MemoryMatchEngine.game_id: MemoryMatchEngine,
    PuzzleEngine.game_id: PuzzleEngine,
    QuizEngine.game_id: QuizEngine,
}

# (game_id, score, stars) -> None; fire-and-forget
ScoreSink = Callable[[str, int, int], Any]


class UnknownGameError(KeyError):
    """No engine is registered under this game id."""


class NoActiveGameError(RuntimeError):
    """An action was sent while no game is open."""


@dataclass
class ScoreRecord:
    game_id: str
    score: int
    stars: int
    completed_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_id": self.game_id,
            "score": self.score,
            "stars": self.stars,
            "completed_at": self.completed_at.isoformat(),
        }


class InMemoryScoreSink:
    """Score sink that keeps records in a list (demo, CLI and tests)."""

    def __init__(self):
        self.records: list[ScoreRecord] = []

    def __call__(self, game_id: str, score: int, stars: int) -> None:
        self.records.append(ScoreRecord(game_id, score, stars))


class GamesZone:
    """Activates one engine at a time and reports finished sessions."""

    def __init__(
        self,
        score_sink: ScoreSink,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        engine_options: dict[str, dict[str, Any]] | None = None,
    ):
        self.score_sink = score_sink
        self.scheduler = scheduler
        self.rng = rng
        # Per-game keyword overrides, e.g. {"snake": {"tick_ms": 100}}
        self.engine_options = engine_options or {}
        self.active: GameEngine | None = None

    @property
    def active_game_id(self) -> str | None:
        return self.active.game_id if self.active is not None else None

    def open(self, game_id: str) -> GameEngine:
        """Start a fresh session of game_id, discarding any active one."""
        engine_type = ENGINE_TYPES.get(game_id)
        if engine_type is None:
            raise UnknownGameError(game_id)
        self._deactivate()
        engine = engine_type(self.scheduler, rng=self.rng, **self.engine_options.get(game_id, {}))
        engine.on_complete = self._on_complete
        engine.on_close = self._deactivate
        self.active = engine
        logger.info("Opened %s", game_id)
        return engine

    def dispatch(self, action: Action) -> tuple[bool, list[GameEvent]]:
        """Send player input to the active engine."""
        if self.active is None:
            raise NoActiveGameError("No game is open")
        return apply_action(self.active, action)

    def finish(self) -> GameResult | None:
        """Finish the active session. Returns None when nothing is active."""
        if self.active is None:
            return None
        return self.active.finish()

    def close(self) -> bool:
        """Close the active session without recording a score."""
        if self.active is None:
            return False
        game_id = self.active.game_id
        self.active.close()
        logger.info("Closed %s without a score", game_id)
        return True

    def _on_complete(self, result: GameResult) -> None:
        self._deactivate()
        logger.info("Finished %s: score=%s stars=%s", result.game_id, result.score, result.stars)
        self.score_sink(result.game_id, result.score, result.stars)

    def _deactivate(self) -> None:
        engine, self.active = self.active, None
        if engine is not None:
            engine.teardown()


class SessionManager:
    """One GamesZone per user."""

    def __init__(self, zone_factory: Callable[[Any], GamesZone]):
        self._zone_factory = zone_factory
        self._zones: dict[Any, GamesZone] = {}

    def get_zone(self, user_id: Any) -> GamesZone:
        zone = self._zones.get(user_id)
        if zone is None:
            zone = self._zone_factory(user_id)
            self._zones[user_id] = zone
        return zone

    def find_zone(self, user_id: Any) -> GamesZone | None:
        """The user's zone if one exists; never creates one."""
        return self._zones.get(user_id)

    def release(self, user_id: Any) -> bool:
        """Forget the user's zone once it has no active game. Returns True if it was dropped."""
        zone = self._zones.get(user_id)
        if zone is None or zone.active is not None:
            return False
        del self._zones[user_id]
        return True

    def __len__(self) -> int:
        return len(self._zones)

    def end_all(self) -> None:
        """Close every active session (shutdown, tests)."""
        for zone in self._zones.values():
            zone.close()
        self._zones.clear()
