"""
Game state representation.
One dataclass per engine; engines mutate their own state in place and nothing is shared.
to_dict() gives the JSON shape the dashboard renders.
"""

from dataclasses import dataclass, field
from typing import Any

Cell = tuple[int, int]  # (x, y) on the snake grid

# Status values shared by the timed games
IDLE = "idle"
PLAYING = "playing"
GAME_OVER = "game_over"
COMPLETE = "complete"

# Quiz has its own names for the same lifecycle
NOT_STARTED = "not_started"
IN_PROGRESS = "in_progress"


@dataclass
class TicTacToeState:
    """3x3 board plus the cross-round counters (kept until the engine is discarded)."""
    board: list[str | None] = field(default_factory=lambda: [None] * 9)
    current_player: str = "X"
    winner: str | None = None  # None, "X", "O" or "tie"
    games_played: int = 0
    wins: int = 0  # rounds won by the human (X)

    def to_dict(self) -> dict[str, Any]:
        return {
            "board": list(self.board),
            "current_player": self.current_player,
            "winner": self.winner,
            "games_played": self.games_played,
            "wins": self.wins,
        }


@dataclass
class SnakeState:
    """Snake body (head first), food cell, heading and scores."""
    body: list[Cell]
    food: Cell | None
    direction: str = "RIGHT"
    score: int = 0
    high_score: int = 0  # best score this session
    status: str = IDLE  # idle | playing | game_over

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def is_playing(self) -> bool:
        return self.status == PLAYING

    @property
    def game_over(self) -> bool:
        return self.status == GAME_OVER

    def to_dict(self) -> dict[str, Any]:
        return {
            "snake": [list(c) for c in self.body],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction,
            "score": self.score,
            "high_score": self.high_score,
            "status": self.status,
            "is_playing": self.is_playing,
            "game_over": self.game_over,
        }


@dataclass
class Card:
    """A memory card. Each value appears on exactly two cards."""
    id: int
    value: str
    is_flipped: bool = False
    is_matched: bool = False

    def to_dict(self, reveal: bool = False) -> dict[str, Any]:
        face_up = self.is_flipped or self.is_matched
        return {
            "id": self.id,
            # Hidden faces are not sent unless explicitly requested
            "value": self.value if (face_up or reveal) else None,
            "is_flipped": self.is_flipped,
            "is_matched": self.is_matched,
        }


@dataclass
class MemoryMatchState:
    cards: list[Card] = field(default_factory=list)
    flipped_cards: list[int] = field(default_factory=list)  # card ids waiting for comparison (max 2)
    moves: int = 0
    matches: int = 0
    elapsed_seconds: int = 0
    status: str = IDLE  # idle | playing | complete

    @property
    def total_pairs(self) -> int:
        return len(self.cards) // 2

    def to_dict(self) -> dict[str, Any]:
        return {
            "cards": [c.to_dict() for c in self.cards],
            "flipped_cards": list(self.flipped_cards),
            "moves": self.moves,
            "matches": self.matches,
            "total_pairs": self.total_pairs,
            "elapsed_seconds": self.elapsed_seconds,
            "status": self.status,
        }


@dataclass
class PuzzleState:
    """Tiles in row-major order; None is the blank."""
    tiles: list[int | None] = field(default_factory=list)
    moves: int = 0
    elapsed_seconds: int = 0
    status: str = IDLE  # idle | playing | complete

    @property
    def blank_index(self) -> int:
        return self.tiles.index(None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tiles": list(self.tiles),
            "moves": self.moves,
            "elapsed_seconds": self.elapsed_seconds,
            "status": self.status,
        }


@dataclass
class QuizState:
    current_index: int = 0
    selected: int | None = None  # option picked for the current question, not yet committed
    score: int = 0
    time_left: int = 0
    # One slot per question; slot i is committed before question i + 1 becomes current
    answers: list[int | None] = field(default_factory=list)
    status: str = NOT_STARTED  # not_started | in_progress | complete

    @property
    def show_result(self) -> bool:
        return self.status == COMPLETE

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_index": self.current_index,
            "selected": self.selected,
            "score": self.score,
            "time_left": self.time_left,
            "answers": list(self.answers),
            "status": self.status,
            "show_result": self.show_result,
        }
