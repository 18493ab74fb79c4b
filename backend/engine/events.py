"""
Game events for UI hooks and logging.
Events describe what happened during input handling and timer callbacks.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

# Session events
SESSION_STARTED = "session_started"
GAME_STARTED = "game_started"
GAME_COMPLETED = "game_completed"
SESSION_FINISHED = "session_finished"
SESSION_CLOSED = "session_closed"

# Tic-Tac-Toe events
MARK_PLACED = "mark_placed"
ROUND_ENDED = "round_ended"
BOARD_RESET = "board_reset"

# Snake events
DIRECTION_CHANGED = "direction_changed"
FOOD_EATEN = "food_eaten"
SNAKE_CRASHED = "snake_crashed"
GAME_PAUSED = "game_paused"

# Memory Match events
CARD_FLIPPED = "card_flipped"
PAIR_MATCHED = "pair_matched"
PAIR_MISSED = "pair_missed"

# Puzzle events
TILE_MOVED = "tile_moved"

# Quiz events
OPTION_SELECTED = "option_selected"
QUESTION_ANSWERED = "question_answered"
QUESTION_TIMED_OUT = "question_timed_out"


# ===== Event Factory Functions =====

def session_started(game_id: str) -> GameEvent:
    return GameEvent(SESSION_STARTED, {"game_id": game_id})


def game_started(game_id: str) -> GameEvent:
    return GameEvent(GAME_STARTED, {"game_id": game_id})


def game_completed(game_id: str, summary: dict[str, Any]) -> GameEvent:
    """Emitted when the game reaches its natural end (puzzle solved, all pairs found, quiz done)."""
    return GameEvent(GAME_COMPLETED, {"game_id": game_id, **summary})


def session_finished(game_id: str, score: int, stars: int) -> GameEvent:
    return GameEvent(SESSION_FINISHED, {
        "game_id": game_id,
        "score": score,
        "stars": stars,
    })


def session_closed(game_id: str) -> GameEvent:
    return GameEvent(SESSION_CLOSED, {"game_id": game_id})


def mark_placed(player: str, cell: int) -> GameEvent:
    return GameEvent(MARK_PLACED, {"player": player, "cell": cell})


def round_ended(winner: str, games_played: int, wins: int) -> GameEvent:
    return GameEvent(ROUND_ENDED, {
        "winner": winner,  # "X", "O" or "tie"
        "games_played": games_played,
        "wins": wins,
    })


def board_reset(games_played: int, wins: int) -> GameEvent:
    return GameEvent(BOARD_RESET, {"games_played": games_played, "wins": wins})


def direction_changed(old_direction: str, new_direction: str) -> GameEvent:
    return GameEvent(DIRECTION_CHANGED, {
        "old_direction": old_direction,
        "new_direction": new_direction,
    })


def food_eaten(cell: tuple[int, int], score: int, length: int) -> GameEvent:
    return GameEvent(FOOD_EATEN, {
        "cell": list(cell),
        "score": score,
        "length": length,
    })


def snake_crashed(cell: tuple[int, int], reason: str, score: int) -> GameEvent:
    return GameEvent(SNAKE_CRASHED, {
        "cell": list(cell),
        "reason": reason,  # "wall" or "self"
        "score": score,
    })


def game_paused(game_id: str, score: int) -> GameEvent:
    return GameEvent(GAME_PAUSED, {"game_id": game_id, "score": score})


def card_flipped(card_id: int, value: str) -> GameEvent:
    return GameEvent(CARD_FLIPPED, {"card_id": card_id, "value": value})


def pair_matched(card_ids: list[int], value: str, matches: int) -> GameEvent:
    return GameEvent(PAIR_MATCHED, {
        "card_ids": card_ids,
        "value": value,
        "matches": matches,
    })


def pair_missed(card_ids: list[int]) -> GameEvent:
    return GameEvent(PAIR_MISSED, {"card_ids": card_ids})


def tile_moved(tile: int, from_cell: int, to_cell: int, moves: int) -> GameEvent:
    return GameEvent(TILE_MOVED, {
        "tile": tile,
        "from": from_cell,
        "to": to_cell,
        "moves": moves,
    })


def option_selected(question_index: int, option: int) -> GameEvent:
    return GameEvent(OPTION_SELECTED, {"question_index": question_index, "option": option})


def question_answered(
    question_index: int,
    answer: int | None,
    correct: bool,
    score: int,
) -> GameEvent:
    return GameEvent(QUESTION_ANSWERED, {
        "question_index": question_index,
        "answer": answer,  # None when nothing was selected
        "correct": correct,
        "score": score,
    })


def question_timed_out(question_index: int) -> GameEvent:
    return GameEvent(QUESTION_TIMED_OUT, {"question_index": question_index})
