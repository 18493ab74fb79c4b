"""
Action definitions for player input.
Actions are plain data; the reducer routes them to the active engine.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Action:
    """Base action class. All actions have a type and payload."""
    type: str  # e.g. "place_mark", "flip_card", "slide_tile", "next_question"
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Action":
        payload = data.get("payload")
        return cls(type=str(data.get("type") or ""), payload=payload if isinstance(payload, dict) else {})


def start_game() -> Action:
    """Start (or restart) a Snake run, deal Memory cards, shuffle the Puzzle or begin the Quiz."""
    return Action(type="start_game")


def place_mark(cell: int) -> Action:
    """Tic-Tac-Toe: place X on cell 0-8 (row-major)."""
    return Action(type="place_mark", payload={"cell": cell})


def reset_board() -> Action:
    """Tic-Tac-Toe: play another round, keeping the win counters."""
    return Action(type="reset_board")


def change_direction(direction: str) -> Action:
    """Snake: "UP", "DOWN", "LEFT" or "RIGHT"."""
    return Action(type="change_direction", payload={"direction": direction})


def pause_game() -> Action:
    return Action(type="pause_game")


def flip_card(card_id: int) -> Action:
    return Action(type="flip_card", payload={"card_id": card_id})


def slide_tile(cell: int) -> Action:
    """Puzzle: slide the tile at cell into the blank."""
    return Action(type="slide_tile", payload={"cell": cell})


def select_option(option: int) -> Action:
    return Action(type="select_option", payload={"option": option})


def next_question() -> Action:
    """Quiz: commit the selection and go to the next question (or finish on the last one)."""
    return Action(type="next_question")
