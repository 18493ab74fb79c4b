"""
Action dispatch.
Routes an Action to the engine method that handles it and returns the events it produced.
"""

from backend.engine.actions import Action
from backend.engine.base import GameEngine
from backend.engine.events import GameEvent

# Which action types each game accepts
GAME_ALLOWED_ACTIONS = {
    "tic-tac-toe": ["place_mark", "reset_board"],
    "snake": ["start_game", "change_direction", "pause_game"],
    "memory": ["start_game", "flip_card"],
    "puzzle": ["start_game", "slide_tile"],
    "quiz": ["start_game", "select_option", "next_question"],
}


def _int_field(action: Action, key: str) -> int:
    value = action.payload.get(key)
    # bool is an int subclass; floats and numeric strings are not coerced
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Action '{action.type}' needs an integer '{key}'")
    return value


def validate_action_for_game(engine: GameEngine, action: Action) -> None:
    """Raise ValueError if the engine's game does not accept this action type."""
    allowed = GAME_ALLOWED_ACTIONS.get(engine.game_id, [])
    if action.type not in allowed:
        raise ValueError(
            f"Action '{action.type}' is not allowed in game '{engine.game_id}'. "
            f"Allowed actions: {', '.join(allowed)}"
        )


def apply_action(engine: GameEngine, action: Action) -> tuple[bool, list[GameEvent]]:
    """
    Apply a single action to the engine.

    Illegal moves inside the game (an occupied cell, a tile not next to the blank)
    are ignored and reported as applied=False. An action type the game does not
    know, or a malformed payload, raises ValueError.

    Returns:
        Tuple of (applied, events) where events include anything timers produced
        since the last call.
    """
    validate_action_for_game(engine, action)

    if action.type == "place_mark":
        applied = engine.apply_move(_int_field(action, "cell"))
    elif action.type == "reset_board":
        applied = engine.reset()
    elif action.type == "start_game":
        applied = engine.start()
    elif action.type == "change_direction":
        applied = engine.change_direction(str(action.payload.get("direction", "")))
    elif action.type == "pause_game":
        applied = engine.pause()
    elif action.type == "flip_card":
        applied = engine.flip(_int_field(action, "card_id"))
    elif action.type == "slide_tile":
        applied = engine.move(_int_field(action, "cell"))
    elif action.type == "select_option":
        applied = engine.select(_int_field(action, "option"))
    elif action.type == "next_question":
        applied = engine.advance()
    else:
        raise ValueError(f"Unknown action type: {action.type}")

    return applied, engine.drain_events()
