"""
Query functions for UI integration.
These functions help the UI understand what input is currently accepted
without mutating game state.
"""

from typing import Any

from backend.engine.base import GameEngine
from backend.engine.memory_match import MemoryMatchEngine
from backend.engine.puzzle import PuzzleEngine, valid_moves
from backend.engine.quiz import QuizEngine
from backend.engine.snake import DIRECTIONS, OPPOSITE, SnakeEngine
from backend.engine.state import IN_PROGRESS, PLAYING
from backend.engine.tictactoe import HUMAN, TicTacToeEngine, empty_cells


def get_available_actions(engine: GameEngine) -> dict[str, Any]:
    """Input the engine would accept right now, keyed by action type."""
    if engine.ended:
        return {"game_id": engine.game_id, "can_finish": False, "actions": {}}

    actions: dict[str, Any] = {}
    if isinstance(engine, TicTacToeEngine):
        s = engine.state
        if s.winner is None and s.current_player == HUMAN:
            actions["place_mark"] = empty_cells(s.board)
        actions["reset_board"] = True
    elif isinstance(engine, SnakeEngine):
        s = engine.state
        if s.is_playing:
            actions["change_direction"] = [
                d for d in DIRECTIONS if d != s.direction and d != OPPOSITE[s.direction]
            ]
            actions["pause_game"] = True
        else:
            actions["start_game"] = True
    elif isinstance(engine, MemoryMatchEngine):
        s = engine.state
        if s.status == PLAYING and len(s.flipped_cards) < 2:
            actions["flip_card"] = [c.id for c in s.cards if not c.is_flipped and not c.is_matched]
        if s.status != PLAYING:
            actions["start_game"] = True
    elif isinstance(engine, PuzzleEngine):
        s = engine.state
        if s.status == PLAYING:
            actions["slide_tile"] = valid_moves(s.blank_index, engine.size)
        else:
            actions["start_game"] = True
    elif isinstance(engine, QuizEngine):
        question = engine.current_question
        if question is not None:
            actions["select_option"] = list(range(len(question.options)))
            actions["next_question"] = True
        else:
            actions["start_game"] = True

    return {"game_id": engine.game_id, "can_finish": engine.can_finish, "actions": actions}


def get_game_summary(engine: GameEngine) -> dict[str, Any]:
    """Headline numbers shown above each game board."""
    summary: dict[str, Any] = {"game_id": engine.game_id}
    if isinstance(engine, TicTacToeEngine):
        s = engine.state
        rate = round(s.wins / s.games_played * 100) if s.games_played else 0
        summary.update(games_played=s.games_played, wins=s.wins, win_rate=rate)
    elif isinstance(engine, SnakeEngine):
        s = engine.state
        summary.update(score=s.score, high_score=s.high_score, length=len(s.body))
    elif isinstance(engine, MemoryMatchEngine):
        s = engine.state
        summary.update(
            moves=s.moves,
            matches=s.matches,
            total_pairs=s.total_pairs,
            time=format_time(s.elapsed_seconds),
        )
    elif isinstance(engine, PuzzleEngine):
        s = engine.state
        summary.update(moves=s.moves, time=format_time(s.elapsed_seconds))
    elif isinstance(engine, QuizEngine):
        s = engine.state
        summary.update(
            question=s.current_index + 1 if s.status == IN_PROGRESS else None,
            total_questions=len(engine.questions),
            score=s.score,
            time_left=s.time_left,
        )
    return summary


def format_time(seconds: int) -> str:
    """m:ss"""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"
