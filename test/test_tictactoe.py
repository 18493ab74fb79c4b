"""
Tic-Tac-Toe: line detection, turn order, random opponent and the win-rate rating.
"""

import itertools
import random

from backend import config
from backend.engine.tictactoe import AI, HUMAN, TIE, WINNING_LINES, TicTacToeEngine, check_winner

from conftest import ScriptedRandom


def test_check_winner_example():
    board = ["X", "X", "X", None, "O", "O", None, None, None]
    assert check_winner(board) == "X"


def test_check_winner_columns_and_diagonals():
    assert check_winner(["O", "X", None, "O", "X", None, "O", None, None]) == "O"
    assert check_winner(["X", "O", None, "O", "X", None, None, None, "X"]) == "X"
    assert check_winner([None, None, "O", None, "O", None, "O", "X", "X"]) == "O"


def test_check_winner_tie_and_open():
    assert check_winner(["X", "O", "X", "X", "O", "O", "O", "X", "X"]) == TIE
    assert check_winner([None] * 9) is None
    assert check_winner(["X", "O", None, None, None, None, None, None, None]) is None


def test_check_winner_matches_line_definition():
    """Random boards: a winner iff some line is uniform and non-empty."""
    rng = random.Random(99)
    for _ in range(2000):
        board = [rng.choice(["X", "O", None]) for _ in range(9)]
        uniform = [board[a] for a, b, c in WINNING_LINES
                   if board[a] is not None and board[a] == board[b] == board[c]]
        result = check_winner(board)
        if uniform:
            assert result in uniform
        elif all(cell is not None for cell in board):
            assert result == TIE
        else:
            assert result is None


def test_human_move_then_ai_after_delay(scheduler):
    engine = TicTacToeEngine(scheduler, rng=ScriptedRandom(choices=[8]))
    assert engine.apply_move(4)
    assert engine.state.board[4] == HUMAN
    assert engine.state.current_player == AI

    # Human cannot play during the opponent's turn
    assert not engine.apply_move(0)

    scheduler.advance(config.AI_THINK_MS - 1)
    assert engine.state.board.count(AI) == 0
    scheduler.advance(1)
    assert engine.state.board[8] == AI
    assert engine.state.current_player == HUMAN


def test_occupied_cell_and_bad_index_are_ignored(scheduler):
    engine = TicTacToeEngine(scheduler)
    engine.apply_move(0)
    scheduler.advance(config.AI_THINK_MS)
    before = engine.state.to_dict()
    occupied = [i for i, c in enumerate(engine.state.board) if c is not None]
    for cell in occupied + [-1, 9]:
        assert not engine.apply_move(cell)
    assert engine.state.to_dict() == before


def _win_round(engine, scheduler):
    """X takes the top row while the scripted opponent plays the bottom row."""
    for cell in (0, 1, 2):
        engine.apply_move(cell)
        scheduler.advance(config.AI_THINK_MS)


def test_win_counts_and_board_locks(scheduler):
    engine = TicTacToeEngine(scheduler, rng=ScriptedRandom(choices=[6, 7, 8, 6, 7, 8]))
    _win_round(engine, scheduler)
    assert engine.state.winner == HUMAN
    assert engine.state.games_played == 1
    assert engine.state.wins == 1
    assert not engine.apply_move(5)
    assert not engine.has_pending_timers


def test_reset_keeps_counters(scheduler):
    engine = TicTacToeEngine(scheduler, rng=ScriptedRandom(choices=[6, 7, 8, 6, 7, 8]))
    _win_round(engine, scheduler)
    assert engine.reset()
    assert engine.state.board == [None] * 9
    assert engine.state.winner is None
    assert engine.state.current_player == HUMAN
    _win_round(engine, scheduler)
    assert engine.state.games_played == 2
    assert engine.state.wins == 2


def test_reset_cancels_pending_opponent(scheduler):
    engine = TicTacToeEngine(scheduler)
    engine.apply_move(0)
    engine.reset()
    scheduler.advance(config.AI_THINK_MS * 2)
    assert engine.state.board == [None] * 9


def test_ai_loss_counts_game_but_not_win(scheduler):
    # O takes the left column while X wanders
    engine = TicTacToeEngine(scheduler, rng=ScriptedRandom(choices=[0, 3, 6]))
    for cell in (1, 2, 5):
        engine.apply_move(cell)
        scheduler.advance(config.AI_THINK_MS)
    assert engine.state.winner == AI
    assert engine.state.games_played == 1
    assert engine.state.wins == 0


def test_random_games_always_terminate(scheduler):
    engine = TicTacToeEngine(scheduler, rng=random.Random(5))
    for _ in range(30):
        while engine.state.winner is None:
            empty = [i for i, c in enumerate(engine.state.board) if c is None]
            engine.apply_move(empty[0])
            scheduler.advance(config.AI_THINK_MS)
        engine.reset()
    assert engine.state.games_played == 30


def test_finish_stars_from_win_rate(scheduler):
    cases = [(0, 0, 1), (7, 10, 5), (5, 10, 4), (3, 10, 3), (1, 10, 2), (0, 10, 1)]
    for wins, played, stars in cases:
        engine = TicTacToeEngine(scheduler)
        engine.state.wins = wins
        engine.state.games_played = played
        result = engine.finish()
        assert (result.score, result.stars) == (wins, stars)


def test_finish_only_once(scheduler):
    engine = TicTacToeEngine(scheduler)
    engine.apply_move(4)
    assert engine.finish() is not None
    assert engine.finish() is None
    # Opponent timer was cancelled with the session
    scheduler.advance(config.AI_THINK_MS)
    assert engine.state.board.count(AI) == 0


def test_every_opening_is_answered(scheduler):
    for opening, seed in itertools.product(range(9), range(3)):
        engine = TicTacToeEngine(scheduler, rng=random.Random(seed))
        engine.apply_move(opening)
        scheduler.advance(config.AI_THINK_MS)
        assert engine.state.board.count(AI) == 1
        assert engine.state.board[opening] == HUMAN
