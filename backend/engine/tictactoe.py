"""
Tic-Tac-Toe against a random opponent.
The human plays X and always opens; O picks a uniformly random empty cell after a short delay.
"""

import random

from backend import config
from backend.engine.base import GameEngine
from backend.engine.clock import Scheduler, Timer
from backend.engine.events import board_reset, mark_placed, round_ended
from backend.engine.scoring import TICTACTOE_STAR_THRESHOLDS, stars_for, win_rate
from backend.engine.state import TicTacToeState

HUMAN = "X"
AI = "O"
TIE = "tie"

WINNING_LINES = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),  # diagonals
]


def check_winner(board: list[str | None]) -> str | None:
    """Return "X" or "O" for three in a row, "tie" for a full board, otherwise None."""
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    if all(cell is not None for cell in board):
        return TIE
    return None


def empty_cells(board: list[str | None]) -> list[int]:
    return [i for i, cell in enumerate(board) if cell is None]


class TicTacToeEngine(GameEngine):
    game_id = "tic-tac-toe"
    requires_start = False

    def __init__(
        self,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        think_ms: int = config.AI_THINK_MS,
    ):
        super().__init__(scheduler, rng)
        self.think_ms = think_ms
        self.state = TicTacToeState()
        self._ai_timer: Timer | None = None

    def apply_move(self, cell: int) -> bool:
        """Place X. Ignored if the cell is taken, the round is over, or it is O's turn."""
        if self.ended or self.state.current_player != HUMAN:
            return False
        return self._place(cell, HUMAN)

    def reset(self) -> bool:
        """Clear the board for another round; games_played and wins carry over."""
        if self.ended:
            return False
        if self._ai_timer is not None:
            self._ai_timer.cancel()
            self._ai_timer = None
        s = self.state
        s.board = [None] * 9
        s.current_player = HUMAN
        s.winner = None
        self.emit(board_reset(s.games_played, s.wins))
        return True

    def _place(self, cell: int, player: str) -> bool:
        s = self.state
        if not isinstance(cell, int) or not 0 <= cell < 9:
            return False
        if s.board[cell] is not None or s.winner is not None:
            return False

        s.board[cell] = player
        self.emit(mark_placed(player, cell))

        winner = check_winner(s.board)
        if winner is not None:
            s.winner = winner
            s.games_played += 1
            if winner == HUMAN:
                s.wins += 1
            self.emit(round_ended(winner, s.games_played, s.wins))
            return True

        s.current_player = AI if player == HUMAN else HUMAN
        if s.current_player == AI:
            self._ai_timer = self.schedule(self.think_ms, self._ai_move)
        return True

    def _ai_move(self) -> None:
        self._ai_timer = None
        s = self.state
        if s.current_player != AI or s.winner is not None:
            return
        options = empty_cells(s.board)
        if options:
            self._place(self.rng.choice(options), AI)

    def compute_result(self) -> tuple[int, int]:
        s = self.state
        stars = stars_for(win_rate(s.wins, s.games_played), TICTACTOE_STAR_THRESHOLDS)
        return s.wins, stars
