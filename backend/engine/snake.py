"""
Snake on a square grid.
The snake advances one cell per clock tick; leaving the grid or running into
its own body ends the game. Eating food scores points and grows the snake by one cell.
"""

import random

from backend import config
from backend.engine.base import GameEngine
from backend.engine.clock import Scheduler
from backend.engine.events import (
    direction_changed,
    food_eaten,
    game_paused,
    game_started,
    snake_crashed,
)
from backend.engine.scoring import SNAKE_STAR_THRESHOLDS, stars_for
from backend.engine.state import GAME_OVER, IDLE, PLAYING, Cell, SnakeState

DIRECTIONS = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}

OPPOSITE = {"UP": "DOWN", "DOWN": "UP", "LEFT": "RIGHT", "RIGHT": "LEFT"}


class SnakeEngine(GameEngine):
    game_id = "snake"

    def __init__(
        self,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        grid_size: int = config.SNAKE_GRID_SIZE,
        tick_ms: int = config.SNAKE_TICK_MS,
        food_points: int = config.SNAKE_FOOD_POINTS,
    ):
        super().__init__(scheduler, rng)
        self.grid_size = grid_size
        self.food_points = food_points
        self.state = SnakeState(body=[config.SNAKE_START], food=config.SNAKE_FIRST_FOOD)
        # Direction of the last completed step; reversals are judged against it
        self._moved_direction = self.state.direction
        self.clock = self.make_clock(tick_ms, self.tick)

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def start(self) -> bool:
        """Start a fresh run from idle or after a crash. Ignored while already playing."""
        if self.ended or self.state.status == PLAYING:
            return False
        s = self.state
        s.body = [config.SNAKE_START]
        s.food = config.SNAKE_FIRST_FOOD
        s.direction = "RIGHT"
        s.score = 0
        s.status = PLAYING
        self._moved_direction = s.direction
        self.clock.restart()
        self.started = True
        self.emit(game_started(self.game_id))
        return True

    def pause(self) -> bool:
        """Stop the run and keep its score as a high score candidate. start() begins a new run."""
        if self.ended or self.state.status != PLAYING:
            return False
        self.clock.stop()
        s = self.state
        s.status = IDLE
        s.high_score = max(s.high_score, s.score)
        self.emit(game_paused(self.game_id, s.score))
        return True

    def change_direction(self, direction: str) -> bool:
        """Steer the snake. Only while playing; turning straight back into the body is ignored."""
        s = self.state
        if self.ended or s.status != PLAYING:
            return False
        direction = str(direction).upper()
        if direction not in DIRECTIONS:
            return False
        if direction == s.direction:
            return False
        if direction in (OPPOSITE[s.direction], OPPOSITE[self._moved_direction]):
            return False
        old = s.direction
        s.direction = direction
        self.emit(direction_changed(old, direction))
        return True

    def tick(self) -> None:
        """Advance the snake by one cell."""
        s = self.state
        if s.status != PLAYING:
            return
        dx, dy = DIRECTIONS[s.direction]
        hx, hy = s.head
        head = (hx + dx, hy + dy)
        self._moved_direction = s.direction

        if not self.in_bounds(head):
            self._crash(head, "wall")
            return
        # Whole body including the tail counts, before deciding whether the snake grows
        if head in s.body:
            self._crash(head, "self")
            return

        s.body.insert(0, head)
        if head == s.food:
            s.score += self.food_points
            self.emit(food_eaten(head, s.score, len(s.body)))
            s.food = self.generate_food()
        else:
            s.body.pop()

    def generate_food(self, body: list[Cell] | None = None) -> Cell | None:
        """Pick a uniformly random cell not covered by the snake (None if the grid is full)."""
        occupied = set(self.state.body if body is None else body)
        if len(occupied) >= self.grid_size * self.grid_size:
            return None
        while True:
            cell = (self.rng.randrange(self.grid_size), self.rng.randrange(self.grid_size))
            if cell not in occupied:
                return cell

    def _crash(self, cell: Cell, reason: str) -> None:
        self.clock.stop()
        s = self.state
        s.status = GAME_OVER
        s.high_score = max(s.high_score, s.score)
        self.emit(snake_crashed(cell, reason, s.score))

    def compute_result(self) -> tuple[int, int]:
        s = self.state
        final_score = max(s.score, s.high_score)
        return final_score, stars_for(final_score, SNAKE_STAR_THRESHOLDS)
