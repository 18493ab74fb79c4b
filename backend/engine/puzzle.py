"""
8-tile sliding puzzle.

The starting layout is produced by sliding tiles at random from the solved
position, so every layout the engine hands out can be solved.
"""

import random

from backend import config
from backend.engine.base import GameEngine
from backend.engine.clock import Scheduler
from backend.engine.events import game_completed, game_started, tile_moved
from backend.engine.scoring import puzzle_score, puzzle_stars
from backend.engine.state import COMPLETE, PLAYING, PuzzleState


def solved_tiles(size: int = config.PUZZLE_SIZE) -> list[int | None]:
    """[1, 2, ..., n-1, None]"""
    return list(range(1, size * size)) + [None]


def valid_moves(blank_index: int, size: int = config.PUZZLE_SIZE) -> list[int]:
    """Cells orthogonally adjacent to the blank (up, down, left, right)."""
    row, col = divmod(blank_index, size)
    moves = []
    if row > 0:
        moves.append((row - 1) * size + col)
    if row < size - 1:
        moves.append((row + 1) * size + col)
    if col > 0:
        moves.append(row * size + (col - 1))
    if col < size - 1:
        moves.append(row * size + (col + 1))
    return moves


def shuffle_tiles(
    rng: random.Random,
    slides: int = config.PUZZLE_SHUFFLE_MOVES,
    size: int = config.PUZZLE_SIZE,
) -> tuple[list[int | None], list[int]]:
    """
    Apply random legal slides to the solved layout.
    Returns (tiles, path) where path[k] is the cell the blank moved into on slide k.
    """
    tiles = solved_tiles(size)
    blank = tiles.index(None)
    path = []
    for _ in range(slides):
        target = rng.choice(valid_moves(blank, size))
        tiles[blank], tiles[target] = tiles[target], tiles[blank]
        blank = target
        path.append(target)
    return tiles, path


def is_solved(tiles: list[int | None]) -> bool:
    return tiles == solved_tiles(int(len(tiles) ** 0.5))


class PuzzleEngine(GameEngine):
    game_id = "puzzle"

    def __init__(
        self,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        size: int = config.PUZZLE_SIZE,
        shuffle_moves: int = config.PUZZLE_SHUFFLE_MOVES,
    ):
        super().__init__(scheduler, rng)
        self.size = size
        self.shuffle_moves = shuffle_moves
        self.state = PuzzleState(tiles=solved_tiles(size))
        self.shuffle_path: list[int] = []
        self.clock = self.make_clock(config.SECOND_MS, self._tick)

    @property
    def solved(self) -> bool:
        return self.state.status == COMPLETE

    def start(self) -> bool:
        """Shuffle a new layout and start the elapsed-time clock."""
        if self.ended:
            return False
        self.cancel_timers()
        tiles, self.shuffle_path = shuffle_tiles(self.rng, self.shuffle_moves, self.size)
        self.state = PuzzleState(tiles=tiles, status=PLAYING)
        self.clock.start()
        self.started = True
        self.emit(game_started(self.game_id))
        return True

    def move(self, cell: int) -> bool:
        """Slide the tile at cell into the blank. Only tiles next to the blank can move."""
        s = self.state
        if self.ended or s.status != PLAYING:
            return False
        blank = s.blank_index
        if cell not in valid_moves(blank, self.size):
            return False

        tile = s.tiles[cell]
        s.tiles[blank], s.tiles[cell] = s.tiles[cell], s.tiles[blank]
        s.moves += 1
        self.emit(tile_moved(tile, cell, blank, s.moves))

        if is_solved(s.tiles):
            s.status = COMPLETE
            self.clock.stop()
            self.emit(game_completed(self.game_id, {
                "moves": s.moves,
                "elapsed_seconds": s.elapsed_seconds,
            }))
        return True

    def _tick(self) -> None:
        self.state.elapsed_seconds += 1

    def compute_result(self) -> tuple[int, int]:
        s = self.state
        score = puzzle_score(s.moves, s.elapsed_seconds)
        return score, puzzle_stars(s.moves, s.elapsed_seconds, self.solved)
