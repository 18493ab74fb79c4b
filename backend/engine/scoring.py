"""Score formulas and star ratings for each game."""

import math

from backend.engine import MIN_STARS
from backend import config

# (minimum value, stars), checked from the top; anything below the last row is MIN_STARS
TICTACTOE_STAR_THRESHOLDS = [(70, 5), (50, 4), (30, 3), (10, 2)]  # win rate %
SNAKE_STAR_THRESHOLDS = [(100, 5), (80, 4), (60, 3), (40, 2)]  # points
MEMORY_STAR_THRESHOLDS = [(150, 5), (120, 4), (90, 3), (60, 2)]  # points
QUIZ_STAR_THRESHOLDS = [(90, 5), (75, 4), (60, 3), (40, 2)]  # correct %

# Puzzle tiers: (max moves, max seconds or None for any time, stars)
PUZZLE_STAR_TIERS = [(25, 60, 5), (35, 120, 4), (50, 180, 3), (75, None, 2)]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (built-in round() rounds half to even)."""
    return int(math.floor(value + 0.5))


def stars_for(value: float, thresholds: list[tuple[float, int]]) -> int:
    """Map a value to a star rating using a descending (minimum, stars) table."""
    for minimum, stars in thresholds:
        if value >= minimum:
            return stars
    return MIN_STARS


def win_rate(wins: int, games_played: int) -> float:
    """Percentage of rounds won; 0 before any round finished."""
    if games_played <= 0:
        return 0.0
    return wins / games_played * 100


def memory_score(matches: int, moves: int, elapsed_seconds: int) -> int:
    """
    Match efficiency (matches per move, as a percentage) plus a time bonus.
    The bonus is one point per second under MEMORY_TIME_BONUS_SECONDS.
    """
    efficiency = matches * 100 / moves if moves > 0 else 0
    time_bonus = max(0, config.MEMORY_TIME_BONUS_SECONDS - elapsed_seconds)
    return round_half_up(efficiency + time_bonus)


def puzzle_score(moves: int, elapsed_seconds: int) -> int:
    time_bonus = max(0, config.PUZZLE_TIME_BONUS_SECONDS - elapsed_seconds)
    move_bonus = max(0, config.PUZZLE_MOVE_BONUS - moves)
    return time_bonus + move_bonus


def puzzle_stars(moves: int, elapsed_seconds: int, solved: bool) -> int:
    """Star tiers only apply to a solved puzzle; leaving early is always MIN_STARS."""
    if not solved:
        return MIN_STARS
    for max_moves, max_seconds, stars in PUZZLE_STAR_TIERS:
        if moves <= max_moves and (max_seconds is None or elapsed_seconds <= max_seconds):
            return stars
    return MIN_STARS


def quiz_percentage(correct: int, total_questions: int) -> float:
    if total_questions <= 0:
        return 0.0
    return correct / total_questions * 100
