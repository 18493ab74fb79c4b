"""
Single place for default Games Zone configuration.
Timings are in milliseconds; the engines read them as defaults so tests and the
demo can pass their own.
"""
import os

# Log level for the API process (DEBUG, INFO, WARNING, ...)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Shared clock granularity for elapsed-time and countdown clocks
SECOND_MS = 1000

# Tic-Tac-Toe: opponent "thinking" delay before its random move
AI_THINK_MS = 500

# Snake
SNAKE_GRID_SIZE = 15
SNAKE_TICK_MS = 150
SNAKE_FOOD_POINTS = 10
SNAKE_START = (7, 7)
SNAKE_FIRST_FOOD = (10, 10)

# Memory Match: how long a mismatched pair stays face up
PAIR_REVEAL_MS = 1000
MEMORY_SYMBOLS = ["🎯", "🎨", "🎭", "🎪", "🎲", "🎸", "🎮", "🎹"]
MEMORY_TIME_BONUS_SECONDS = 120

# Sliding puzzle
PUZZLE_SIZE = 3
PUZZLE_SHUFFLE_MOVES = 1000
PUZZLE_TIME_BONUS_SECONDS = 300
PUZZLE_MOVE_BONUS = 50

# Quiz
QUIZ_SECONDS_PER_QUESTION = 30

# Games shown in the Games Zone grid (id, display name, icon)
GAME_CATALOG = [
    {"id": "tic-tac-toe", "name": "Tic Tac Toe", "icon": "×"},
    {"id": "snake", "name": "Snake", "icon": "🐍"},
    {"id": "memory", "name": "Memory", "icon": "🧠"},
    {"id": "puzzle", "name": "Puzzle", "icon": "🧩"},
    {"id": "quiz", "name": "Quiz", "icon": "❓"},
]
