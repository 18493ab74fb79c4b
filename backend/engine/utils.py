"""
Utility functions for the game engines.
Plain-text rendering used by the demo script and the terminal CLI.
"""

from backend.engine.base import GameEngine
from backend.engine.memory_match import MemoryMatchEngine
from backend.engine.puzzle import PuzzleEngine
from backend.engine.queries import get_game_summary
from backend.engine.quiz import QuizEngine
from backend.engine.snake import SnakeEngine
from backend.engine.tictactoe import TicTacToeEngine


def render_tictactoe(engine: TicTacToeEngine) -> list[str]:
    board = engine.state.board
    rows = []
    for r in range(3):
        cells = [board[r * 3 + c] or str(r * 3 + c) for c in range(3)]
        rows.append(" " + " | ".join(cells))
    return [rows[0], "---+---+---", rows[1], "---+---+---", rows[2]]


def render_snake(engine: SnakeEngine) -> list[str]:
    s = engine.state
    body = set(s.body)
    lines = []
    for y in range(engine.grid_size):
        row = ""
        for x in range(engine.grid_size):
            cell = (x, y)
            if cell == s.head:
                row += "@"
            elif cell in body:
                row += "o"
            elif cell == s.food:
                row += "*"
            else:
                row += "."
        lines.append(row)
    return lines


def render_memory(engine: MemoryMatchEngine, columns: int = 4) -> list[str]:
    cards = engine.state.cards
    lines = []
    for start in range(0, len(cards), columns):
        row = []
        for card in cards[start:start + columns]:
            if card.is_matched or card.is_flipped:
                row.append(f"{card.id:>2}:{card.value}")
            else:
                row.append(f"{card.id:>2}:??")
        lines.append("  ".join(row))
    return lines


def render_puzzle(engine: PuzzleEngine) -> list[str]:
    tiles = engine.state.tiles
    size = engine.size
    lines = []
    for r in range(size):
        row = tiles[r * size:(r + 1) * size]
        lines.append(" ".join(" " if t is None else str(t) for t in row))
    return lines


def render_quiz(engine: QuizEngine) -> list[str]:
    question = engine.current_question
    if question is None:
        if engine.state.show_result:
            lines = [f"Result: {engine.state.score}/{len(engine.questions)}"]
            for item in engine.review():
                lines.append(f"  Q{item['question_id']}: you chose {item['your_answer_text'] or '(no answer)'}, "
                             f"correct is {item['correct_answer_text']}")
            return lines
        return [f"{len(engine.questions)} questions, {engine.seconds_per_question}s each"]
    lines = [f"[{question.category}] {question.question}"]
    for i, option in enumerate(question.options):
        marker = ">" if engine.state.selected == i else " "
        lines.append(f" {marker} {i}) {option}")
    return lines


def render_game(engine: GameEngine) -> list[str]:
    if isinstance(engine, TicTacToeEngine):
        return render_tictactoe(engine)
    if isinstance(engine, SnakeEngine):
        return render_snake(engine)
    if isinstance(engine, MemoryMatchEngine):
        return render_memory(engine)
    if isinstance(engine, PuzzleEngine):
        return render_puzzle(engine)
    if isinstance(engine, QuizEngine):
        return render_quiz(engine)
    return []


def print_game_state(engine: GameEngine) -> None:
    """Print the board and a one-line summary."""
    summary = get_game_summary(engine)
    stats = ", ".join(f"{k}={v}" for k, v in summary.items() if k != "game_id" and v is not None)
    print(f"[{engine.game_id}] {stats}")
    for line in render_game(engine):
        print(f"  {line}")
