"""
Main entry point for the Games Zone engines.
Demonstrates every engine with scripted input on a virtual clock.
"""

import random

from backend import config
from backend.engine.actions import (
    change_direction,
    flip_card,
    next_question,
    place_mark,
    reset_board,
    select_option,
    slide_tile,
    start_game,
)
from backend.engine.clock import ManualScheduler
from backend.engine.utils import print_game_state
from backend.engine.zone import GamesZone, InMemoryScoreSink


def play_tictactoe(zone: GamesZone, scheduler: ManualScheduler) -> None:
    print("\n[TIC TAC TOE: three rounds against the random opponent]")
    engine = zone.open("tic-tac-toe")
    for round_number in range(1, 4):
        while engine.state.winner is None:
            empty = [i for i, cell in enumerate(engine.state.board) if cell is None]
            # Prefer the centre, then corners
            choice = next((i for i in (4, 0, 2, 6, 8) if i in empty), empty[0])
            zone.dispatch(place_mark(choice))
            scheduler.advance(config.AI_THINK_MS)
        print(f"Round {round_number}: {engine.state.winner}")
        print_game_state(engine)
        if round_number < 3:
            zone.dispatch(reset_board())
    result = zone.finish()
    print(f"✓ Finished: {result.to_dict()}")


def play_snake(zone: GamesZone, scheduler: ManualScheduler) -> None:
    print("\n[SNAKE: chase the food until the wall]")
    engine = zone.open("snake")
    zone.dispatch(start_game())
    for _ in range(200):
        if not engine.state.is_playing:
            break
        head_x, head_y = engine.state.head
        food = engine.state.food
        if food is not None:
            if food[0] > head_x:
                zone.dispatch(change_direction("RIGHT"))
            elif food[0] < head_x:
                zone.dispatch(change_direction("LEFT"))
            elif food[1] > head_y:
                zone.dispatch(change_direction("DOWN"))
            else:
                zone.dispatch(change_direction("UP"))
        scheduler.advance(config.SNAKE_TICK_MS)
    print_game_state(engine)
    result = zone.finish()
    print(f"✓ Finished: {result.to_dict()}")


def play_memory(zone: GamesZone, scheduler: ManualScheduler) -> None:
    print("\n[MEMORY MATCH: perfect recall]")
    engine = zone.open("memory")
    zone.dispatch(start_game())
    positions: dict[str, list[int]] = {}
    for card in engine.state.cards:
        positions.setdefault(card.value, []).append(card.id)
    for first, second in positions.values():
        zone.dispatch(flip_card(first))
        zone.dispatch(flip_card(second))
        scheduler.advance(config.PAIR_REVEAL_MS)
    print_game_state(engine)
    result = zone.finish()
    print(f"✓ Finished: {result.to_dict()}")


def play_puzzle(zone: GamesZone, scheduler: ManualScheduler) -> None:
    print("\n[SLIDING PUZZLE: undo the shuffle]")
    engine = zone.open("puzzle")
    zone.dispatch(start_game())
    print_game_state(engine)
    # Walk the blank back along the shuffle path
    path = engine.shuffle_path
    origins = [len(engine.state.tiles) - 1] + path[:-1]
    for origin in reversed(origins):
        if engine.solved:
            break
        zone.dispatch(slide_tile(origin))
    scheduler.advance(config.SECOND_MS * 5)
    print_game_state(engine)
    result = zone.finish()
    print(f"✓ Finished: {result.to_dict()}")


def play_quiz(zone: GamesZone, scheduler: ManualScheduler) -> None:
    print("\n[QUIZ: answer all but the last question, let it time out]")
    engine = zone.open("quiz")
    zone.dispatch(start_game())
    for question in engine.questions[:-1]:
        zone.dispatch(select_option(question.correct_answer))
        scheduler.advance(config.SECOND_MS * 3)
        zone.dispatch(next_question())
    scheduler.advance(config.SECOND_MS * config.QUIZ_SECONDS_PER_QUESTION)
    print_game_state(engine)
    result = zone.finish()
    print(f"✓ Finished: {result.to_dict()}")


def main():
    print("Games Zone Engines - scripted demo")
    print("=" * 60)

    scheduler = ManualScheduler()
    sink = InMemoryScoreSink()
    zone = GamesZone(sink, scheduler, rng=random.Random(7))

    play_tictactoe(zone, scheduler)
    play_snake(zone, scheduler)
    play_memory(zone, scheduler)
    play_puzzle(zone, scheduler)
    play_quiz(zone, scheduler)

    print("\n[RECORDED SCORES]")
    for record in sink.records:
        print(f"  {record.game_id:<12} score={record.score:<4} stars={'★' * record.stars}")
    print("=" * 60)


if __name__ == "__main__":
    main()
