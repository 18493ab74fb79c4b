#!/usr/bin/env python3
"""
Interactive CLI for trying the Games Zone engines in a terminal.
Run: python test/play_cli.py

Virtual time follows the wall clock between inputs, so the quiz countdown and
the elapsed-time clocks behave as in the dashboard. Snake is stepped one tick
per input instead.
"""

import os
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from backend import config
from backend.engine.actions import (
    Action,
    change_direction,
    flip_card,
    next_question,
    pause_game,
    place_mark,
    reset_board,
    select_option,
    slide_tile,
    start_game,
)
from backend.engine.clock import ManualScheduler
from backend.engine.queries import get_available_actions
from backend.engine.utils import print_game_state
from backend.engine.zone import GamesZone, InMemoryScoreSink

SNAKE_KEYS = {"w": "UP", "s": "DOWN", "a": "LEFT", "d": "RIGHT"}

HELP = {
    "tic-tac-toe": "cell 0-8 | r = play again",
    "snake": "w/a/s/d to steer, Enter to step | n = new run | p = pause",
    "memory": "card number | n = new deal",
    "puzzle": "cell number to slide | n = new shuffle",
    "quiz": "option number | Enter = next | n = start",
}


def clear_screen():
    print("\n" * 2)


def print_header(zone: GamesZone):
    print("=" * 60)
    print(f"  {zone.active_game_id.upper()} | {HELP[zone.active_game_id]}")
    print("  f = finish and save score | q = close without saving")
    print("=" * 60)


def parse_command(game_id: str, command: str) -> Action | None:
    """Translate one line of input into an action for the active game."""
    if game_id == "tic-tac-toe":
        if command == "r":
            return reset_board()
        if command.isdigit():
            return place_mark(int(command))
    elif game_id == "snake":
        if command == "n":
            return start_game()
        if command == "p":
            return pause_game()
        if command in SNAKE_KEYS:
            return change_direction(SNAKE_KEYS[command])
    elif game_id == "memory":
        if command == "n":
            return start_game()
        if command.isdigit():
            return flip_card(int(command))
    elif game_id == "puzzle":
        if command == "n":
            return start_game()
        if command.isdigit():
            return slide_tile(int(command))
    elif game_id == "quiz":
        if command == "n":
            return start_game()
        if command == "":
            return next_question()
        if command.isdigit():
            return select_option(int(command))
    return None


def choose_game() -> str | None:
    print("\n--- Games Zone ---")
    for i, game in enumerate(config.GAME_CATALOG, start=1):
        print(f"  {i}. {game['icon']}  {game['name']}")
    print("  0. Quit")
    choice = input("\nSelect game #: ").strip()
    if choice in ("", "0"):
        return None
    try:
        return config.GAME_CATALOG[int(choice) - 1]["id"]
    except (ValueError, IndexError):
        print("Invalid selection")
        return ""


def play(zone: GamesZone, scheduler: ManualScheduler, game_id: str) -> None:
    engine = zone.open(game_id)
    last = time.monotonic()
    while zone.active is engine:
        clear_screen()
        print_header(zone)
        print_game_state(engine)
        available = get_available_actions(engine)["actions"]
        print(f"\nAvailable: {', '.join(available) or '-'}")

        command = input("> ").strip().lower()
        if game_id == "snake":
            scheduler.advance(config.SNAKE_TICK_MS)
        else:
            now = time.monotonic()
            scheduler.advance(int((now - last) * 1000))
            last = now

        if command == "f":
            result = zone.finish()
            if result is None:
                print("Start the game first, or q to close")
                continue
            print(f"\n✓ Saved: score {result.score}, {'★' * result.stars}")
            return
        if command == "q":
            zone.close()
            print("\nClosed without saving.")
            return

        action = parse_command(game_id, command)
        if action is None:
            if command:
                print("Unknown command")
            continue
        try:
            applied, events = zone.dispatch(action)
        except ValueError as e:
            print(f"\nError: {e}")
            continue
        if not applied:
            print("(ignored)")
        for e in events:
            if e.type in ("round_ended", "snake_crashed", "pair_matched", "game_completed"):
                print(f"  {e.type}: {e.payload}")

        # Let pair resolution and the opponent's move happen before redrawing
        if game_id in ("tic-tac-toe", "memory"):
            delay = config.AI_THINK_MS if game_id == "tic-tac-toe" else config.PAIR_REVEAL_MS
            time.sleep(delay / 1000)
            now = time.monotonic()
            scheduler.advance(int((now - last) * 1000))
            last = now


def main_loop():
    scheduler = ManualScheduler()
    sink = InMemoryScoreSink()
    zone = GamesZone(sink, scheduler)
    while True:
        game_id = choose_game()
        if game_id is None:
            break
        if game_id:
            play(zone, scheduler, game_id)

    if sink.records:
        print("\n--- Scores this session ---")
        for record in sink.records:
            print(f"  {record.game_id:<12} {record.score:>4}  {'★' * record.stars}")


if __name__ == "__main__":
    try:
        main_loop()
    except KeyboardInterrupt:
        print("\n\nGame interrupted. Goodbye!")
        sys.exit(0)
