"""
Memory Match: find the pairs among face-down cards.

Flipping a second card counts a move and schedules the pair resolution after a
short reveal delay. Until it resolves, further flips are ignored.
"""

import random

from backend import config
from backend.engine.base import GameEngine
from backend.engine.clock import Scheduler
from backend.engine.events import (
    card_flipped,
    game_completed,
    game_started,
    pair_matched,
    pair_missed,
)
from backend.engine.scoring import MEMORY_STAR_THRESHOLDS, memory_score, stars_for
from backend.engine.state import COMPLETE, PLAYING, Card, MemoryMatchState


def deal_cards(symbols: list[str], rng: random.Random) -> list[Card]:
    """Two cards per symbol, shuffled."""
    values = list(symbols) * 2
    rng.shuffle(values)
    return [Card(id=i, value=v) for i, v in enumerate(values)]


class MemoryMatchEngine(GameEngine):
    game_id = "memory"

    def __init__(
        self,
        scheduler: Scheduler,
        rng: random.Random | None = None,
        symbols: list[str] | None = None,
        reveal_ms: int = config.PAIR_REVEAL_MS,
    ):
        super().__init__(scheduler, rng)
        self.symbols = list(symbols if symbols is not None else config.MEMORY_SYMBOLS)
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("Memory symbols must be distinct")
        self.reveal_ms = reveal_ms
        self.state = MemoryMatchState()
        self.clock = self.make_clock(config.SECOND_MS, self._tick)

    def start(self) -> bool:
        """Deal a new shuffled layout and start the elapsed-time clock."""
        if self.ended:
            return False
        self.cancel_timers()
        self.state = MemoryMatchState(cards=deal_cards(self.symbols, self.rng), status=PLAYING)
        self.clock.start()
        self.started = True
        self.emit(game_started(self.game_id))
        return True

    def flip(self, card_id: int) -> bool:
        """Turn a card face up. Ignored while two cards wait for comparison."""
        s = self.state
        if self.ended or s.status != PLAYING:
            return False
        if len(s.flipped_cards) >= 2:
            return False
        if not isinstance(card_id, int) or not 0 <= card_id < len(s.cards):
            return False
        card = s.cards[card_id]
        if card.is_flipped or card.is_matched:
            return False

        card.is_flipped = True
        s.flipped_cards.append(card_id)
        self.emit(card_flipped(card_id, card.value))

        if len(s.flipped_cards) == 2:
            s.moves += 1
            self.schedule(self.reveal_ms, self._resolve_pair)
        return True

    def _resolve_pair(self) -> None:
        s = self.state
        first, second = (s.cards[i] for i in s.flipped_cards)
        if first.value == second.value:
            first.is_matched = second.is_matched = True
            s.matches += 1
            self.emit(pair_matched([first.id, second.id], first.value, s.matches))
            if s.matches == s.total_pairs:
                s.status = COMPLETE
                self.clock.stop()
                self.emit(game_completed(self.game_id, {
                    "moves": s.moves,
                    "elapsed_seconds": s.elapsed_seconds,
                }))
        else:
            first.is_flipped = second.is_flipped = False
            self.emit(pair_missed([first.id, second.id]))
        s.flipped_cards = []

    def _tick(self) -> None:
        self.state.elapsed_seconds += 1

    def compute_result(self) -> tuple[int, int]:
        s = self.state
        score = memory_score(s.matches, s.moves, s.elapsed_seconds)
        return score, stars_for(score, MEMORY_STAR_THRESHOLDS)
