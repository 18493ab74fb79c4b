"""
Timer and clock behaviour on the virtual-time scheduler.
"""

import pytest

from backend.engine.clock import GameClock, ManualScheduler


def test_timers_fire_in_due_order():
    scheduler = ManualScheduler()
    fired = []
    scheduler.call_later(300, lambda: fired.append("c"))
    scheduler.call_later(100, lambda: fired.append("a"))
    scheduler.call_later(200, lambda: fired.append("b"))

    assert scheduler.advance(150) == 1
    assert fired == ["a"]
    scheduler.advance(1000)
    assert fired == ["a", "b", "c"]
    assert scheduler.now() == 1150


def test_cancelled_timer_never_fires():
    scheduler = ManualScheduler()
    fired = []
    timer = scheduler.call_later(100, lambda: fired.append(1))
    timer.cancel()
    timer.cancel()  # idempotent
    scheduler.advance(500)
    assert fired == []
    assert scheduler.pending() == 0


def test_clock_ticks_once_per_interval():
    scheduler = ManualScheduler()
    ticks = []
    clock = GameClock(scheduler, 150, lambda: ticks.append(scheduler.now()))
    clock.start()
    scheduler.advance(450)
    assert ticks == [150, 300, 450]
    assert clock.ticks == 3


def test_no_tick_after_stop():
    scheduler = ManualScheduler()
    ticks = []
    clock = GameClock(scheduler, 100, lambda: ticks.append(1))
    clock.start()
    scheduler.advance(250)
    clock.stop()
    clock.stop()
    scheduler.advance(1000)
    assert len(ticks) == 2
    assert not clock.running
    assert scheduler.pending() == 0


def test_stop_from_inside_tick():
    scheduler = ManualScheduler()
    clock = None

    def on_tick():
        if clock.ticks == 2:
            clock.stop()

    clock = GameClock(scheduler, 100, on_tick)
    clock.start()
    scheduler.advance(1000)
    assert clock.ticks == 2
    assert not clock.running


def test_start_twice_does_not_double_tick():
    scheduler = ManualScheduler()
    clock = GameClock(scheduler, 100, lambda: None)
    clock.start()
    clock.start()
    scheduler.advance(300)
    assert clock.ticks == 3


def test_restart_waits_a_full_interval():
    scheduler = ManualScheduler()
    clock = GameClock(scheduler, 1000, lambda: None)
    clock.start()
    scheduler.advance(900)
    clock.restart()
    scheduler.advance(900)
    assert clock.ticks == 0
    scheduler.advance(100)
    assert clock.ticks == 1


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        GameClock(ManualScheduler(), 0, lambda: None)
