"""
Tests for session.py - commands and the tick timer lifecycle.
"""

import random

import pytest

from gridsnake.config import TICK_INTERVAL_SECONDS, UP, LEFT, RIGHT
from gridsnake.game import InvalidDirectionError, new_game_state
from gridsnake.session import GameSession
from gridsnake.timer import SteppedScheduler

TICK = TICK_INTERVAL_SECONDS


@pytest.fixture
def scheduler():
    return SteppedScheduler()


@pytest.fixture
def session(scheduler):
    s = GameSession(10, 10, scheduler, rng=random.Random(0))
    s.start()
    return s


def crash_into_wall(session, scheduler):
    """Head starts at x=2 on a 10-wide grid; the 8th move leaves it."""
    scheduler.run_ticks(8, TICK)
    assert session.state.is_over


class TestStart:

    def test_start_schedules_one_timer(self, session, scheduler):
        assert session.running is True
        assert scheduler.active_timers == 1

    def test_not_running_before_start(self, scheduler):
        s = GameSession(10, 10, scheduler)
        assert s.running is False
        assert scheduler.active_timers == 0

    def test_start_twice_keeps_one_timer(self, session, scheduler):
        session.start()
        session.start()
        assert scheduler.active_timers == 1
        scheduler.advance(TICK)
        assert session.ticks == 1

    def test_default_interval(self, session):
        assert session.tick_interval == 0.15

    def test_first_start_keeps_initial_state(self, scheduler):
        """The state built in __init__ is the one played; no extra food draws."""
        s = GameSession(20, 20, scheduler, rng=random.Random(5))
        initial = s.state
        s.start()
        assert s.state is initial
        assert s.state.food == new_game_state(20, 20, random.Random(5)).food

    def test_start_after_input_builds_fresh_state(self, scheduler):
        s = GameSession(20, 20, scheduler, rng=random.Random(5))
        s.press_direction(UP)
        s.start()
        assert s.state.pending == RIGHT


class TestTicking:

    def test_one_move_per_interval(self, session, scheduler):
        head = session.state.snake[0]
        scheduler.advance(TICK)
        assert session.state.snake[0] == (head[0] + 1, head[1])
        scheduler.advance(TICK / 2)
        assert session.ticks == 1
        scheduler.advance(TICK / 2)
        assert session.ticks == 2

    def test_direction_applied_on_next_tick(self, session, scheduler):
        x, y = session.state.snake[0]
        session.press_direction(UP)
        assert session.state.snake[0] == (x, y)
        scheduler.advance(TICK)
        assert session.state.snake[0] == (x, y - 1)

    def test_reversal_ignored(self, session, scheduler):
        x, y = session.state.snake[0]
        session.press_direction(LEFT)
        scheduler.advance(TICK)
        assert session.state.direction == RIGHT
        assert session.state.snake[0] == (x + 1, y)

    def test_invalid_direction_raises(self, session):
        with pytest.raises(InvalidDirectionError):
            session.press_direction((0, 2))


class TestGameOver:

    def test_game_over_stops_timer(self, session, scheduler):
        crash_into_wall(session, scheduler)
        assert session.running is False
        assert scheduler.active_timers == 0

    def test_no_ticks_after_game_over(self, session, scheduler):
        crash_into_wall(session, scheduler)
        snake = list(session.state.snake)
        ticks = session.ticks
        assert scheduler.advance(TICK * 10) == 0
        assert session.state.snake == snake
        assert session.ticks == ticks

    def test_spurious_tick_is_noop(self, session, scheduler):
        crash_into_wall(session, scheduler)
        snake = list(session.state.snake)
        session.on_tick()
        assert session.state.snake == snake
        assert session.state.is_over is True

    def test_input_ignored_after_game_over(self, session, scheduler):
        crash_into_wall(session, scheduler)
        pending = session.state.pending
        session.press_direction(UP)
        assert session.state.pending == pending


class TestRestart:

    def test_restart_ignored_while_playing(self, session, scheduler):
        state = session.state
        assert session.request_restart() is False
        assert session.state is state
        assert scheduler.active_timers == 1

    def test_restart_after_game_over(self, session, scheduler):
        crash_into_wall(session, scheduler)
        old = session.state
        assert session.request_restart() is True
        assert session.state is not old
        assert session.state.is_over is False
        assert session.state.score == 0
        assert len(session.state.snake) == 3
        assert session.state.direction == RIGHT
        assert session.ticks == 0
        assert session.running is True
        assert scheduler.active_timers == 1

    def test_restarted_run_ticks_once_per_interval(self, session, scheduler):
        crash_into_wall(session, scheduler)
        session.request_restart()
        head = session.state.snake[0]
        scheduler.advance(TICK)
        assert session.state.snake[0] == (head[0] + 1, head[1])
        assert session.ticks == 1

    def test_stop(self, session, scheduler):
        session.stop()
        assert session.running is False
        assert scheduler.active_timers == 0
        session.stop()
