"""
Tests for engine/game_loop.py and engine/scheduler.py.
"""

from unittest.mock import Mock

import pytest
import schedule

from bombsnake.domain import GameState, DOWN, SAFE
from bombsnake.engine.game_loop import GameLoop
from bombsnake.engine.scheduler import (
    ManualTickScheduler,
    ScheduleTickScheduler,
    TickScheduler,
)


class LeakyScheduler(TickScheduler):
    """Scheduler whose cancel() does nothing, to simulate a late timer firing."""

    def __init__(self):
        self.callbacks = []

    def every(self, interval_ms, callback):
        self.callbacks.append(callback)
        return len(self.callbacks)

    def cancel(self, handle):
        pass


@pytest.fixture
def state():
    state = GameState(seed=42)
    # Keep the fruit out of the snake's path along row 10
    state.place_item((0, 0), SAFE)
    return state


class TestManualTickScheduler:
    """Tests for the frame-stepping scheduler."""

    def test_step_fires_callbacks(self):
        scheduler = ManualTickScheduler()
        callback = Mock()
        scheduler.every(100, callback)

        assert scheduler.step(3) == 3
        assert callback.call_count == 3

    def test_cancel_stops_callbacks(self):
        scheduler = ManualTickScheduler()
        callback = Mock()
        handle = scheduler.every(100, callback)

        scheduler.cancel(handle)

        assert scheduler.step() == 0
        callback.assert_not_called()

    def test_cancel_unknown_handle_is_ignored(self):
        scheduler = ManualTickScheduler()
        scheduler.cancel(12345)
        assert scheduler.active == 0

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            ManualTickScheduler().every(0, Mock())


class TestScheduleTickScheduler:
    """Tests for the schedule-backed real-time scheduler."""

    def test_every_registers_job_in_seconds(self):
        scheduler = ScheduleTickScheduler()
        job = scheduler.every(120, lambda: None)

        assert isinstance(job, schedule.Job)
        assert job.unit == "seconds"
        assert job.interval == pytest.approx(0.12)
        assert scheduler.jobs == [job]

    def test_cancel_removes_job(self):
        scheduler = ScheduleTickScheduler()
        job = scheduler.every(120, lambda: None)

        scheduler.cancel(job)
        scheduler.cancel(None)

        assert scheduler.jobs == []

    def test_run_until_times_out(self):
        scheduler = ScheduleTickScheduler(sleep_seconds=0.001)
        assert scheduler.run_until(lambda: False, timeout=0.01) is False

    def test_real_time_loop_reaches_game_over(self):
        """A real-time loop on a tiny board ticks until the wall."""
        state = GameState(grid_size=4, speed_ms=1, seed=3)
        state.place_item((0, 0), SAFE)
        scheduler = ScheduleTickScheduler(sleep_seconds=0.001)
        loop = GameLoop(scheduler)

        loop.start(state)
        finished = scheduler.run_until(lambda: not loop.active, timeout=5)

        assert finished is True
        assert state.death_reason == "wall"
        assert loop.ticks == 2
        assert scheduler.jobs == []


class TestGameLoop:
    """Tests for GameLoop start/stop/tick."""

    def test_start_uses_state_speed(self, state):
        scheduler = ManualTickScheduler()
        loop = GameLoop(scheduler)

        loop.start(state)

        assert loop.active is True
        assert loop.interval_ms == 120
        assert list(scheduler.intervals.values()) == [120]

    def test_each_step_advances_once(self, state):
        scheduler = ManualTickScheduler()
        loop = GameLoop(scheduler)
        loop.start(state, 50)

        scheduler.step(3)

        assert state.tick == 3
        assert state.snake.head == (13, 10)
        assert loop.ticks == 3

    def test_loop_stops_itself_on_game_over(self, state):
        """After the terminal tick no further ticks are scheduled."""
        scheduler = ManualTickScheduler()
        loop = GameLoop(scheduler)
        loop.start(state)

        taken = scheduler.step(50)

        assert taken == 10
        assert state.running is False
        assert state.death_reason == "wall"
        assert loop.active is False
        assert scheduler.active == 0

    def test_stop_is_idempotent(self, state):
        scheduler = ManualTickScheduler()
        loop = GameLoop(scheduler)
        loop.start(state)

        loop.stop()
        loop.stop()

        assert loop.active is False
        assert scheduler.step() == 0
        assert state.tick == 0

    def test_stop_before_start_is_safe(self):
        loop = GameLoop(ManualTickScheduler())
        loop.stop()
        assert loop.active is False

    def test_restart_replaces_previous_schedule(self, state):
        """Starting again cancels the old schedule first: one tick per step."""
        scheduler = ManualTickScheduler()
        loop = GameLoop(scheduler)

        loop.start(state)
        loop.start(state)

        assert scheduler.active == 1
        scheduler.step()
        assert state.tick == 1

    def test_stale_callback_after_stop_does_not_advance(self, state):
        """Once stop() returns the old schedule can no longer touch the state."""
        scheduler = LeakyScheduler()
        loop = GameLoop(scheduler)
        loop.start(state)
        stale = scheduler.callbacks[0]

        loop.stop()
        stale()

        assert state.tick == 0

    def test_old_schedule_ignored_after_restart(self, state):
        scheduler = LeakyScheduler()
        loop = GameLoop(scheduler)
        loop.start(state)
        loop.start(state)
        old, new = scheduler.callbacks

        old()
        assert state.tick == 0
        new()
        assert state.tick == 1

    def test_before_tick_runs_before_advance(self, state):
        """The input hook runs first, so its direction applies on the same tick."""
        scheduler = ManualTickScheduler()
        loop = GameLoop(scheduler, before_tick=lambda s: s.queue_direction(DOWN))
        loop.start(state)

        scheduler.step()

        assert state.snake.head == (10, 11)

    def test_tick_on_finished_state_stops(self, state):
        scheduler = ManualTickScheduler()
        loop = GameLoop(scheduler)
        state.running = False
        loop.start(state)

        assert loop.tick() is None
        assert loop.active is False
        assert state.tick == 0
