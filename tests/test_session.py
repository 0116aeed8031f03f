"""
Tests for engine/session.py - restart, input and history.
"""

import pytest

from bombsnake.config import GameSettings
from bombsnake.domain import GameState, SAFE
from bombsnake.engine import GameSession, ManualTickScheduler
from bombsnake.players import ScriptedPlayer


def make_session(keys: str = "", **settings) -> GameSession:
    settings.setdefault("seed", 11)
    return GameSession(
        settings=GameSettings(**settings),
        scheduler=ManualTickScheduler(),
        player=ScriptedPlayer(keys),
        game_id="test-game",
    )


class TestGameSession:
    """Tests for GameSession."""

    def test_restart_starts_loop_and_records_initial_frame(self):
        session = make_session()

        snapshot = session.restart()

        assert session.loop.active is True
        assert session.history == [snapshot]
        assert snapshot.running is True
        assert session.games_played == 1

    def test_scripted_game_runs_to_wall(self):
        """Keys are applied one per tick; the game ends at the bottom wall."""
        session = make_session("DDD")
        session.restart()
        session.state.place_item((0, 0), SAFE)

        final = session.run_until_over()

        assert final.running is False
        assert final.death_reason == "wall"
        assert final.snake[0] == (10, 19)
        assert final.tick == 10
        # reset frame + 9 moves + the death frame
        assert len(session.history) == 11
        assert session.loop.active is False

    def test_max_ticks_stops_early(self):
        session = make_session()
        session.restart()
        session.state.place_item((0, 0), SAFE)

        final = session.run_until_over(max_ticks=3)

        assert final.running is True
        assert final.tick == 3
        assert session.loop.active is False

    def test_restart_after_game_over(self):
        session = make_session()
        session.restart()
        session.state.place_item((0, 0), SAFE)
        session.run_until_over()
        assert session.is_over

        snapshot = session.restart()

        assert snapshot.running is True
        assert snapshot.score == 0
        assert session.loop.active is True
        assert session.games_played == 2
        assert session.history == [snapshot]
        assert session.scheduler.active == 1

    def test_handle_key_forwards_to_state(self):
        session = make_session()
        session.restart()

        assert session.handle_key("ArrowUp") is True
        assert session.handle_key("F5") is False
        assert session.state.pending_direction == (0, -1)

    def test_metadata_describes_game(self):
        session = make_session()
        session.restart()
        session.state.place_item((0, 0), SAFE)
        session.run_until_over()

        metadata = session.metadata()

        assert metadata["game_id"] == "test-game"
        assert metadata["grid_size"] == 20
        assert metadata["tick_ms"] == 120
        assert metadata["seed"] == 11
        assert metadata["death_reason"] == "wall"
        assert metadata["message"] == "Hit the wall!"
        assert metadata["final_score"] == 0
        assert metadata["start_time"] is not None
        assert metadata["end_time"] is not None

    def test_unsupported_scheduler_raises(self):
        class OddScheduler:
            def every(self, interval_ms, callback):
                return 1

            def cancel(self, handle):
                pass

        session = GameSession(settings=GameSettings(seed=1), scheduler=OddScheduler())
        session.restart()

        with pytest.raises(TypeError):
            session.run_until_over()

    def test_loop_uses_speed_of_supplied_state(self):
        """A state built with its own speed ticks at that speed, not the settings default."""
        scheduler = ManualTickScheduler()
        state = GameState(speed_ms=40, seed=5)
        session = GameSession(settings=GameSettings(seed=5), scheduler=scheduler, state=state)

        session.restart()

        assert session.loop.interval_ms == 40
        assert list(scheduler.intervals.values()) == [40]
        assert session.metadata()["tick_ms"] == 40

    def test_run_until_over_starts_at_state_speed(self):
        scheduler = ManualTickScheduler()
        state = GameState(speed_ms=75, seed=5)
        session = GameSession(settings=GameSettings(seed=5), scheduler=scheduler, state=state)

        session.run_until_over(max_ticks=1)

        assert session.loop.interval_ms == 75
