"""
GameSession - wires a GameState to its loop, input and history.

This is the restart trigger from the outside world's point of view:
restart() resets the state and (re)starts the loop, replacing any
schedule that was still running.
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from bombsnake.config import GameSettings
from bombsnake.domain.game_state import GameState
from bombsnake.domain.snapshot import GameSnapshot
from bombsnake.players.base import Player
from bombsnake.players.keyboard import KeyboardInput
from .game_loop import GameLoop
from .scheduler import ManualTickScheduler, ScheduleTickScheduler, TickScheduler

logger = logging.getLogger(__name__)


class GameSession:
    """
    Manages:
      - the GameState
      - the GameLoop and its scheduler
      - keyboard input (and an optional scripted player)
      - snapshot history for replays
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        scheduler: Optional[TickScheduler] = None,
        player: Optional[Player] = None,
        state: Optional[GameState] = None,
        game_id: Optional[str] = None,
    ):
        self.settings = settings or GameSettings()
        self.scheduler = scheduler if scheduler is not None else ManualTickScheduler()
        self.player = player
        self.state = state if state is not None else GameState.from_settings(self.settings)
        self.input = KeyboardInput(self.state)
        self.loop = GameLoop(self.scheduler, before_tick=self._feed_player)

        self.game_id = game_id or str(uuid.uuid4())
        self.history: List[GameSnapshot] = []
        self.games_played = 0
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

        self.state.add_listener(self._record)

    def _record(self, snapshot: GameSnapshot) -> None:
        self.history.append(snapshot)
        if not snapshot.running and self.end_time is None:
            self.end_time = time.time()

    def _feed_player(self, state: GameState) -> None:
        if self.player is None:
            return
        key = self.player.get_key(state.snapshot())
        if key is not None:
            self.input.handle_key(key)

    def restart(self) -> GameSnapshot:
        """Reset the state and start a fresh loop; the previous schedule is cancelled."""
        self.loop.stop()
        self.history = []
        self.end_time = None
        self.start_time = time.time()
        snapshot = self.state.reset()
        self.loop.start(self.state)
        self.games_played += 1
        logger.info("Started game %s (#%s)", self.game_id, self.games_played)
        return snapshot

    def handle_key(self, key: Optional[str]) -> bool:
        """Forward a raw key press from an input device."""
        return self.input.handle_key(key)

    def stop(self) -> None:
        self.loop.stop()

    @property
    def is_over(self) -> bool:
        return not self.state.running

    def run_until_over(self, max_ticks: Optional[int] = None, timeout: Optional[float] = None) -> GameSnapshot:
        """
        Drive the scheduler until the game ends (or max_ticks / timeout is hit).

        With a ManualTickScheduler this steps frame by frame; with a
        ScheduleTickScheduler it runs in real time on the calling thread.
        """
        if not self.loop.active and self.state.running:
            self.loop.start(self.state)
            if self.start_time is None:
                self.start_time = time.time()

        def done() -> bool:
            if not self.loop.active:
                return True
            return max_ticks is not None and self.loop.ticks >= max_ticks

        if isinstance(self.scheduler, ManualTickScheduler):
            while not done():
                self.scheduler.step()
        elif isinstance(self.scheduler, ScheduleTickScheduler):
            finished = self.scheduler.run_until(done, timeout=timeout)
            if not finished:
                logger.warning("Session %s timed out after %ss", self.game_id, timeout)
        else:
            raise TypeError(f"Cannot drive scheduler of type {type(self.scheduler).__name__}.")

        if self.loop.active:
            self.loop.stop()

        return self.state.snapshot()

    def metadata(self) -> dict:
        """Summary of the current game for replay files."""
        def _iso(ts: Optional[float]) -> Optional[str]:
            if ts is None:
                return None
            return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()

        return {
            "game_id": self.game_id,
            "start_time": _iso(self.start_time),
            "end_time": _iso(self.end_time),
            "grid_size": self.state.grid_size,
            "tick_ms": self.state.base_speed_ms,
            "seed": self.state.seed,
            "final_score": self.state.score,
            "death_reason": self.state.death_reason,
            "message": self.state.message,
            "ticks": self.state.tick,
        }
