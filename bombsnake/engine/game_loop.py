"""
GameLoop - fixed-interval driver for a GameState.
"""

import logging
from typing import Callable, Optional

from bombsnake.domain.game_state import GameState
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)


class GameLoop:
    """
    Calls GameState.advance() on a fixed cadence until the game ends.

    At most one schedule is active per loop: start() cancels the previous
    one first. stop() is synchronous; once it returns, the cancelled
    schedule never advances the state again.
    """

    def __init__(
        self,
        scheduler: TickScheduler,
        before_tick: Optional[Callable[[GameState], None]] = None,
    ):
        self.scheduler = scheduler
        self.before_tick = before_tick
        self.state: Optional[GameState] = None
        self.interval_ms: Optional[int] = None
        self.ticks = 0
        self._handle = None
        self._generation = 0

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self, state: GameState, interval_ms: Optional[int] = None) -> None:
        """Begin ticking `state` every interval_ms (defaults to state.speed_ms)."""
        self.stop()

        self.state = state
        self.interval_ms = interval_ms if interval_ms is not None else state.speed_ms
        self.ticks = 0
        self._generation += 1
        generation = self._generation

        def _run():
            # A stale schedule that fires after stop() must not touch the state
            if generation != self._generation or self._handle is None:
                return
            self.tick()

        self._handle = self.scheduler.every(self.interval_ms, _run)
        logger.info("Game loop started (every %sms)", self.interval_ms)

    def stop(self) -> None:
        """Halt ticking. Safe to call when already stopped."""
        if self._handle is None:
            return
        handle = self._handle
        self._handle = None
        self._generation += 1
        self.scheduler.cancel(handle)
        logger.info("Game loop stopped after %s ticks", self.ticks)

    def tick(self) -> Optional[str]:
        """
        Run one iteration: feed input, advance, stop on a terminal outcome.

        Returns the death reason when this tick ended the game.
        """
        state = self.state
        if state is None:
            return None

        if not state.running:
            self.stop()
            return None

        if self.before_tick is not None:
            self.before_tick(state)

        reason = state.advance()
        self.ticks += 1

        if not state.running:
            self.stop()

        return reason
