"""
Tick schedulers for the game loop.

GameLoop only needs two things from a scheduler: register a callback
to fire every N milliseconds, and cancel that registration. Two
implementations are provided:

- ScheduleTickScheduler: real time, backed by the `schedule` library and
  driven by run_pending() from a single thread.
- ManualTickScheduler: a frame stepper for tests and offline runs; the
  callbacks fire only when step() is called.
"""

import logging
import time
from typing import Callable, Dict, Optional

import schedule

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]

SCHEDULER_LOOP_SLEEP_SECONDS = 0.005


class TickScheduler:
    """
    Base class/interface for tick schedulers.
    """

    def every(self, interval_ms: int, callback: TickCallback):
        """
        Fire callback every interval_ms milliseconds.

        Returns:
            An opaque handle accepted by cancel().
        """
        raise NotImplementedError

    def cancel(self, handle) -> None:
        """Stop firing the callback registered under handle. Unknown handles are ignored."""
        raise NotImplementedError


class ScheduleTickScheduler(TickScheduler):
    """
    Real-time scheduler on top of a private schedule.Scheduler.

    Nothing runs in the background: the owner calls run_pending() (or
    run_until()) from the thread that owns the game state, so ticks and
    input handling never interleave mid-advance.
    """

    def __init__(self, sleep_seconds: float = SCHEDULER_LOOP_SLEEP_SECONDS):
        self._scheduler = schedule.Scheduler()
        self.sleep_seconds = sleep_seconds

    def every(self, interval_ms: int, callback: TickCallback) -> schedule.Job:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}.")
        job = self._scheduler.every(interval_ms / 1000.0).seconds.do(callback)
        logger.debug("Scheduled tick every %sms", interval_ms)
        return job

    def cancel(self, handle) -> None:
        if handle is None:
            return
        self._scheduler.cancel_job(handle)

    @property
    def jobs(self):
        return list(self._scheduler.jobs)

    def run_pending(self) -> None:
        self._scheduler.run_pending()

    def run_until(
        self,
        done: Callable[[], bool],
        timeout: Optional[float] = None,
        on_idle: Optional[Callable[[], None]] = None,
    ) -> bool:
        """
        Run pending jobs until done() is true.

        Args:
            done: predicate checked between polls
            timeout: give up after this many seconds (None = no limit)
            on_idle: called once per poll, e.g. to pump input events

        Returns:
            True if done() became true, False on timeout.
        """
        started = time.monotonic()
        while not done():
            if timeout is not None and time.monotonic() - started > timeout:
                return False
            if on_idle is not None:
                on_idle()
            self._scheduler.run_pending()
            time.sleep(self.sleep_seconds)
        return True


class ManualTickScheduler(TickScheduler):
    """
    Deterministic scheduler: every registered callback fires once per step().

    The interval is recorded but ignored, so tests can drive the game
    frame by frame without waiting on the clock.
    """

    def __init__(self):
        self._callbacks: Dict[int, TickCallback] = {}
        self.intervals: Dict[int, int] = {}
        self._next_handle = 0
        self.steps = 0

    def every(self, interval_ms: int, callback: TickCallback) -> int:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}.")
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        self.intervals[handle] = interval_ms
        return handle

    def cancel(self, handle) -> None:
        self._callbacks.pop(handle, None)
        self.intervals.pop(handle, None)

    @property
    def active(self) -> int:
        """Number of callbacks still registered."""
        return len(self._callbacks)

    def step(self, count: int = 1) -> int:
        """
        Fire all registered callbacks `count` times.

        A callback cancelled during a step does not fire again, even
        within the same step. Returns the number of steps actually taken;
        stepping stops early once nothing is registered.
        """
        taken = 0
        for _ in range(count):
            if not self._callbacks:
                break
            for handle in list(self._callbacks):
                callback = self._callbacks.get(handle)
                if callback is not None:
                    callback()
            self.steps += 1
            taken += 1
        return taken
