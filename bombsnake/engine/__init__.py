"""
Timing layer: schedulers, the game loop and the session that restarts it.
"""

from .scheduler import TickScheduler, ScheduleTickScheduler, ManualTickScheduler
from .game_loop import GameLoop
from .session import GameSession

__all__ = [
    'TickScheduler',
    'ScheduleTickScheduler',
    'ManualTickScheduler',
    'GameLoop',
    'GameSession',
]
