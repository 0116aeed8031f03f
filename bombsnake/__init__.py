"""
Bomb Snake - a single-player grid snake game with explosive fruit.

The core is the tick-driven GameState; GameLoop drives it on a fixed
cadence and GameSession wires restart, input and history together.
"""

from .domain import GameState, GameSnapshot, Item, Snake
from .engine import GameLoop, GameSession, ManualTickScheduler, ScheduleTickScheduler

__version__ = "0.1.0"

__all__ = [
    'GameState',
    'GameSnapshot',
    'Item',
    'Snake',
    'GameLoop',
    'GameSession',
    'ManualTickScheduler',
    'ScheduleTickScheduler',
]
