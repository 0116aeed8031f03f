"""
Domain entities for the Bomb Snake game engine.

This module contains the core game entities that are independent of
rendering, timing and input concerns.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_DIRECTIONS, OPPOSITE,
    SAFE, BOMB, ITEM_KINDS,
    WALL, SELF, BOMB_HIT, BOARD_FULL, DEATH_MESSAGES,
)
from .snake import Snake
from .item import Item
from .snapshot import GameSnapshot
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_DIRECTIONS', 'OPPOSITE',
    'SAFE', 'BOMB', 'ITEM_KINDS',
    'WALL', 'SELF', 'BOMB_HIT', 'BOARD_FULL', 'DEATH_MESSAGES',
    'Snake',
    'Item',
    'GameSnapshot',
    'GameState',
]
