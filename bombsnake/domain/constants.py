"""
Game constants for Bomb Snake.
"""

# Movement directions as (dx, dy) unit vectors; y grows downward
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
VALID_DIRECTIONS = {UP, DOWN, LEFT, RIGHT}

OPPOSITE = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Item kinds
SAFE = "safe"
BOMB = "bomb"
ITEM_KINDS = {SAFE, BOMB}

# Death reasons
WALL = "wall"
SELF = "self"
BOMB_HIT = "bomb"
BOARD_FULL = "full"

DEATH_MESSAGES = {
    WALL: "Hit the wall!",
    SELF: "You bit yourself!",
    BOMB_HIT: "Boom! Explosive fruit!",
    BOARD_FULL: "No room left!",
}

# Game settings
DEFAULT_GRID_SIZE = 20
DEFAULT_SPEED_MS = 120
START_LENGTH = 3
MIN_GRID_SIZE = 4

# Bomb probability: min(BASE + STEP * score, MAX)
BASE_BOMB_CHANCE = 0.25
BOMB_CHANCE_STEP = 0.01
MAX_BOMB_CHANCE = 0.60

SPAWN_MAX_ATTEMPTS = 1000
