"""
Runtime settings for Bomb Snake.

Values come from the environment (a local .env file is loaded first)
and fall back to the defaults in domain.constants. CLI flags override
both.

Environment (optional):
    SNAKE_GRID_SIZE            Board size N for an N x N grid (default 20)
    SNAKE_TICK_MS              Milliseconds between ticks (default 120)
    SNAKE_BASE_BOMB_CHANCE     Bomb probability at score 0 (default 0.25)
    SNAKE_BOMB_CHANCE_STEP     Added per point scored (default 0.01)
    SNAKE_MAX_BOMB_CHANCE      Cap on the bomb probability (default 0.60)
    SNAKE_SPAWN_MAX_ATTEMPTS   Random fruit placements before a full scan (default 1000)
    SNAKE_SEED                 RNG seed for repeatable games (default unset)
    SNAKE_LOG_LEVEL            Logging level for the CLI tools (default INFO)
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from bombsnake.domain.constants import (
    DEFAULT_GRID_SIZE,
    DEFAULT_SPEED_MS,
    BASE_BOMB_CHANCE,
    BOMB_CHANCE_STEP,
    MAX_BOMB_CHANCE,
    SPAWN_MAX_ATTEMPTS,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class GameSettings:
    grid_size: int = DEFAULT_GRID_SIZE
    tick_ms: int = DEFAULT_SPEED_MS
    base_bomb_chance: float = BASE_BOMB_CHANCE
    bomb_chance_step: float = BOMB_CHANCE_STEP
    max_bomb_chance: float = MAX_BOMB_CHANCE
    spawn_max_attempts: int = SPAWN_MAX_ATTEMPTS
    seed: Optional[int] = None
    log_level: str = "INFO"

    def with_overrides(self, **overrides) -> "GameSettings":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %s.", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using %s.", name, raw, default)
        return default


def load_settings(load_env_file: bool = True) -> GameSettings:
    """Read GameSettings from the environment (and .env when requested)."""
    if load_env_file:
        load_dotenv()

    return GameSettings(
        grid_size=_env_int("SNAKE_GRID_SIZE", DEFAULT_GRID_SIZE),
        tick_ms=_env_int("SNAKE_TICK_MS", DEFAULT_SPEED_MS),
        base_bomb_chance=_env_float("SNAKE_BASE_BOMB_CHANCE", BASE_BOMB_CHANCE),
        bomb_chance_step=_env_float("SNAKE_BOMB_CHANCE_STEP", BOMB_CHANCE_STEP),
        max_bomb_chance=_env_float("SNAKE_MAX_BOMB_CHANCE", MAX_BOMB_CHANCE),
        spawn_max_attempts=_env_int("SNAKE_SPAWN_MAX_ATTEMPTS", SPAWN_MAX_ATTEMPTS),
        seed=_env_int("SNAKE_SEED", None),
        log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
