"""
GameState - the single owner of the snake, the fruit and the score.

All mutation flows through reset(), queue_direction() and advance().
"""

import logging
import random
from typing import Callable, List, Optional, Tuple

from .constants import (
    RIGHT, VALID_DIRECTIONS, OPPOSITE,
    SAFE, BOMB, ITEM_KINDS,
    WALL, SELF, BOMB_HIT, BOARD_FULL, DEATH_MESSAGES,
    DEFAULT_GRID_SIZE, DEFAULT_SPEED_MS, START_LENGTH, MIN_GRID_SIZE,
    BASE_BOMB_CHANCE, BOMB_CHANCE_STEP, MAX_BOMB_CHANCE, SPAWN_MAX_ATTEMPTS,
)
from .item import Item
from .snake import Snake
from .snapshot import GameSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[GameSnapshot], None]


class GameState:
    """
    Mutable state of one game.

    Attributes:
        grid_size: board dimension N; valid cells are [0, N) on both axes
        snake: the Snake, head first
        direction: direction applied on the last tick
        pending_direction: direction queued for the next tick
        score: number of safe fruits eaten
        running: False once the game reached a terminal state
        speed_ms: tick interval in milliseconds
        item: the active fruit
        death_reason: 'wall', 'self', 'bomb' or 'full' once terminal
        message: game-over text for the renderer
        tick: number of advances since the last reset
    """

    def __init__(
        self,
        grid_size: int = DEFAULT_GRID_SIZE,
        speed_ms: int = DEFAULT_SPEED_MS,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        base_bomb_chance: float = BASE_BOMB_CHANCE,
        bomb_chance_step: float = BOMB_CHANCE_STEP,
        max_bomb_chance: float = MAX_BOMB_CHANCE,
        spawn_max_attempts: int = SPAWN_MAX_ATTEMPTS,
    ):
        if grid_size < MIN_GRID_SIZE:
            raise ValueError(
                f"grid_size must be at least {MIN_GRID_SIZE}, got {grid_size}."
            )
        if speed_ms <= 0:
            raise ValueError(f"speed_ms must be positive, got {speed_ms}.")
        if not 0.0 <= base_bomb_chance <= max_bomb_chance <= 1.0:
            raise ValueError(
                "Bomb chances must satisfy 0 <= base_bomb_chance <= max_bomb_chance <= 1."
            )

        self.grid_size = grid_size
        self.base_speed_ms = speed_ms
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.base_bomb_chance = base_bomb_chance
        self.bomb_chance_step = bomb_chance_step
        self.max_bomb_chance = max_bomb_chance
        self.spawn_max_attempts = spawn_max_attempts

        self._listeners: List[Listener] = []

        self.snake: Snake = Snake(self._start_positions())
        self.direction: Tuple[int, int] = RIGHT
        self.pending_direction: Tuple[int, int] = RIGHT
        self.score = 0
        self.running = False
        self.speed_ms = speed_ms
        self.item: Optional[Item] = None
        self.death_reason: Optional[str] = None
        self.message: Optional[str] = None
        self.tick = 0

        self.reset()

    @classmethod
    def from_settings(cls, settings) -> "GameState":
        """Build a GameState from a GameSettings instance."""
        return cls(
            grid_size=settings.grid_size,
            speed_ms=settings.tick_ms,
            seed=settings.seed,
            base_bomb_chance=settings.base_bomb_chance,
            bomb_chance_step=settings.bomb_chance_step,
            max_bomb_chance=settings.max_bomb_chance,
            spawn_max_attempts=settings.spawn_max_attempts,
        )

    def _start_positions(self) -> List[Tuple[int, int]]:
        center = self.grid_size // 2
        return [(center - i, center) for i in range(START_LENGTH)]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> GameSnapshot:
        """
        Put the game back to its deterministic starting layout.

        A 3-segment snake heading right from the centre, score 0, base
        speed and one freshly spawned fruit. When the state was created
        with a seed the RNG is re-seeded, so the fruit repeats as well.
        """
        if self.seed is not None:
            self.rng.seed(self.seed)

        self.snake = Snake(self._start_positions())
        self.direction = RIGHT
        self.pending_direction = RIGHT
        self.score = 0
        self.speed_ms = self.base_speed_ms
        self.running = True
        self.death_reason = None
        self.message = None
        self.tick = 0
        self.item = None

        self.spawn_item()

        snapshot = self.snapshot()
        self._notify(snapshot)
        return snapshot

    def queue_direction(self, direction: Tuple[int, int]) -> bool:
        """
        Request a direction change for the next tick.

        Returns True when the request was accepted. The exact opposite of
        the current direction is ignored, as is any request once the game
        is over. Only the last accepted request before a tick counts.
        """
        direction = tuple(direction)
        if direction not in VALID_DIRECTIONS:
            raise ValueError(f"Invalid direction {direction}; expected a cardinal unit vector.")

        if not self.running:
            return False

        if direction == OPPOSITE[self.direction]:
            logger.debug("Ignoring reversal %s while moving %s", direction, self.direction)
            return False

        self.pending_direction = direction
        return True

    def advance(self) -> Optional[str]:
        """
        Execute one tick:
          1) If the game is over, do nothing
          2) Commit the pending direction
          3) Compute the new head
          4) Wall collision -> game over
          5) Self collision (whole body, tail included) -> game over
          6) Move the head in
          7) Fruit: bomb -> game over, safe -> score + respawn, keep the tail
          8) No fruit: drop the tail

        Returns the death reason if this tick ended the game, else None.
        """
        if not self.running:
            return None

        self.direction = self.pending_direction
        self.tick += 1

        hx, hy = self.snake.head
        dx, dy = self.direction
        new_head = (hx + dx, hy + dy)

        if not self.in_bounds(new_head):
            return self._end_game(WALL)

        if self.snake.occupies(new_head):
            return self._end_game(SELF)

        self.snake.positions.appendleft(new_head)

        if self.item is not None and new_head == self.item.position:
            if self.item.kind == BOMB:
                # The snake stays extended onto the bomb for the death frame
                return self._end_game(BOMB_HIT)

            self.score += 1
            logger.debug("Ate fruit at %s, score is now %s", new_head, self.score)
            if not self.spawn_item():
                return self.death_reason
        else:
            self.snake.positions.pop()

        logger.debug("Tick %s: head=%s length=%s", self.tick, new_head, len(self.snake))
        self._notify(self.snapshot())
        return None

    # ------------------------------------------------------------------
    # Fruit
    # ------------------------------------------------------------------

    def bomb_chance(self) -> float:
        """Probability that the next fruit is a bomb: grows with score, capped."""
        return min(self.base_bomb_chance + self.bomb_chance_step * self.score, self.max_bomb_chance)

    def spawn_item(self) -> Optional[Item]:
        """
        Place a new fruit on a random cell not occupied by the snake.

        Random cells are sampled up to spawn_max_attempts times; after
        that every free cell is scanned and one is picked. If the snake
        fills the board the game ends with reason 'full' and None is
        returned.
        """
        position = None
        for _ in range(self.spawn_max_attempts):
            candidate = (
                self.rng.randint(0, self.grid_size - 1),
                self.rng.randint(0, self.grid_size - 1),
            )
            if not self.snake.occupies(candidate):
                position = candidate
                break

        if position is None:
            free_cells = self.free_cells()
            if not free_cells:
                self.item = None
                self._end_game(BOARD_FULL)
                return None
            logger.info(
                "Random fruit placement gave up after %s attempts; picking from %s free cells",
                self.spawn_max_attempts,
                len(free_cells),
            )
            position = self.rng.choice(free_cells)

        kind = BOMB if self.rng.random() < self.bomb_chance() else SAFE
        self.item = Item(position, kind)
        return self.item

    def place_item(self, position: Tuple[int, int], kind: str = SAFE) -> Item:
        """
        Put a fruit at a specific position.

        Raises:
            ValueError: if the position is off the board or on the snake,
                or the kind is unknown.
        """
        position = tuple(position)
        if not self.in_bounds(position):
            raise ValueError(f"Item out of bounds at {position}.")
        if self.snake.occupies(position):
            raise ValueError(f"Item at {position} would overlap the snake.")
        if kind not in ITEM_KINDS:
            raise ValueError(f"Unknown item kind '{kind}'.")

        self.item = Item(position, kind)
        return self.item

    def free_cells(self) -> List[Tuple[int, int]]:
        occupied = set(self.snake.positions)
        return [
            (x, y)
            for y in range(self.grid_size)
            for x in range(self.grid_size)
            if (x, y) not in occupied
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def in_bounds(self, position: Tuple[int, int]) -> bool:
        x, y = position
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def _end_game(self, reason: str) -> str:
        self.running = False
        self.death_reason = reason
        self.message = DEATH_MESSAGES[reason]
        logger.info("Game over after %s ticks: %s (score %s)", self.tick, self.message, self.score)
        self._notify(self.snapshot())
        return reason

    def add_listener(self, listener: Listener) -> None:
        """Register a callback that receives a snapshot after every reset and tick."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, snapshot: GameSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)

    def snapshot(self) -> GameSnapshot:
        """
        Return an immutable copy of the current state for renderers.
        """
        return GameSnapshot(
            tick=self.tick,
            grid_size=self.grid_size,
            snake=tuple(self.snake.positions),
            direction=self.direction,
            item=self.item,
            score=self.score,
            running=self.running,
            death_reason=self.death_reason,
            message=self.message,
        )

    def print_board(self) -> str:
        return self.snapshot().print_board()

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, item={self.item}, "
            f"length={len(self.snake)}, score={self.score}, running={self.running}>"
        )
