"""
GameSnapshot - an immutable view of the game at a point in time.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .item import Item


@dataclass(frozen=True)
class GameSnapshot:
    """
    A snapshot of the game at a specific tick.

    Attributes:
        tick: number of advances applied since the last reset
        grid_size: board dimension (the board is grid_size x grid_size)
        snake: tuple of (x, y), head first
        direction: current (dx, dy) direction
        item: the active item, if any
        score: current score
        running: False once the game has ended
        death_reason: 'wall', 'self', 'bomb' or 'full' when terminal
        message: human readable game-over message when terminal
    """

    tick: int
    grid_size: int
    snake: Tuple[Tuple[int, int], ...]
    direction: Tuple[int, int]
    item: Optional[Item]
    score: int
    running: bool
    death_reason: Optional[str] = None
    message: Optional[str] = None

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        o = safe fruit
        * = bomb fruit
        T = snake body
        H = snake head
        Row 0 is printed at the top, matching the y-down coordinates.
        """
        board = [['.' for _ in range(self.grid_size)] for _ in range(self.grid_size)]

        if self.item is not None:
            ix, iy = self.item.position
            board[iy][ix] = '*' if self.item.is_bomb else 'o'

        # After a bomb death the head covers the fruit
        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if pos_idx == 0 else 'T'

        result = []
        for y in range(self.grid_size):
            result.append(f"{y:2d} {' '.join(board[y])}")

        result.append("   " + " ".join(str(i % 10) for i in range(self.grid_size)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict (tuples become lists)."""
        return {
            "tick": self.tick,
            "grid_size": self.grid_size,
            "snake": [list(p) for p in self.snake],
            "direction": list(self.direction),
            "item": self.item.to_dict() if self.item else None,
            "score": self.score,
            "running": self.running,
            "death_reason": self.death_reason,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSnapshot":
        item_data = data.get("item")
        item = None
        if item_data:
            item = Item((item_data["x"], item_data["y"]), item_data["type"])

        return cls(
            tick=data.get("tick", 0),
            grid_size=data["grid_size"],
            snake=tuple(tuple(p) for p in data["snake"]),
            direction=tuple(data.get("direction", (1, 0))),
            item=item,
            score=data.get("score", 0),
            running=data.get("running", True),
            death_reason=data.get("death_reason"),
            message=data.get("message"),
        )

    def __repr__(self):
        return (
            f"<GameSnapshot tick={self.tick}, item={self.item}, "
            f"length={len(self.snake)}, score={self.score}, running={self.running}>"
        )
