"""
Item entity - the single consumable on the board.
"""

from dataclasses import dataclass
from typing import Tuple

from .constants import BOMB, ITEM_KINDS


@dataclass(frozen=True)
class Item:
    """
    A fruit on the board.

    The kind is fixed at spawn time but only matters when the snake
    eats it (and to the renderer).
    """

    position: Tuple[int, int]
    kind: str

    def __post_init__(self):
        if self.kind not in ITEM_KINDS:
            raise ValueError(f"Unknown item kind '{self.kind}'.")

    @property
    def is_bomb(self) -> bool:
        return self.kind == BOMB

    def to_dict(self) -> dict:
        x, y = self.position
        return {"x": x, "y": y, "type": self.kind}
