"""
Keyboard input adapter - maps raw key names to queued directions.
"""

import logging
from typing import Dict, Optional, Tuple

from bombsnake.domain.constants import UP, DOWN, LEFT, RIGHT
from bombsnake.domain.game_state import GameState

logger = logging.getLogger(__name__)

# Browser key names, WASD and vi keys. Letters are matched case-insensitively.
KEY_BINDINGS: Dict[str, Tuple[int, int]] = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
    "k": UP,
    "j": DOWN,
    "h": LEFT,
    "l": RIGHT,
}


def direction_for_key(key: Optional[str]) -> Optional[Tuple[int, int]]:
    """Return the direction bound to key, or None for unbound keys."""
    if not key:
        return None
    direction = KEY_BINDINGS.get(key)
    if direction is None and len(key) == 1:
        direction = KEY_BINDINGS.get(key.lower())
    return direction


class KeyboardInput:
    """
    Forwards key presses to a GameState as direction requests.

    Unbound keys are dropped. Reversals are filtered by the state itself.
    """

    def __init__(self, state: GameState):
        self.state = state
        self.dropped = 0

    def handle_key(self, key: Optional[str]) -> bool:
        """
        Translate a key press into queue_direction().

        Returns True if a direction change was queued.
        """
        direction = direction_for_key(key)
        if direction is None:
            if key:
                self.dropped += 1
                logger.debug("Ignoring unbound key %r", key)
            return False
        return self.state.queue_direction(direction)
