"""
Base player interface for the game engine.
"""

from typing import Optional

from bombsnake.domain.snapshot import GameSnapshot


class Player:
    """
    Base class/interface for player logic.

    A player is asked once per tick for the key it wants to press,
    given the latest snapshot.
    """

    def get_key(self, snapshot: GameSnapshot) -> Optional[str]:
        """
        Return a key name (e.g. "ArrowUp", "w") or None to press nothing.

        Args:
            snapshot: Current state of the game
        """
        raise NotImplementedError
