"""
Scripted player - replays a fixed sequence of key presses, one per tick.
"""

from typing import Iterable, List, Optional, Union

from bombsnake.domain.snapshot import GameSnapshot
from .base import Player

IDLE = "."

# Script letters, in either case, stand for the arrow keys
SCRIPT_KEYS = {
    "U": "ArrowUp",
    "D": "ArrowDown",
    "L": "ArrowLeft",
    "R": "ArrowRight",
}


class ScriptedPlayer(Player):
    """
    Presses the next key of a script on every tick.

    The script is either a string of U/D/L/R letters ("uurrd" works too,
    with "." meaning no key) or a list of key names ("ArrowUp", None, ...).
    Other characters in a string script are passed on as key names.
    Once the script is exhausted the player presses nothing.
    """

    def __init__(self, script: Union[str, Iterable[Optional[str]]]):
        if isinstance(script, str):
            keys: List[Optional[str]] = [
                None if ch == IDLE else SCRIPT_KEYS.get(ch.upper(), ch)
                for ch in script
                if not ch.isspace()
            ]
        else:
            keys = [None if k in (None, IDLE) else k for k in script]
        self.keys = keys
        self.position = 0

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.keys)

    def get_key(self, snapshot: GameSnapshot) -> Optional[str]:
        if self.exhausted:
            return None
        key = self.keys[self.position]
        self.position += 1
        return key
