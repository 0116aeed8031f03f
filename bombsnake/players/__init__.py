"""
Input sources for Bomb Snake.

Players turn something (a keyboard, a script) into raw key names; the
KeyboardInput adapter maps those keys onto queued direction changes.
"""

from .base import Player
from .keyboard import KeyboardInput, KEY_BINDINGS, direction_for_key
from .scripted_player import ScriptedPlayer

__all__ = [
    'Player',
    'KeyboardInput',
    'KEY_BINDINGS',
    'direction_for_key',
    'ScriptedPlayer',
]
