"""
Collaborators outside the game core: rendering, replays and video export.
"""

from .frame_renderer import FrameRenderer, ColorScheme
from .replay import build_replay, save_replay, load_replay

__all__ = [
    'FrameRenderer',
    'ColorScheme',
    'build_replay',
    'save_replay',
    'load_replay',
]
