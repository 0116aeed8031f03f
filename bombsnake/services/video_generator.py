"""
Video Generation Service for Bomb Snake replays

Turns a list of snapshots (usually loaded from a replay file) into:
1. PNG frames, one per snapshot, rendered with FrameRenderer
2. An MP4 video, encoded from those frames with MoviePy/FFmpeg
"""

import os
import logging
from typing import List, Optional

import numpy as np
from moviepy import ImageSequenceClip
from PIL import Image

from bombsnake.domain.snapshot import GameSnapshot
from bombsnake.services.frame_renderer import FrameRenderer, DEFAULT_TILE_SIZE
from bombsnake.services.replay import REPLAY_DIR, load_replay

logger = logging.getLogger(__name__)

# 120ms ticks play back at roughly 8 frames per second
DEFAULT_FPS = 8
DEATH_FRAME_HOLD = 2  # seconds the game-over frame stays on screen


class SnakeVideoGenerator:
    """Generate PNG frames and MP4 videos from snapshot sequences"""

    def __init__(
        self,
        fps: int = DEFAULT_FPS,
        tile_size: int = DEFAULT_TILE_SIZE,
        hold_seconds: float = DEATH_FRAME_HOLD
    ):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}.")
        self.fps = fps
        self.hold_seconds = hold_seconds
        self.renderer = FrameRenderer(tile_size=tile_size)

    def render_frames(self, snapshots: List[GameSnapshot]) -> List[Image.Image]:
        """Render every snapshot; the final frame is repeated to hold the game-over screen."""
        images = []
        for i, snapshot in enumerate(snapshots):
            if i % 50 == 0:
                logger.debug(f"Rendering frame {i + 1}/{len(snapshots)}")
            images.append(self.renderer.render(snapshot))

        if images and not snapshots[-1].running:
            images.extend([images[-1]] * int(self.fps * self.hold_seconds))

        return images

    def save_frames(self, snapshots: List[GameSnapshot], output_dir: str) -> List[str]:
        """
        Write one PNG per snapshot into output_dir.

        Returns:
            Paths of the written files, in frame order
        """
        os.makedirs(output_dir, exist_ok=True)
        paths = []
        for i, snapshot in enumerate(snapshots):
            path = os.path.join(output_dir, f"frame_{i:05d}.png")
            self.renderer.render(snapshot).save(path)
            paths.append(path)

        logger.info(f"Wrote {len(paths)} frames to {output_dir}")
        return paths

    def generate_video(self, snapshots: List[GameSnapshot], output_path: str) -> str:
        """
        Encode snapshots into an MP4 video

        Args:
            snapshots: frames to encode, in order
            output_path: destination .mp4 path

        Returns:
            Path to the generated video file
        """
        if not snapshots:
            raise ValueError("Cannot generate a video without frames.")

        logger.info(f"Rendering {len(snapshots)} frames...")
        frames = [np.array(image) for image in self.render_frames(snapshots)]

        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        clip = ImageSequenceClip(frames, fps=self.fps)
        clip.write_videofile(
            output_path,
            codec='libx264',
            audio=False,
            logger=None
        )

        logger.info(f"Video created successfully at {output_path}")
        return output_path

    def generate_from_replay(self, replay_path: str, output_path: Optional[str] = None) -> str:
        """Load a replay file and encode it; output defaults to completed_games/<game_id>_replay.mp4."""
        metadata, snapshots = load_replay(replay_path)
        if output_path is None:
            game_id = metadata.get("game_id") or os.path.splitext(os.path.basename(replay_path))[0]
            output_path = get_video_local_path(game_id)
        return self.generate_video(snapshots, output_path)


def get_video_local_path(game_id: str, directory: str = REPLAY_DIR) -> str:
    """
    Get the local path for a game's video

    Args:
        game_id: The game ID

    Returns:
        Local path to the video file
    """
    return os.path.join(directory, f"{game_id}_replay.mp4")
