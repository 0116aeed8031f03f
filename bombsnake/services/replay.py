"""
Replay files: session metadata plus one snapshot per frame, as JSON.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from bombsnake.domain.snapshot import GameSnapshot

logger = logging.getLogger(__name__)

REPLAY_DIR = "completed_games"


def build_replay(metadata: Dict[str, Any], frames: List[GameSnapshot]) -> Dict[str, Any]:
    """Convert metadata and snapshots into a JSON-serializable dict."""
    return {
        "metadata": dict(metadata),
        "frames": [frame.to_dict() for frame in frames],
    }


def default_replay_path(game_id: str, directory: str = REPLAY_DIR) -> str:
    return os.path.join(directory, f"snake_game_{game_id}.json")


def save_replay(session, path: Optional[str] = None) -> str:
    """
    Write the session's history to a JSON replay file.

    Args:
        session: a GameSession (anything with metadata() and history)
        path: output file (default: completed_games/snake_game_<id>.json)

    Returns:
        The path written.
    """
    if path is None:
        path = default_replay_path(session.game_id)

    data = build_replay(session.metadata(), session.history)

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)

    logger.info("Saved replay with %s frames to %s", len(data["frames"]), path)
    return path


def load_replay(path: str) -> Tuple[Dict[str, Any], List[GameSnapshot]]:
    """
    Load a replay file.

    Returns:
        (metadata, frames)

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not a replay
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Replay file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    if "frames" not in data:
        raise ValueError(f"{path} is not a replay file (no 'frames' key).")

    frames = [GameSnapshot.from_dict(frame) for frame in data["frames"]]
    logger.info("Loaded replay with %s frames from %s", len(frames), path)
    return data.get("metadata", {}), frames
