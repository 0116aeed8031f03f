#!/usr/bin/env python3
"""
CLI tool to generate videos from Bomb Snake replays

Usage:
    bombsnake-video <game_id>
    bombsnake-video --local <path_to_replay.json>

Examples:
    # Generate from the local completed_games directory
    bombsnake-video abc-123-def-456

    # Generate from a specific replay file
    bombsnake-video --local ./completed_games/snake_game_xyz.json

    # PNG frames instead of a video
    bombsnake-video --local game.json --frames-dir ./frames

    # Custom output path and settings
    bombsnake-video abc-123 --output ./my_video.mp4 --fps 10 --tile-size 32
"""

import os
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from bombsnake.config import configure_logging
from bombsnake.services.replay import default_replay_path, load_replay
from bombsnake.services.video_generator import DEFAULT_FPS, SnakeVideoGenerator
from bombsnake.services.frame_renderer import DEFAULT_TILE_SIZE

logger = logging.getLogger(__name__)


def extract_game_id_from_filename(file_path: str) -> str:
    """Extract game ID from filename"""
    # Expected format: snake_game_<game_id>.json
    filename = Path(file_path).stem
    if filename.startswith('snake_game_'):
        return filename.replace('snake_game_', '', 1)
    return filename


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Generate MP4 videos or PNG frames from Bomb Snake replays',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    # Input options
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        'game_id',
        nargs='?',
        help='Game ID to load from the completed_games directory'
    )
    input_group.add_argument(
        '--local',
        type=str,
        help='Path to local replay JSON file'
    )

    # Output options
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output video file path (default: completed_games/<game_id>_replay.mp4)'
    )
    parser.add_argument(
        '--frames-dir',
        type=str,
        help='Write PNG frames here instead of encoding a video'
    )

    # Video settings
    parser.add_argument(
        '--fps',
        type=int,
        default=DEFAULT_FPS,
        help=f'Frames per second (default: {DEFAULT_FPS})'
    )
    parser.add_argument(
        '--tile-size',
        type=int,
        default=DEFAULT_TILE_SIZE,
        help=f'Pixels per grid cell (default: {DEFAULT_TILE_SIZE})'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    configure_logging(os.getenv("SNAKE_LOG_LEVEL", "INFO").upper())

    args = build_parser().parse_args(argv)

    try:
        if args.local:
            replay_path = args.local
            game_id = extract_game_id_from_filename(args.local)
        else:
            game_id = args.game_id
            replay_path = default_replay_path(game_id)
        logger.info(f"Using game ID: {game_id}")

        generator = SnakeVideoGenerator(fps=args.fps, tile_size=args.tile_size)

        if args.frames_dir:
            _, snapshots = load_replay(replay_path)
            paths = generator.save_frames(snapshots, args.frames_dir)
            logger.info(f"[OK] Wrote {len(paths)} frames to {args.frames_dir}")
        else:
            logger.info(f"Generating video for game {game_id}...")
            video_path = generator.generate_from_replay(replay_path, args.output)
            logger.info(f"[OK] Video generated successfully: {video_path}")

    except KeyboardInterrupt:
        logger.info("\nCancelled by user")
        return 1
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
