#!/usr/bin/env python3
"""
Play a game of Bomb Snake from a key script

The script feeds one key per tick: U/D/L/R in either case, with "."
for "no key this tick". Once the script runs out the snake
keeps its heading until something ends the game.

Usage:
    bombsnake-play --keys "..DDDLLLUU"
    bombsnake-play --keys "RRRR" --seed 7 --replay game.json

Examples:
    # Step through frames instantly (default)
    bombsnake-play --keys "..DD.LL" --seed 42 --print-board

    # Tick in real time at the configured speed
    bombsnake-play --keys "UUUR" --realtime --tick-ms 120

    # Save the replay and render PNG frames / an MP4
    bombsnake-play --keys "DDRR" --replay out/game.json --frames-dir out/frames --video out/game.mp4
"""

import sys
import argparse
import logging
from typing import List, Optional

from bombsnake.config import configure_logging, load_settings
from bombsnake.engine.scheduler import ManualTickScheduler, ScheduleTickScheduler
from bombsnake.engine.session import GameSession
from bombsnake.players.scripted_player import ScriptedPlayer
from bombsnake.services.replay import save_replay

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Play Bomb Snake from a key script',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--keys', '-k',
        type=str,
        default="",
        help='One key per tick (U/D/L/R in either case, "." = none)'
    )

    # Game settings (override SNAKE_* environment variables)
    parser.add_argument('--grid-size', type=int, default=None, help='Board size N (default: 20)')
    parser.add_argument('--tick-ms', type=int, default=None, help='Milliseconds per tick (default: 120)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for repeatable games')
    parser.add_argument('--max-ticks', type=int, default=None, help='Stop after this many ticks')

    parser.add_argument(
        '--realtime',
        action='store_true',
        help='Tick on the wall clock instead of stepping frames instantly'
    )
    parser.add_argument('--timeout', type=float, default=None, help='Real-time run limit in seconds')

    # Output options
    parser.add_argument('--print-board', action='store_true', help='Print the final board')
    parser.add_argument('--replay', type=str, help='Write the replay JSON to this path')
    parser.add_argument('--frames-dir', type=str, help='Write PNG frames into this directory')
    parser.add_argument('--video', type=str, help='Write an MP4 video to this path')
    parser.add_argument('--log-level', type=str, default=None, help='Logging level (default: INFO)')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings().with_overrides(
        grid_size=args.grid_size,
        tick_ms=args.tick_ms,
        seed=args.seed,
        log_level=args.log_level.upper() if args.log_level else None,
    )
    configure_logging(settings.log_level)

    try:
        scheduler = ScheduleTickScheduler() if args.realtime else ManualTickScheduler()
        session = GameSession(
            settings=settings,
            scheduler=scheduler,
            player=ScriptedPlayer(args.keys),
        )

        session.restart()
        final = session.run_until_over(max_ticks=args.max_ticks, timeout=args.timeout)

        if args.print_board:
            print("\n" + final.print_board() + "\n")

        if final.running:
            print(f"Stopped after {final.tick} ticks. Score: {final.score}")
        else:
            print(f"Game Over: {final.message} Score: {final.score} after {final.tick} ticks")

        if args.replay:
            save_replay(session, args.replay)

        if args.frames_dir or args.video:
            # Imported lazily so plain play does not need moviepy/ffmpeg
            from bombsnake.services.video_generator import SnakeVideoGenerator

            generator = SnakeVideoGenerator()
            if args.frames_dir:
                generator.save_frames(session.history, args.frames_dir)
            if args.video:
                generator.generate_video(session.history, args.video)

    except KeyboardInterrupt:
        logger.info("\nCancelled by user")
        return 1
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
