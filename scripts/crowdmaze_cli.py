#!/usr/bin/env python3
"""Command-line interface for Crowd Maze."""

import argparse
import json
import random
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from crowdmaze.agents.random_viewer import RandomViewer
from crowdmaze.analysis.stats import (
    direction_uniformity,
    format_uniformity,
    resolved_directions,
    summarize_games,
)
from crowdmaze.core.exceptions import ConfigurationError, GenerationError
from crowdmaze.core.utils import format_duration, percentage
from crowdmaze.logging.game_logger import GameLogger
from crowdmaze.maze.config import load_config, load_settings
from crowdmaze.maze.generator import MapGenerator
from crowdmaze.session import GameSession

DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "crowdmaze.yaml"


def build_overrides(args):
    """Collect config overrides given on the command line."""
    overrides = {}
    maze = {}
    if args.grid_size_x is not None:
        maze["grid_size_x"] = args.grid_size_x
    if args.grid_size_y is not None:
        maze["grid_size_y"] = args.grid_size_y
    if maze:
        overrides["maze"] = maze
    if args.seed is not None:
        overrides["seed"] = args.seed
    return overrides


def cmd_map(args):
    """Generate a map and print it."""
    try:
        config = load_config(args.config, overrides=build_overrides(args))
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    generator = MapGenerator(rng=random.Random(config.seed))
    try:
        grid = generator.generate_from_config(config.maze)
    except GenerationError as e:
        print(f"Error: {e}")
        print("Try a larger grid or a wider goal distance band.")
        return 1

    if args.json:
        print(json.dumps(grid.to_dict(), indent=2))
    else:
        print(grid.to_ascii(reveal=not args.fog))
    return 0


def cmd_play(args):
    """Play headless games with a simulated audience."""
    try:
        config = load_config(args.config, overrides=build_overrides(args))
    except ConfigurationError as e:
        print(f"Error loading config: {e}")
        return 1

    session_settings = {}
    logging_settings = {}
    if args.config and Path(args.config).exists():
        _, session_settings, logging_settings = load_settings(Path(args.config))

    n_viewers = args.viewers or session_settings.get("viewers", 25)
    tick_ms = session_settings.get("tick_ms", 50)
    base_seed = config.seed or 0
    viewers = [
        RandomViewer(viewer_id=f"viewer_{i}", seed=base_seed + i,
                     chat_chance=session_settings.get("chat_chance", 0.02))
        for i in range(n_viewers)
    ]

    output_dir = args.output_dir or logging_settings.get("output_dir")
    logger = GameLogger(output_dir=Path(output_dir) if output_dir else None)

    print(f"\nPlaying: {args.games} game(s)")
    print("=" * 70)
    print(f"  • Grid: {config.maze.grid_size_x}x{config.maze.grid_size_y}")
    print(f"  • Viewers: {n_viewers}")
    print(f"  • Moves per game: {config.moves_per_game}")
    if logger.log_file:
        print(f"  • Logs: {logger.log_file}")

    try:
        session = GameSession(viewers, config=config, logger=logger, tick_ms=tick_ms)
        result = session.run(n_games=args.games)
    except GenerationError as e:
        print(f"\nError generating map: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nSession interrupted by user")
        return 130

    summary = summarize_games(result.games)
    directions = resolved_directions(logger.entries)
    uniformity = direction_uniformity(directions)

    print("\n" + "=" * 70)
    print("SESSION OVER")
    print("=" * 70)
    print(f"Games: {summary['games_played']}  Wins: {summary['wins']}  Losses: {summary['losses']}")
    print(f"Win rate: {percentage(summary['wins'], summary['games_played'])}%")
    print(f"Mean rounds per game: {summary['mean_rounds']:.1f}")
    print(f"Simulated time: {format_duration(result.simulated_ms)}")
    print(f"Resolved directions: {format_uniformity(uniformity)}")

    log_stats = logger.get_stats()
    print(f"Events logged: {log_stats['total_entries']} "
          f"({log_stats['event_type_counts'].get('VOTE_CAST', 0)} votes cast)")
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Crowd Maze - a maze game steered by chat votes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print a freshly generated map
  python scripts/crowdmaze_cli.py map --seed 7

  # Play 20 headless games with 40 random viewers
  python scripts/crowdmaze_cli.py play --games 20 --viewers 40
        """
    )
    parser.add_argument("--config", default=str(DEFAULT_CONFIG),
                        help="YAML config file (default: configs/crowdmaze.yaml)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--grid-size-x", type=int, help="Number of room columns")
    parser.add_argument("--grid-size-y", type=int, help="Number of room rows")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_map = subparsers.add_parser("map", help="Generate and print a map")
    parser_map.add_argument("--json", action="store_true", help="Print the grid as JSON")
    parser_map.add_argument("--fog", action="store_true",
                            help="Hide rooms the player has not discovered")
    parser_map.set_defaults(func=cmd_map)

    parser_play = subparsers.add_parser("play", help="Run headless games")
    parser_play.add_argument("--games", type=int, default=10, help="Games to play (default: 10)")
    parser_play.add_argument("--viewers", type=int, help="Simulated viewers (default: from config or 25)")
    parser_play.add_argument("--output-dir", help="Output directory for logs")
    parser_play.set_defaults(func=cmd_play)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
