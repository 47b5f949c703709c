"""
njdice CLI entry point.

Provides command-line access to the dice game systems.
"""

import argparse
import sys
from pathlib import Path
from typing import TextIO

from njdice import __version__
from njdice.config.logging import get_logger, setup_logging
from njdice.config.settings import Settings, load_settings
from njdice.dice.randomizer import Randomizer, TooManyRandsError
from njdice.game_system import GAME_SYSTEMS, GameSystem, get_game_system

SHELL_EXIT_WORDS = {"quit", "exit"}


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="njdice",
        description="Dice command interpreter for the Ninja Slayer TRPG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"njdice {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Options shared by commands that roll dice
    system_parent = argparse.ArgumentParser(add_help=False)
    system_parent.add_argument(
        "--system",
        default=None,
        help="Game system ID (default: DICE__GAME_SYSTEM from config)",
    )

    roll_parent = argparse.ArgumentParser(add_help=False)
    roll_parent.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the randomizer for reproducible rolls (default: DICE__SEED from config)",
    )

    # Roll command
    roll_parser = subparsers.add_parser(
        "roll",
        parents=[system_parent, roll_parent],
        help="Evaluate one or more dice commands",
    )
    roll_parser.add_argument(
        "commands",
        nargs="+",
        help='Dice commands, e.g. "NJ4@H" "EV5/3" "AT6[H]" "EL6@H" "SB"',
    )

    # Shell command
    subparsers.add_parser(
        "shell",
        parents=[system_parent, roll_parent],
        help="Read dice commands from stdin, one per line",
    )

    # Help command
    subparsers.add_parser(
        "help",
        parents=[system_parent],
        help="Show the command reference for a game system",
    )

    # Systems command
    subparsers.add_parser(
        "systems",
        help="List available game systems",
    )

    # Config command
    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    return parser


def build_game_system(args, settings: Settings) -> GameSystem:
    """
    Create the game system selected by CLI arguments or settings.

    Raises:
        ValueError: If the game system ID is unknown
    """
    system_id = args.system or settings.dice.game_system
    seed = args.seed if getattr(args, "seed", None) is not None else settings.dice.seed

    system_class = get_game_system(system_id)
    randomizer = Randomizer(seed=seed, max_rands=settings.dice.max_rands)
    return system_class(randomizer)


def run_command(system: GameSystem, command: str, out: TextIO | None = None) -> bool:
    """
    Evaluate one command and print its result.

    Returns:
        True if the command was handled, False otherwise.
    """
    logger = get_logger(__name__)

    try:
        result = system.eval(command)
    except TooManyRandsError as e:
        logger.error(f"{command!r} failed: {e}")
        return False

    if result is None:
        logger.error(f"Unknown command: {command!r}")
        return False

    prefix = "[secret] " if result.secret else ""
    print(f"{prefix}{result.text}", file=out)
    return True


def cmd_roll(args, settings: Settings) -> int:
    """Evaluate the commands given on the command line."""
    logger = get_logger(__name__)

    try:
        system = build_game_system(args, settings)
    except ValueError as e:
        logger.error(str(e))
        return 1

    handled = [run_command(system, command) for command in args.commands]
    return 0 if all(handled) else 1


def cmd_shell(args, settings: Settings, stream: TextIO | None = None) -> int:
    """Evaluate commands read from a stream until EOF or an exit word."""
    logger = get_logger(__name__)

    try:
        system = build_game_system(args, settings)
    except ValueError as e:
        logger.error(str(e))
        return 1

    if stream is None:
        stream = sys.stdin

    logger.info(f"{system.NAME} ready. Type 'quit' to exit.")
    for line in stream:
        command = line.strip()
        if not command:
            continue
        if command.lower() in SHELL_EXIT_WORDS:
            break
        run_command(system, command)

    return 0


def cmd_help(args, settings: Settings) -> int:
    """Print the command reference of a game system."""
    logger = get_logger(__name__)

    try:
        system_class = get_game_system(args.system or settings.dice.game_system)
    except ValueError as e:
        logger.error(str(e))
        return 1

    print(f"=== {system_class.NAME} ===\n")
    print(system_class.HELP_MESSAGE)
    return 0


def cmd_systems() -> int:
    """List registered game systems."""
    for system_id, system_class in sorted(GAME_SYSTEMS.items()):
        print(f"{system_id}\t{system_class.NAME}")
    return 0


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== njdice Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nGame System: {settings.dice.game_system}")
    logger.info(f"Seed: {settings.dice.seed if settings.dice.seed is not None else 'None (random)'}")
    logger.info(f"Max Dice Per Command: {settings.dice.max_rands}")

    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    # Setup logging
    setup_logging(settings)

    # Execute command
    if args.command == "roll":
        return cmd_roll(args, settings)
    elif args.command == "shell":
        return cmd_shell(args, settings)
    elif args.command == "help":
        return cmd_help(args, settings)
    elif args.command == "systems":
        return cmd_systems()
    elif args.command == "config":
        return cmd_config(settings)
    else:
        # Default: show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
