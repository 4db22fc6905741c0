"""
Split UNO CLI - Command-line interface for the arbiter.

Usage:
    split-uno play [--players A B ...]      Referee a game at the terminal
    split-uno rules                         Print the active table rules
"""

import argparse
import logging
import sys

from pydantic import ValidationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split UNO - Scorekeeping Arbiter",
        prog="split-uno",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default from SPLIT_UNO_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Referee a game")
    play_parser.add_argument("--players", nargs="+", help="Player names in turn order")
    play_parser.add_argument("--starting-cards", type=int, help="Number cards dealt to each player")
    play_parser.add_argument("--number-deck", type=int, help="Number deck size after the deal")
    play_parser.add_argument("--action-deck", type=int, help="Action deck size")
    play_parser.add_argument(
        "--keep-streak-on-tie",
        action="store_true",
        help="Tied bids keep streak credit (default: tie resets streaks)",
    )

    subparsers.add_parser("rules", help="Print the active table rules")
    return parser


def load_config(args):
    """Merge CLI flags over SPLIT_UNO_* environment settings."""
    from .config import ArbiterConfig

    rules = {}
    if getattr(args, "starting_cards", None) is not None:
        rules["starting_number_cards"] = args.starting_cards
    if getattr(args, "number_deck", None) is not None:
        rules["number_deck_size"] = args.number_deck
    if getattr(args, "action_deck", None) is not None:
        rules["action_deck_size"] = args.action_deck
    if getattr(args, "keep_streak_on_tie", False):
        rules["tie_resets_streak"] = False

    overrides = {"rules": rules}
    if getattr(args, "players", None):
        overrides["player_names"] = args.players
    if args.log_level:
        overrides["log_level"] = args.log_level
    return ArbiterConfig.from_env(**overrides)


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config(args)
    except (ValidationError, ValueError) as e:
        print(f"Error: invalid configuration\n{e}")
        sys.exit(2)

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(config)
    elif args.command == "rules":
        cmd_rules(config)


def cmd_play(config):
    """Referee a game at the terminal."""
    from .engine_core.arbiter import Arbiter
    from .session import ConsoleProvider, GameLoop

    console = ConsoleProvider()
    console.banner()
    print(
        f"\nInitializing game with {config.rules.starting_number_cards} cards each "
        f"for {', '.join(config.player_names)}..."
    )

    arbiter = Arbiter.from_config(config, choices=console, display=console)
    loop = GameLoop(arbiter=arbiter, choices=console)
    try:
        final = loop.run()
    except (KeyboardInterrupt, EOFError):
        print("\n>>> Input closed; game abandoned.")
        sys.exit(130)

    print("\nFinal Game State:")
    console.show_state(final)


def cmd_rules(config):
    """Print the active table rules."""
    for name, value in config.rules.model_dump().items():
        print(f"{name}: {value}")
    print(f"players: {', '.join(config.player_names)}")


if __name__ == "__main__":
    main()
