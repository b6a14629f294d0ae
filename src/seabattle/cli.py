"""Command-line driver for playing SeaBattle against a random computer."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import colorama
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from pydantic import ValidationError

from seabattle.config import GameConfig
from seabattle.engine.errors import SeaBattleError
from seabattle.engine.game import Side
from seabattle.engine.instrumented_game import InstrumentedSeaBattleGame
from seabattle.telemetry import configure_console_logging, init_telemetry, shutdown_telemetry
from seabattle.ui.console import ConsoleCoordinateSource, ConsoleObserver, offer_tutorial

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play SeaBattle against the computer.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument("--size", type=int, default=None, help="Board dimension (default 4).")
    parser.add_argument("--ships", type=int, default=None, help="Ships per side (default 4).")
    parser.add_argument(
        "--no-color", action="store_true", help="Disable ANSI colours in board output."
    )
    parser.add_argument(
        "--skip-tutorial", action="store_true", help="Do not offer the tutorial."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log engine events to stderr."
    )
    return parser


def play_game(config: GameConfig) -> Side:
    """Run one interactive game on stdin/stdout and return the winner."""
    if config.show_tutorial_prompt:
        offer_tutorial(config.board_size, color=config.color)
    game = InstrumentedSeaBattleGame.new(
        config,
        source=ConsoleCoordinateSource(config.board_size),
        observer=ConsoleObserver(color=config.color),
    )
    return game.play()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_console_logging(logging.INFO if args.verbose else logging.WARNING)
    telemetry = init_telemetry()
    if telemetry.enable_tracing or telemetry.enable_logging:
        LoggingInstrumentor().instrument()

    try:
        config = GameConfig.from_env(
            seed=args.seed,
            board_size=args.size,
            ship_count=args.ships,
            color=False if args.no_color else None,
            show_tutorial_prompt=False if args.skip_tutorial else None,
        )
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    colorama.just_fix_windows_console()
    try:
        play_game(config)
    except SeaBattleError as exc:
        logger.error("game_aborted", extra={"error": type(exc).__name__})
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye!", file=sys.stderr)
        return EXIT_INTERRUPTED
    finally:
        shutdown_telemetry()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
