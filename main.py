"""
Main script for TicTacToe.

This script ties together:
- Logic (board, computer opponent, match and series flow)
- Console (board display, keyboard input)

Run this script to play TicTacToe against the computer!
"""

import argparse
import random
import sys
from typing import List, Optional

from logic.config import GameConfig
from logic.errors import TicTacToeError
from logic.series import SeriesController
from console import ConsoleDisplay, ConsoleInput, interactive_setup


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play TicTacToe against the computer")
    parser.add_argument(
        "--size",
        type=int,
        default=GameConfig.DEFAULT_BOARD_SIZE,
        help=f"Board size ({GameConfig.MIN_BOARD_SIZE}-{GameConfig.MAX_BOARD_SIZE})"
    )
    parser.add_argument(
        "--marker",
        default=GameConfig.DEFAULT_USER_MARKER,
        help="Your marker (one character)"
    )
    parser.add_argument(
        "--computer-marker",
        default=GameConfig.DEFAULT_COMPUTER_MARKER,
        help="The computer's marker (one character)"
    )
    parser.add_argument(
        "--winning-score",
        type=int,
        default=GameConfig.DEFAULT_WINNING_SCORE,
        help="Matches needed to win the series"
    )
    parser.add_argument(
        "--name",
        default=GameConfig.DEFAULT_USER_NAME,
        help="Your name"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (who starts, computer's random moves)"
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Computer answers instantly"
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear the screen between moves"
    )
    parser.add_argument(
        "--interactive-setup",
        action="store_true",
        help="Ask for name, board size and marker before playing"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print every turn and the computer's reasoning"
    )
    return parser


def play(config: GameConfig, console_input: ConsoleInput, rng: random.Random,
         clear_screen: bool = True, verbose: bool = False):
    """
    Play series until the user doesn't want another one.
    """
    display = ConsoleDisplay(
        clear_screen=clear_screen,
        console_input=console_input
    )
    series = SeriesController.from_config(
        config,
        console_input.choose_square,
        rng=rng,
        display=display,
        verbose=verbose
    )
    display.user, display.computer = series.players

    display.welcome()
    while True:
        series.run_series()
        if not console_input.ask_yes_no():
            break
        series.reset_scores()
    display.goodbye()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    console_input = ConsoleInput()

    try:
        config = GameConfig.from_args(args)
        if args.interactive_setup:
            config = interactive_setup(console_input, config)

        print("\n" + "=" * 60)
        print("   TicTacToe")
        print("=" * 60)
        print(f"   Board: {config.board_size}x{config.board_size}")
        print(f"   {config.user_name}: {config.user_marker}   "
              f"{config.computer_name}: {config.computer_marker}")
        print(f"   First to {config.winning_score} wins")
        print("=" * 60 + "\n")

        play(
            config,
            console_input,
            random.Random(args.seed),
            clear_screen=not args.no_clear,
            verbose=args.verbose
        )
    except TicTacToeError as e:
        print(f"ERROR: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nGame quit by user.")
        return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
