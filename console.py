"""
Terminal front end for TicTacToe.

Shows:
- Position numbers legend
- Current board
- Match results and running scores
- The series winner

Also reads the user's moves and setup choices from the keyboard.
"""

import os
from typing import Callable, Optional, Sequence

import numpy as np

from logic.board import Board
from logic.config import GameConfig
from logic.events import DisplaySink
from logic.game_state import MatchResult, Player
from logic.move_validator import MoveValidator
from logic.win_checker import WinChecker


MESSAGES = {
    "welcome": "Welcome to Tic Tac Toe!",
    "goodbye": "Thanks for playing Tic Tac Toe! Goodbye!",
    "continue_game": "Press enter to continue.",
    "play_again": "Would you like to play again? (y/n)",
    "invalid_input": "Sorry, that's not a valid choice.",
}


def prompt(message: str, output: Callable[[str], None] = print):
    """Print a prompt line."""
    output(f"==> {message}")


def render_board(board: Board) -> str:
    """
    Format a board as rows like |X|_|O|.

    Args:
        board: The board to draw.

    Returns:
        Multi-line string, one line per row.
    """
    width = max(len(str(square)) for square in board.rows()[0])
    lines = []
    for row in board.rows():
        cells = "|".join(str(square).center(width) for square in row)
        lines.append(f"|{cells}|")
    return "\n".join(lines)


def tutorial_legend(size: int) -> str:
    """
    Format the position numbers for a board of the given size.

    Args:
        size: Board size.

    Returns:
        Multi-line string with each square's number in place.
    """
    grid = np.arange(1, size * size + 1).reshape(size, size)
    width = len(str(size * size))

    lines = []
    for row in grid.tolist():
        cells = "|".join(str(number).rjust(width) for number in row)
        lines.append(f"|{cells}|")
    return "\n".join(lines)


def result_message(result: MatchResult) -> str:
    """Describe a match result."""
    if result.is_tie:
        return "It's a tie!"
    return f"{result.winner.name} won!"


def scores_message(players: Sequence[Player]) -> str:
    """Describe both players' scores."""
    return "Score: " + ", ".join(f"{player.name} {player.score}" for player in players)


class ConsoleInput:
    """
    Reads choices from the keyboard, asking again until they are valid.
    """

    def __init__(
        self,
        input_fn: Optional[Callable[[str], str]] = None,
        output: Callable[[str], None] = print
    ):
        self.input_fn = input_fn or input
        self.output = output
        self.validator = MoveValidator()

    def _ask(self, message: str) -> str:
        prompt(message, self.output)
        return self.input_fn("")

    # ==================== MOVES ====================

    def choose_square(self, board: Board) -> int:
        """
        Ask for an empty square. Used as the human move provider.

        Args:
            board: Current board.

        Returns:
            A square number from board.remaining_squares().
        """
        while True:
            remaining = self.validator.get_valid_moves(board)
            choices = ", ".join(str(index) for index in remaining)
            answer = self._ask(f"Choose an empty square ({choices})")

            result = self.validator.validate_input(board, answer)
            if result.is_valid:
                return result.index

            prompt(MESSAGES["invalid_input"], self.output)
            if result.error_message:
                prompt(result.error_message, self.output)

    # ==================== YES / NO ====================

    def ask_yes_no(self, message: str = MESSAGES["play_again"]) -> bool:
        """Ask until the answer is y or n."""
        while True:
            answer = self._ask(message).strip().lower()
            if answer in ("y", "n"):
                return answer == "y"
            prompt(MESSAGES["invalid_input"], self.output)

    def wait_for_enter(self):
        self._ask(MESSAGES["continue_game"])

    # ==================== SETUP ====================

    def ask_name(self, default: str = GameConfig.DEFAULT_USER_NAME) -> str:
        """Ask for the user's name. Blank keeps the default."""
        answer = self._ask(f"What's your name? (enter for {default})").strip()
        return answer or default

    def ask_board_size(self, default: int = GameConfig.DEFAULT_BOARD_SIZE) -> int:
        """Ask for a board size within the allowed range."""
        low, high = GameConfig.MIN_BOARD_SIZE, GameConfig.MAX_BOARD_SIZE
        while True:
            answer = self._ask(f"Choose a board size ({low}-{high}, enter for {default})").strip()
            if not answer:
                return default
            if answer.isdecimal() and low <= int(answer) <= high:
                return int(answer)
            prompt(MESSAGES["invalid_input"], self.output)

    def ask_marker(self, taken: Optional[str] = None,
                   default: str = GameConfig.DEFAULT_USER_MARKER) -> str:
        """Ask for a one-character marker different from `taken`."""
        while True:
            answer = self._ask(f"Choose your marker (one character, enter for {default})").strip()
            marker = answer or default
            if GameConfig.is_valid_marker(marker) and marker != taken:
                return marker
            prompt(MESSAGES["invalid_input"], self.output)


class ConsoleDisplay(DisplaySink):
    """
    Prints game events to the terminal.
    """

    def __init__(
        self,
        user: Optional[Player] = None,
        computer: Optional[Player] = None,
        clear_screen: bool = True,
        console_input: Optional[ConsoleInput] = None,
        output: Callable[[str], None] = print
    ):
        """
        Args:
            user: The human player (for the header line).
            computer: The computer player (for the header line).
            clear_screen: Clear the terminal before each board.
            console_input: Used to pause after each match. None = no pause.
            output: Where lines are written.
        """
        self.user = user
        self.computer = computer
        self.clear_screen = clear_screen
        self.console_input = console_input
        self.output = output
        self.win_checker = WinChecker()

    def clear(self):
        if self.clear_screen:
            os.system("cls" if os.name == "nt" else "clear")

    def welcome(self):
        self.clear()
        prompt(MESSAGES["welcome"], self.output)

    def goodbye(self):
        prompt(MESSAGES["goodbye"], self.output)

    def board_updated(self, board: Board):
        self.clear()
        if self.user is not None and self.computer is not None:
            prompt(f"You're {self.user.marker}. The computer is {self.computer.marker}.\n",
                   self.output)

        self.output("Position Numbers:\n")
        self.output(tutorial_legend(board.size))
        self.output("")
        self.output("Current Board:\n")
        self.output(render_board(board))
        self.output("")

        line = self.win_checker.get_winning_line(board)
        if line is not None:
            self.output("Winning line: " + ", ".join(str(index) for index in line))

    def match_decided(self, result: MatchResult, players: Sequence[Player]):
        prompt(result_message(result), self.output)
        prompt(scores_message(players), self.output)

        if self.console_input is not None:
            self.console_input.wait_for_enter()

    def series_decided(self, winner: Player):
        self.output("\n" + "=" * 60)
        self.output(f"   {winner.name} wins the series with {winner.score} points!")
        self.output("=" * 60 + "\n")


def interactive_setup(console_input: ConsoleInput, config: GameConfig) -> GameConfig:
    """
    Ask the user for name, board size and marker.

    Args:
        console_input: Keyboard reader.
        config: Starting settings (defaults for each question).

    Returns:
        A new validated GameConfig.
    """
    name = console_input.ask_name(config.user_name)
    size = console_input.ask_board_size(config.board_size)
    marker = console_input.ask_marker(taken=config.computer_marker, default=config.user_marker)

    return GameConfig(
        board_size=size,
        user_marker=marker,
        computer_marker=config.computer_marker,
        winning_score=config.winning_score,
        user_name=name,
        computer_name=config.computer_name,
        response_time=config.response_time
    )
