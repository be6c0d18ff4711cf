"""
Errors raised by the TicTacToe game logic.
"""

from typing import Optional


class TicTacToeError(Exception):
    """Base class for all game errors."""


class InvalidConfiguration(TicTacToeError):
    """Board size, marker, name or score settings are out of range."""


class InvalidMove(TicTacToeError):
    """
    A move refers to a square that is out of range or already taken.

    Attributes:
        index: The square number that was proposed.
        reason: Short description of what was wrong with it.
    """

    def __init__(self, index: Optional[int], reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid move {index}: {reason}")


class AmbiguousResult(TicTacToeError):
    """More than one player owns a complete line on the same board."""
