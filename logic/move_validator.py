"""
Move validator for TicTacToe.
Checks typed input before it reaches the board.
"""

from typing import Optional, List
from dataclasses import dataclass

from .board import Board


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    index: Optional[int] = None
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates human moves.

    Rules:
    1. Input must be a whole number
    2. The number must be a square on the board
    3. The square must be empty
    """

    def validate_input(self, board: Board, text: str) -> ValidationResult:
        """
        Validate a move typed by the user.

        Args:
            board: Current board.
            text: Raw input, e.g. " 5 ".

        Returns:
            ValidationResult with the parsed index when valid.
        """
        text = text.strip()
        try:
            index = int(text)
        except ValueError:
            return ValidationResult(
                is_valid=False,
                error_message=f"'{text}' is not a square number."
            )

        return self.validate_move(board, index)

    def validate_move(self, board: Board, index: int) -> ValidationResult:
        """
        Validate a square number.

        Args:
            board: Current board.
            index: Square number (1..size*size).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check range
        if not 1 <= index <= len(board):
            return ValidationResult(
                is_valid=False,
                index=index,
                error_message=f"Invalid square {index}. Must be 1-{len(board)}."
            )

        # Check if square is empty
        if not board[index].is_empty():
            return ValidationResult(
                is_valid=False,
                index=index,
                error_message=f"Square {index} is already taken by {board[index].player.marker}."
            )

        return ValidationResult(is_valid=True, index=index)

    def get_valid_moves(self, board: Board) -> List[int]:
        """All square numbers the user may choose."""
        return board.remaining_squares()
