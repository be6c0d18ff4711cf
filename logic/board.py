"""
Board model for TicTacToe.
An N x N grid of squares, numbered 1..N*N in row-major order.
"""

import math
from typing import List, Optional

from .errors import InvalidConfiguration, InvalidMove
from .game_state import Player
from .win_checker import WinChecker


# Allowed board sizes (inclusive)
MIN_SIZE = 2
MAX_SIZE = 10


class Square:
    """
    A single cell on the board.

    Empty until marked, then owned by one player until the board is reset.
    """

    EMPTY_SYMBOL = "_"

    def __init__(self, player: Optional[Player] = None):
        self._player = player

    @property
    def player(self) -> Optional[Player]:
        """The player who marked this square, or None."""
        return self._player

    def is_empty(self) -> bool:
        return self._player is None

    def mark(self, player: Player):
        """Claim the square. Fails if it is already taken."""
        if self._player is not None:
            raise InvalidMove(None, "square is already occupied")
        self._player = player

    def __str__(self) -> str:
        if self._player is None:
            return self.EMPTY_SYMBOL
        return self._player.marker

    def __repr__(self) -> str:
        return f"Square({self})"


class Board:
    """
    The N x N game board.

    Squares are addressed by their public number:
        index = row * size + col + 1

    The board has no state beyond its squares, so two boards with the
    same markings behave identically.
    """

    def __init__(self, size: int = 3):
        """
        Create an empty board.

        Args:
            size: Number of rows (and columns), 2-10.
        """
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidConfiguration(f"Board size must be an integer, got {size!r}")
        if not MIN_SIZE <= size <= MAX_SIZE:
            raise InvalidConfiguration(
                f"Board size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}"
            )

        self.size = size
        self.win_checker = WinChecker()
        self._squares: List[Square] = []
        self.reset()

    # ==================== RESETTING ====================

    def reset(self):
        """Empty every square."""
        self._squares = [Square() for _ in range(self.size * self.size)]

    # ==================== MARKING ====================

    def mark(self, index: int, player: Player):
        """
        Mark a square for a player.

        Args:
            index: Square number (1..size*size).
            player: The player claiming the square.

        Raises:
            InvalidMove: If the index is out of range or the square is taken.
        """
        self._check_index(index)

        square = self._squares[index - 1]
        if not square.is_empty():
            raise InvalidMove(index, f"square is already occupied by {square.player.marker}")

        square.mark(player)

    def _check_index(self, index: int):
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidMove(index, "square number must be an integer")
        if not 1 <= index <= len(self._squares):
            raise InvalidMove(index, f"square number must be between 1 and {len(self._squares)}")

    # ==================== BOARD STATUS ====================

    def remaining_squares(self) -> List[int]:
        """Numbers of all empty squares, ascending."""
        return [
            number
            for number, square in enumerate(self._squares, start=1)
            if square.is_empty()
        ]

    def marked_count(self) -> int:
        return sum(1 for square in self._squares if not square.is_empty())

    def is_full(self) -> bool:
        return all(not square.is_empty() for square in self._squares)

    def winner(self) -> Optional[Player]:
        """
        The player owning a complete line, or None.

        Lines are checked rows first, then columns, then diagonals.

        Raises:
            AmbiguousResult: If two different players both own a line.
        """
        return self.win_checker.check_winner(self)

    def players(self) -> List[Player]:
        """Distinct players with at least one mark, in board order."""
        found = []
        for square in self._squares:
            if square.player is not None and square.player not in found:
                found.append(square.player)
        return found

    def center_index(self) -> int:
        """The square number treated as the center: ceil(size^2 / 2)."""
        return math.ceil(self.size * self.size / 2)

    # ==================== ACCESS ====================

    def __getitem__(self, index: int) -> Square:
        self._check_index(index)
        return self._squares[index - 1]

    def __len__(self) -> int:
        return len(self._squares)

    def rows(self) -> List[List[Square]]:
        """The squares grouped into rows, top to bottom."""
        return [
            self._squares[start:start + self.size]
            for start in range(0, len(self._squares), self.size)
        ]

    def copy(self) -> "Board":
        """
        Create an independent copy of the board.

        The copy refers to the same Player objects, but marking it never
        affects this board.
        """
        new_board = Board(self.size)
        new_board._squares = [Square(square.player) for square in self._squares]
        return new_board

    def __repr__(self) -> str:
        cells = "".join(str(square) for square in self._squares)
        return f"Board(size={self.size}, cells={cells!r})"
