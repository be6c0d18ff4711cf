"""
Win checker for TicTacToe.
Checks if a player owns a complete line or if the game is a tie.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np

from .errors import AmbiguousResult
from .game_state import Player

if TYPE_CHECKING:
    from .board import Board


@lru_cache(maxsize=None)
def winning_lines(size: int) -> Tuple[Tuple[int, ...], ...]:
    """
    All lines that win on a board of the given size.

    Lines are square numbers (1-based), ordered rows, columns, then the
    main diagonal and the anti-diagonal.

    Args:
        size: Board size.

    Returns:
        Tuple of 2 * size + 2 lines.
    """
    grid = np.arange(1, size * size + 1).reshape(size, size)

    lines = []
    lines.extend(grid.tolist())                   # Rows
    lines.extend(grid.T.tolist())                 # Columns
    lines.append(np.diag(grid).tolist())          # Top-left to bottom-right
    lines.append(np.diag(np.fliplr(grid)).tolist())  # Top-right to bottom-left

    return tuple(tuple(line) for line in lines)


class WinChecker:
    """
    Checks for win conditions on an N x N board.

    Win condition: every square of a row, column or diagonal is marked
    by the same player.
    """

    def check_winner(self, board: "Board") -> Optional[Player]:
        """
        Check if there's a winner.

        Args:
            board: The board to inspect.

        Returns:
            The player owning the first complete line, or None.

        Raises:
            AmbiguousResult: If complete lines belong to different players.
        """
        winners = []
        for line in winning_lines(board.size):
            player = self._check_line(board, line)
            if player is not None and player not in winners:
                winners.append(player)

        if len(winners) > 1:
            markers = ", ".join(player.marker for player in winners)
            raise AmbiguousResult(f"More than one player owns a complete line: {markers}")

        return winners[0] if winners else None

    def _check_line(self, board: "Board", line: Tuple[int, ...]) -> Optional[Player]:
        """
        Check if a single line is owned by one player.

        Returns:
            The owning Player, or None if the line is incomplete or mixed.
        """
        player = board[line[0]].player
        if player is None:
            return None

        for index in line[1:]:
            if board[index].player is not player:
                return None

        return player

    def check_draw(self, board: "Board") -> bool:
        """
        Check if the game is a tie: board full and no winner.
        """
        return board.is_full() and self.check_winner(board) is None

    def get_winning_line(self, board: "Board") -> Optional[List[int]]:
        """
        Get the winning line if there is one.

        Returns:
            The square numbers of the first complete line, or None.
        """
        for line in winning_lines(board.size):
            if self._check_line(board, line) is not None:
                return list(line)
        return None
