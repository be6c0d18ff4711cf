"""
Move strategies: how each player picks the square to play.
"""

from typing import Callable

from .board import Board
from .game_state import Player


class MoveStrategy:
    """
    Base class for anything that chooses moves for a player.

    Subclasses implement select_move(). Strategies never mark the live
    board themselves; the match engine does that with the returned index.
    """

    def __init__(self, player: Player):
        self.player = player

    def select_move(self, board: Board) -> int:
        """
        Choose a square to play.

        Args:
            board: The current board (read only).

        Returns:
            Square number to mark.
        """
        raise NotImplementedError


class HumanStrategy(MoveStrategy):
    """
    Moves come from an outside input provider.

    The provider is expected to return a square listed in
    board.remaining_squares(). Anything else is rejected by the board
    when the engine marks it.
    """

    def __init__(self, player: Player, provider: Callable[[Board], int]):
        super().__init__(player)
        self.provider = provider

    def select_move(self, board: Board) -> int:
        return self.provider(board)
