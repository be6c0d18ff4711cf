"""
Computer player for TicTacToe.
Uses a one-move lookahead to choose its square.
"""

import random
import time
from typing import Callable, Optional

from .board import Board
from .errors import InvalidMove
from .game_state import Player
from .strategy import MoveStrategy


class ComputerStrategy(MoveStrategy):
    """
    The computer opponent.

    Each move is picked by the first rule that applies:
    1. Take a square that wins right away
    2. Take the square the opponent would win with
    3. Take the center square
    4. Take a random open square
    """

    def __init__(
        self,
        player: Player,
        opponent: Optional[Player] = None,
        rng: Optional[random.Random] = None,
        response_time: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
        verbose: bool = False
    ):
        """
        Initialize the computer player.

        Args:
            player: The player this strategy moves for.
            opponent: The other player. If None, it is taken from the board.
            rng: Random source for the fallback move.
            response_time: Seconds to pause before answering (0 = no pause).
            sleep: Function used for the pause.
            verbose: Print which rule picked the move.
        """
        super().__init__(player)
        self.opponent = opponent
        self.rng = rng or random.Random()
        self.response_time = response_time
        self.sleep = sleep
        self.verbose = verbose

        # Which rule chose the last move (for debugging)
        self.last_reason: Optional[str] = None

    def select_move(self, board: Board) -> int:
        """
        Get the move for the current position.

        Args:
            board: Current board. Only copies of it are marked.

        Returns:
            Square number to play.

        Raises:
            InvalidMove: If there are no open squares.
        """
        remaining = board.remaining_squares()
        if not remaining:
            raise InvalidMove(None, "no squares remaining")

        if self.response_time > 0:
            self.sleep(self.response_time)

        index, reason = self._choose(board, remaining)
        self.last_reason = reason

        if self.verbose:
            print(f"{self.player.name} plays {index} ({reason})")

        return index

    def _choose(self, board: Board, remaining):
        # 1. Win if we can
        index = self.find_winning_move(board, self.player)
        if index is not None:
            return index, "win"

        # 2. Block the opponent
        opponent = self._find_opponent(board)
        if opponent is not None:
            index = self.find_winning_move(board, opponent)
            if index is not None:
                return index, "block"

        # 3. Center
        center = board.center_index()
        if center in remaining:
            return center, "center"

        # 4. Anything
        return self.rng.choice(remaining), "random"

    def find_winning_move(self, board: Board, player: Player) -> Optional[int]:
        """
        Find the lowest square that would win immediately for a player.

        Args:
            board: Current board.
            player: The player to test moves for.

        Returns:
            Square number, or None if no single move wins.
        """
        for index in board.remaining_squares():
            trial = board.copy()
            trial.mark(index, player)
            if trial.winner() is player:
                return index
        return None

    def _find_opponent(self, board: Board) -> Optional[Player]:
        """The configured opponent, or the other player already on the board."""
        if self.opponent is not None:
            return self.opponent

        for player in board.players():
            if player is not self.player:
                return player
        return None
