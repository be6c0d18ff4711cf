"""
Match engine for TicTacToe.
Plays one match from an empty board until someone wins or the board fills.
"""

from typing import Dict, List, Optional, Sequence

from .board import Board
from .errors import InvalidConfiguration
from .events import DisplaySink
from .game_state import MatchResult, MatchState, Player
from .strategy import MoveStrategy


def check_players(players: Sequence[Player]):
    """
    Make sure two distinct players with distinct markers are playing.

    Raises:
        InvalidConfiguration: If the same player appears twice or the
            markers are equal.
    """
    if players[0] is players[1]:
        raise InvalidConfiguration("A match needs two different players")
    if players[0].marker == players[1].marker:
        raise InvalidConfiguration(
            f"Players must have different markers, both are {players[0].marker!r}"
        )


class MatchEngine:
    """
    Runs a single match.

    Game flow:
    1. The current player's strategy picks a square
    2. The engine marks it on the board
    3. A complete line decides the match for its owner
    4. Otherwise a full board is a tie
    5. Otherwise the other player moves next

    The winner's score is incremented when the match is decided.
    """

    def __init__(
        self,
        board: Board,
        strategies: Sequence[MoveStrategy],
        first_player: Player,
        display: Optional[DisplaySink] = None,
        verbose: bool = False
    ):
        """
        Set up a match.

        Args:
            board: An empty board for this match.
            strategies: Exactly two strategies, one per player.
            first_player: The player who moves first.
            display: Event sink for board updates and the result.
            verbose: Print a line for every turn.
        """
        if len(strategies) != 2:
            raise InvalidConfiguration("A match needs exactly two players")

        self.players: List[Player] = [strategy.player for strategy in strategies]
        check_players(self.players)
        if first_player not in self.players:
            raise InvalidConfiguration(f"{first_player.name} is not playing in this match")

        self.board = board
        self._strategies: Dict[int, MoveStrategy] = {
            id(strategy.player): strategy for strategy in strategies
        }
        self.current_player = first_player
        self.display = display or DisplaySink()
        self.verbose = verbose

        self.state = MatchState.IN_PROGRESS
        self.result: Optional[MatchResult] = None
        self.turns = 0

    @property
    def is_decided(self) -> bool:
        return self.state == MatchState.DECIDED

    def play(self) -> MatchResult:
        """
        Play turns until the match is decided.

        Returns:
            The match result.
        """
        while not self.is_decided:
            self.step()
        return self.result

    def step(self) -> Optional[MatchResult]:
        """
        Play one turn.

        Returns:
            The result if this turn decided the match, otherwise None.

        Raises:
            InvalidMove: If the strategy picks a bad square.
            RuntimeError: If the match is already decided.
        """
        if self.is_decided:
            raise RuntimeError("Match is already decided!")

        player = self.current_player
        index = self._strategies[id(player)].select_move(self.board)
        self.board.mark(index, player)
        self.turns += 1

        if self.verbose:
            print(f"Turn {self.turns}: {player.name} ({player.marker}) -> {index}")

        self.display.board_updated(self.board.copy())

        self._refresh_result()
        if self.is_decided:
            return self.result

        self.current_player = self.opponent_of(player)
        return None

    def _refresh_result(self):
        winner = self.board.winner()

        if winner is not None:
            self._decide(MatchResult.win(winner))
        elif self.board.is_full():
            self._decide(MatchResult.tie())

    def _decide(self, result: MatchResult):
        self.state = MatchState.DECIDED
        self.result = result

        if result.winner is not None:
            result.winner.increment_score()

        self.display.match_decided(result, list(self.players))

    def opponent_of(self, player: Player) -> Player:
        """The other player in this match."""
        return self.players[1] if player is self.players[0] else self.players[0]
