"""
Series controller for TicTacToe.
Plays matches until one player reaches the winning score.
"""

import random
import time
from typing import Callable, List, Optional, Sequence

from .ai_player import ComputerStrategy
from .board import Board
from .config import GameConfig
from .errors import InvalidConfiguration
from .events import DisplaySink
from .game_state import MatchResult, Player
from .match import MatchEngine, check_players
from .strategy import HumanStrategy, MoveStrategy


class SeriesController:
    """
    Runs a series of matches between two players.

    Each match starts on a fresh board with a randomly chosen first
    player. The series ends as soon as a player's score reaches the
    winning score; no match is played after that.
    """

    def __init__(
        self,
        strategies: Sequence[MoveStrategy],
        board_size: int = GameConfig.DEFAULT_BOARD_SIZE,
        winning_score: int = GameConfig.DEFAULT_WINNING_SCORE,
        rng: Optional[random.Random] = None,
        display: Optional[DisplaySink] = None,
        verbose: bool = False
    ):
        """
        Args:
            strategies: One strategy per player (exactly two).
            board_size: Size of every match board.
            winning_score: Matches needed to win the series.
            rng: Random source for picking the first player.
            display: Event sink, shared with every match.
            verbose: Print turn traces.
        """
        if len(strategies) != 2:
            raise InvalidConfiguration("A series needs exactly two players")
        if isinstance(winning_score, bool) or not isinstance(winning_score, int) or winning_score < 1:
            raise InvalidConfiguration(
                f"Winning score must be a positive integer, got {winning_score!r}"
            )
        # Fails early on a bad size
        Board(board_size)

        self.strategies = list(strategies)
        self.players: List[Player] = [strategy.player for strategy in strategies]
        check_players(self.players)
        self.board_size = board_size
        self.winning_score = winning_score
        self.rng = rng or random.Random()
        self.display = display or DisplaySink()
        self.verbose = verbose

        self.matches: List[MatchResult] = []
        self.current_starter: Optional[Player] = None
        self.board: Optional[Board] = None

    @classmethod
    def from_config(
        cls,
        config: GameConfig,
        move_provider: Callable[[Board], int],
        rng: Optional[random.Random] = None,
        display: Optional[DisplaySink] = None,
        sleep: Callable[[float], None] = time.sleep,
        verbose: bool = False
    ) -> "SeriesController":
        """
        Build a human vs. computer series from a config.

        Args:
            config: Validated game settings.
            move_provider: Returns the human's square for a board.
            rng: Random source shared by the series and the computer.
            display: Event sink.
            sleep: Used for the computer's thinking pause.
            verbose: Print turn traces and computer reasoning.
        """
        rng = rng or random.Random()

        user = Player(config.user_name, config.user_marker)
        computer = Player(config.computer_name, config.computer_marker, is_computer=True)

        strategies = [
            HumanStrategy(user, move_provider),
            ComputerStrategy(
                computer,
                opponent=user,
                rng=rng,
                response_time=config.response_time,
                sleep=sleep,
                verbose=verbose
            ),
        ]

        return cls(
            strategies,
            board_size=config.board_size,
            winning_score=config.winning_score,
            rng=rng,
            display=display,
            verbose=verbose
        )

    # ==================== SERIES STATUS ====================

    @property
    def series_winner(self) -> Optional[Player]:
        """The player who reached the winning score, or None."""
        for player in self.players:
            if player.score >= self.winning_score:
                return player
        return None

    @property
    def is_over(self) -> bool:
        return self.series_winner is not None

    def scores(self) -> dict:
        """Current scores keyed by player name."""
        return {player.name: player.score for player in self.players}

    # ==================== PLAYING ====================

    def play_match(self) -> MatchResult:
        """
        Play one match on a fresh board.

        Returns:
            The match result. Scores are already updated.

        Raises:
            RuntimeError: If the series is already over.
        """
        if self.is_over:
            raise RuntimeError("Series is already over!")

        self.current_starter = self.rng.choice(self.players)
        self.board = Board(self.board_size)

        engine = MatchEngine(
            self.board,
            self.strategies,
            self.current_starter,
            display=self.display,
            verbose=self.verbose
        )
        result = engine.play()
        self.matches.append(result)

        return result

    def run_series(self) -> Player:
        """
        Play matches until a player reaches the winning score.

        Returns:
            The series winner.
        """
        while not self.is_over:
            self.play_match()

        winner = self.series_winner
        self.display.series_decided(winner)
        return winner

    def reset_scores(self):
        """Start a new series with the same players."""
        for player in self.players:
            player.reset_score()
        self.matches = []
        self.current_starter = None
        self.board = None
