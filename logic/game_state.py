"""
Game state types for TicTacToe.
Players, match results, and the match state machine states.
"""

from enum import Enum
from typing import Optional
from dataclasses import dataclass


@dataclass(eq=False)
class Player:
    """
    One of the two players in a series.

    Players compare by identity: two players never share a marker, and
    board copies keep pointing at the same Player objects.
    """
    name: str               # Display name
    marker: str             # Single symbol placed on the board
    score: int = 0          # Matches won in the current series
    is_computer: bool = False

    def increment_score(self):
        """Record a match win."""
        self.score += 1

    def reset_score(self):
        """Start a new series from zero."""
        self.score = 0

    def __str__(self) -> str:
        return self.name


class MatchState(Enum):
    """States of a single match."""
    IN_PROGRESS = "in_progress"
    DECIDED = "decided"


@dataclass(frozen=True)
class MatchResult:
    """
    The outcome of one match: a winner, or a tie when winner is None.
    """
    winner: Optional[Player] = None

    @classmethod
    def win(cls, player: Player) -> "MatchResult":
        return cls(winner=player)

    @classmethod
    def tie(cls) -> "MatchResult":
        return cls(winner=None)

    @property
    def is_tie(self) -> bool:
        return self.winner is None
