"""
Display events reported by the match engine and series controller.
"""

from typing import List, Optional, Sequence, Tuple

from .game_state import MatchResult, Player


class DisplaySink:
    """
    Receives game events. The default implementation ignores them.

    Events:
        board_updated:  after every move, with a snapshot of the board
        match_decided:  once per match, with the result and both players
        series_decided: once per series, with the series winner
    """

    def board_updated(self, board):
        pass

    def match_decided(self, result: MatchResult, players: Sequence[Player]):
        pass

    def series_decided(self, winner: Player):
        pass


# A sink that does nothing
NullDisplay = DisplaySink


class RecordingDisplay(DisplaySink):
    """
    Keeps every event in order. Useful for tests and replays.
    """

    def __init__(self):
        self.events: List[Tuple[str, object]] = []

    def board_updated(self, board):
        self.events.append(("board_updated", board))

    def match_decided(self, result: MatchResult, players: Sequence[Player]):
        scores = tuple((player.name, player.score) for player in players)
        self.events.append(("match_decided", (result, scores)))

    def series_decided(self, winner: Player):
        self.events.append(("series_decided", winner))

    def names(self) -> List[str]:
        """Event names only."""
        return [name for name, _ in self.events]

    def last(self, name: str) -> Optional[object]:
        """Payload of the most recent event with this name."""
        for event_name, payload in reversed(self.events):
            if event_name == name:
                return payload
        return None
