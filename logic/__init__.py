"""
Logic module for TicTacToe.
Handles the board, rules, computer opponent, and match/series flow.
"""

from .errors import TicTacToeError, InvalidConfiguration, InvalidMove, AmbiguousResult
from .game_state import Player, MatchResult, MatchState
from .board import Board, Square
from .win_checker import WinChecker, winning_lines
from .strategy import MoveStrategy, HumanStrategy
from .ai_player import ComputerStrategy
from .move_validator import MoveValidator, ValidationResult
from .events import DisplaySink, NullDisplay, RecordingDisplay
from .match import MatchEngine
from .config import GameConfig
from .series import SeriesController
