"""
Tests for match flow, series flow, configuration and the console front end.

Usage:
    pytest test_modules.py
    python test_modules.py
"""

import random
import sys

import pytest

import main
from console import (
    ConsoleDisplay, ConsoleInput, interactive_setup, render_board, result_message,
    tutorial_legend,
)
from logic.ai_player import ComputerStrategy
from logic.board import Board
from logic.config import GameConfig
from logic.errors import InvalidConfiguration, InvalidMove
from logic.events import RecordingDisplay
from logic.game_state import MatchResult, MatchState, Player
from logic.match import MatchEngine
from logic.move_validator import MoveValidator
from logic.series import SeriesController
from logic.strategy import HumanStrategy


def scripted(moves):
    """A move provider that plays the given squares in order."""
    moves = iter(moves)
    return lambda board: next(moves)


def first_open(board):
    return board.remaining_squares()[0]


class ScriptedRandom:
    """Stands in for random.Random: choice() returns the next scripted value."""

    def __init__(self, picks):
        self.picks = list(picks)

    def choice(self, seq):
        pick = self.picks.pop(0)
        assert pick in seq
        return pick


@pytest.fixture
def x():
    return Player("Player", "X")


@pytest.fixture
def o():
    return Player("Computer", "O", is_computer=True)


# ==================== MATCH ENGINE ====================

def test_match_top_row_win(x, o):
    display = RecordingDisplay()
    engine = MatchEngine(
        Board(3),
        [HumanStrategy(x, scripted([1, 2, 3])), HumanStrategy(o, scripted([4, 5]))],
        first_player=x,
        display=display
    )

    result = engine.play()

    assert result == MatchResult.win(x)
    assert result.winner is x
    assert engine.state == MatchState.DECIDED
    assert engine.turns == 5
    assert x.score == 1
    assert o.score == 0
    assert display.names() == ["board_updated"] * 5 + ["match_decided"]
    assert display.last("match_decided") == (result, (("Player", 1), ("Computer", 0)))


def test_match_tie(x, o):
    display = RecordingDisplay()
    engine = MatchEngine(
        Board(3),
        [HumanStrategy(x, scripted([1, 3, 4, 8, 9])), HumanStrategy(o, scripted([2, 5, 6, 7]))],
        first_player=x,
        display=display
    )

    result = engine.play()

    assert result.is_tie
    assert engine.turns == 9
    assert x.score == 0 and o.score == 0
    assert display.names().count("match_decided") == 1


def test_match_second_player_can_start(x, o):
    engine = MatchEngine(
        Board(3),
        [HumanStrategy(x, scripted([4, 5])), HumanStrategy(o, scripted([1, 2, 3]))],
        first_player=o
    )
    assert engine.play().winner is o
    assert o.score == 1


def test_match_step_by_step(x, o):
    engine = MatchEngine(
        Board(3),
        [HumanStrategy(x, scripted([1, 2, 3])), HumanStrategy(o, scripted([4, 5]))],
        first_player=x
    )

    assert engine.step() is None
    assert engine.current_player is o
    assert engine.step() is None
    assert engine.current_player is x
    assert engine.state == MatchState.IN_PROGRESS

    engine.play()
    with pytest.raises(RuntimeError):
        engine.step()


def test_match_board_snapshots_are_copies(x, o):
    display = RecordingDisplay()
    board = Board(3)
    engine = MatchEngine(
        board,
        [HumanStrategy(x, scripted([1, 2, 3])), HumanStrategy(o, scripted([4, 5]))],
        first_player=x,
        display=display
    )
    engine.play()

    first_snapshot = display.events[0][1]
    assert first_snapshot is not board
    assert first_snapshot.marked_count() == 1
    assert board.marked_count() == 5


def test_match_rejects_occupied_square(x, o):
    engine = MatchEngine(
        Board(3),
        [HumanStrategy(x, scripted([1])), HumanStrategy(o, scripted([1]))],
        first_player=x
    )
    with pytest.raises(InvalidMove):
        engine.play()


def test_match_rejects_out_of_range_square(x, o):
    engine = MatchEngine(
        Board(3),
        [HumanStrategy(x, scripted([10])), HumanStrategy(o, scripted([]))],
        first_player=x
    )
    with pytest.raises(InvalidMove):
        engine.step()


def test_match_needs_distinct_markers():
    a = Player("A", "X")
    b = Player("B", "X")
    with pytest.raises(InvalidConfiguration):
        MatchEngine(Board(3), [HumanStrategy(a, first_open), HumanStrategy(b, first_open)], a)


def test_match_first_player_must_play(x, o):
    stranger = Player("Stranger", "S")
    with pytest.raises(InvalidConfiguration):
        MatchEngine(Board(3), [HumanStrategy(x, first_open), HumanStrategy(o, first_open)], stranger)


@pytest.mark.parametrize("size", [2, 3, 4, 5])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_computer_match_ends_within_board_size(size, seed):
    rng = random.Random(seed)
    a = Player("A", "A", is_computer=True)
    b = Player("B", "B", is_computer=True)
    engine = MatchEngine(
        Board(size),
        [ComputerStrategy(a, opponent=b, rng=rng), ComputerStrategy(b, opponent=a, rng=rng)],
        first_player=a
    )

    engine.play()

    assert engine.is_decided
    assert engine.turns <= size * size


def test_computer_blocks_in_live_match(x, o):
    # X threatens 3; the computer must block before X can finish
    engine = MatchEngine(
        Board(3),
        [HumanStrategy(x, scripted([1, 2, 9, 4, 8, 6])), ComputerStrategy(o, opponent=x)],
        first_player=x
    )
    engine.step()  # X: 1
    engine.step()  # O: center
    engine.step()  # X: 2
    engine.step()  # O: block

    assert engine.board[5].player is o
    assert engine.board[3].player is o


# ==================== SERIES CONTROLLER ====================

def test_series_stops_at_winning_score(x, o):
    # First available square always wins for the starter on 3x3
    rng = ScriptedRandom([x, o, x, x])
    display = RecordingDisplay()
    series = SeriesController(
        [HumanStrategy(x, first_open), HumanStrategy(o, first_open)],
        board_size=3,
        winning_score=3,
        rng=rng,
        display=display
    )

    winner = series.run_series()

    assert winner is x
    assert series.series_winner is x
    assert x.score == 3
    assert o.score == 1
    assert len(series.matches) == 4
    assert [result.winner for result in series.matches] == [x, o, x, x]
    assert display.names().count("match_decided") == 4
    assert display.names()[-1] == "series_decided"
    assert display.last("series_decided") is x
    assert rng.picks == []


def test_series_plays_no_match_after_winner(x, o):
    series = SeriesController(
        [HumanStrategy(x, first_open), HumanStrategy(o, first_open)],
        winning_score=1,
        rng=ScriptedRandom([o])
    )
    assert series.run_series() is o

    with pytest.raises(RuntimeError):
        series.play_match()
    assert len(series.matches) == 1


def test_series_fresh_board_each_match(x, o):
    series = SeriesController(
        [HumanStrategy(x, first_open), HumanStrategy(o, first_open)],
        board_size=4,
        winning_score=2,
        rng=ScriptedRandom([x, x])
    )

    series.play_match()
    first_board = series.board
    series.play_match()

    assert series.board is not first_board
    assert series.board.size == 4
    assert series.current_starter is x


def test_computer_series_terminates():
    a = Player("A", "A", is_computer=True)
    b = Player("B", "B", is_computer=True)
    rng = random.Random(3)
    series = SeriesController(
        [ComputerStrategy(a, opponent=b, rng=rng), ComputerStrategy(b, opponent=a, rng=rng)],
        board_size=2,
        winning_score=3,
        rng=rng
    )

    winner = series.run_series()

    assert winner.score == 3
    loser = b if winner is a else a
    assert loser.score < 3
    assert len(series.matches) == winner.score + loser.score


def test_series_reset_scores(x, o):
    series = SeriesController(
        [HumanStrategy(x, first_open), HumanStrategy(o, first_open)],
        winning_score=1,
        rng=ScriptedRandom([x, o])
    )
    series.run_series()
    series.reset_scores()

    assert series.scores() == {"Player": 0, "Computer": 0}
    assert series.matches == []
    assert series.run_series() is o


@pytest.mark.parametrize("winning_score", [0, -1, "3", True])
def test_series_rejects_bad_winning_score(x, o, winning_score):
    with pytest.raises(InvalidConfiguration):
        SeriesController(
            [HumanStrategy(x, first_open), HumanStrategy(o, first_open)],
            winning_score=winning_score
        )


def test_series_rejects_bad_board_size(x, o):
    with pytest.raises(InvalidConfiguration):
        SeriesController(
            [HumanStrategy(x, first_open), HumanStrategy(o, first_open)],
            board_size=11
        )


def test_series_rejects_shared_marker():
    a = Player("A", "X")
    b = Player("B", "X")
    with pytest.raises(InvalidConfiguration):
        SeriesController([HumanStrategy(a, first_open), HumanStrategy(b, first_open)])


def test_series_rejects_same_player_twice(x):
    with pytest.raises(InvalidConfiguration):
        SeriesController([HumanStrategy(x, first_open), HumanStrategy(x, first_open)])


def test_series_from_config():
    config = GameConfig(board_size=4, user_marker="A", computer_marker="B",
                        winning_score=2, user_name="Ada", response_time=0)
    series = SeriesController.from_config(config, first_open, rng=random.Random(0))

    user, computer = series.players
    assert (user.name, user.marker, user.is_computer) == ("Ada", "A", False)
    assert (computer.name, computer.marker, computer.is_computer) == ("Computer", "B", True)
    assert isinstance(series.strategies[0], HumanStrategy)
    assert isinstance(series.strategies[1], ComputerStrategy)
    assert series.strategies[1].opponent is user
    assert series.board_size == 4
    assert series.winning_score == 2


def test_config_series_on_small_board():
    # On 2x2 whoever starts wins on their second move
    config = GameConfig(board_size=2, winning_score=2, response_time=0)
    series = SeriesController.from_config(config, first_open, rng=random.Random(5))

    winner = series.run_series()

    assert winner.score == 2
    assert all(not result.is_tie for result in series.matches)


# ==================== CONFIGURATION ====================

def test_config_defaults():
    config = GameConfig()
    assert config.board_size == 3
    assert config.user_marker == "X"
    assert config.computer_marker == "O"
    assert config.winning_score == 3


@pytest.mark.parametrize("overrides", [
    {"board_size": 1},
    {"board_size": 11},
    {"board_size": "3"},
    {"user_marker": ""},
    {"user_marker": "XX"},
    {"user_marker": " "},
    {"computer_marker": "X"},
    {"winning_score": 0},
    {"user_name": "   "},
    {"response_time": -1},
    {"response_time": "fast"},
    {"response_time": None},
    {"user_marker": "_"},
    {"computer_marker": "_"},
])
def test_config_rejects_bad_values(overrides):
    with pytest.raises(InvalidConfiguration):
        GameConfig(**overrides)


def test_config_from_args():
    args = main.build_parser().parse_args(
        ["--size", "5", "--marker", "#", "--winning-score", "2", "--name", "Ada", "--no-delay"]
    )
    config = GameConfig.from_args(args)

    assert config.board_size == 5
    assert config.user_marker == "#"
    assert config.computer_marker == "O"
    assert config.winning_score == 2
    assert config.user_name == "Ada"
    assert config.response_time == 0.0


# ==================== MOVE VALIDATOR ====================

def test_validator(x):
    board = Board(3)
    board.mark(5, x)
    validator = MoveValidator()

    assert validator.validate_input(board, " 4 ").index == 4
    assert not validator.validate_input(board, "four").is_valid
    assert not validator.validate_input(board, "0").is_valid
    assert not validator.validate_input(board, "10").is_valid

    taken = validator.validate_input(board, "5")
    assert not taken.is_valid
    assert "taken" in taken.error_message
    assert 5 not in validator.get_valid_moves(board)


# ==================== CONSOLE ====================

class FakeTerminal:
    """Answers prompts the way a player would, and records output."""

    def __init__(self, answers=None, play_again=False):
        self.lines = []
        self.answers = list(answers or [])
        self.play_again = play_again

    def output(self, line):
        self.lines.append(line)

    def input(self, _prompt=""):
        if self.answers:
            return self.answers.pop(0)

        last = self.lines[-1]
        if "Choose an empty square" in last:
            return last.split("(")[1].split(",")[0].rstrip(")")
        if "play again" in last:
            return "y" if self.play_again else "n"
        return ""


def test_render_board(x, o):
    board = Board(3)
    board.mark(1, x)
    board.mark(9, o)
    assert render_board(board) == "|X|_|_|\n|_|_|_|\n|_|_|O|"


def test_tutorial_legend():
    assert tutorial_legend(3) == "|1|2|3|\n|4|5|6|\n|7|8|9|"
    assert tutorial_legend(4).splitlines()[0] == "| 1| 2| 3| 4|"
    assert tutorial_legend(4).splitlines()[3] == "|13|14|15|16|"


def test_result_message(x):
    assert result_message(MatchResult.tie()) == "It's a tie!"
    assert result_message(MatchResult.win(x)) == "Player won!"


def test_choose_square_asks_again(x):
    board = Board(3)
    board.mark(5, x)
    terminal = FakeTerminal(answers=["abc", "5", "12", "6"])
    console_input = ConsoleInput(terminal.input, terminal.output)

    assert console_input.choose_square(board) == 6
    assert sum("not a valid choice" in line for line in terminal.lines) == 3


def test_ask_yes_no():
    terminal = FakeTerminal(answers=["maybe", "Y"])
    assert ConsoleInput(terminal.input, terminal.output).ask_yes_no() is True


def test_ask_board_size_rejects_other_digits():
    terminal = FakeTerminal(answers=["\u00b2", "4"])
    console_input = ConsoleInput(terminal.input, terminal.output)

    assert console_input.ask_board_size() == 4
    assert sum("not a valid choice" in line for line in terminal.lines) == 1


def test_ask_marker_rejects_empty_symbol():
    terminal = FakeTerminal(answers=["_", "#"])
    console_input = ConsoleInput(terminal.input, terminal.output)

    assert console_input.ask_marker(taken="O") == "#"


def test_interactive_setup():
    terminal = FakeTerminal(answers=["Ada", "12", "4", "O", "@"])
    config = interactive_setup(ConsoleInput(terminal.input, terminal.output), GameConfig())

    assert config.user_name == "Ada"
    assert config.board_size == 4
    assert config.user_marker == "@"


def test_console_display_events(x, o):
    terminal = FakeTerminal()
    display = ConsoleDisplay(x, o, clear_screen=False, output=terminal.output)
    board = Board(3)
    for index in (1, 2, 3):
        board.mark(index, x)

    display.board_updated(board)
    display.match_decided(MatchResult.win(x), [x, o])
    display.series_decided(x)

    text = "\n".join(terminal.lines)
    assert "You're X. The computer is O." in text
    assert "|X|X|X|" in text
    assert "Winning line: 1, 2, 3" in text
    assert "Player won!" in text
    assert "Player wins the series" in text


def test_play_full_session(capsys):
    terminal = FakeTerminal()
    config = GameConfig(board_size=2, winning_score=1, response_time=0)

    main.play(config, ConsoleInput(terminal.input, terminal.output), random.Random(0),
              clear_screen=False)

    out = capsys.readouterr().out
    assert "Welcome to Tic Tac Toe!" in out
    assert "wins the series" in out
    assert "Goodbye" in out


def test_main_runs_a_series(monkeypatch, capsys):
    terminal = FakeTerminal()
    monkeypatch.setattr(main, "ConsoleInput", lambda: ConsoleInput(terminal.input, terminal.output))

    status = main.main(["--size", "2", "--winning-score", "2", "--no-delay", "--no-clear",
                        "--seed", "4"])

    assert status == 0
    assert "wins the series with 2 points" in capsys.readouterr().out


def test_main_reports_bad_config(capsys):
    assert main.main(["--size", "11", "--no-clear"]) == 1
    assert "ERROR" in capsys.readouterr().out


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
