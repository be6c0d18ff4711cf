"""
Game configuration for TicTacToe.
Board size, markers, names and the score needed to win a series.
"""

from .board import MIN_SIZE, MAX_SIZE, Square
from .errors import InvalidConfiguration


class GameConfig:
    """
    Settings for a series.

    The class attributes are the defaults; pass keyword arguments to
    override them. Settings are checked on construction.
    """

    # ==================== BOARD SETTINGS ====================
    MIN_BOARD_SIZE = MIN_SIZE
    MAX_BOARD_SIZE = MAX_SIZE
    DEFAULT_BOARD_SIZE = 3

    # ==================== PLAYER SETTINGS ====================
    DEFAULT_USER_NAME = "Player"
    COMPUTER_NAME = "Computer"
    DEFAULT_USER_MARKER = "X"
    DEFAULT_COMPUTER_MARKER = "O"

    # ==================== SERIES SETTINGS ====================
    DEFAULT_WINNING_SCORE = 3

    # Seconds the computer "thinks" before moving (0 = instant)
    RESPONSE_TIME = 1.0

    def __init__(
        self,
        board_size: int = DEFAULT_BOARD_SIZE,
        user_marker: str = DEFAULT_USER_MARKER,
        computer_marker: str = DEFAULT_COMPUTER_MARKER,
        winning_score: int = DEFAULT_WINNING_SCORE,
        user_name: str = DEFAULT_USER_NAME,
        computer_name: str = COMPUTER_NAME,
        response_time: float = RESPONSE_TIME
    ):
        self.board_size = board_size
        self.user_marker = user_marker
        self.computer_marker = computer_marker
        self.winning_score = winning_score
        self.user_name = user_name
        self.computer_name = computer_name
        self.response_time = response_time

        self.validate()

    def validate(self):
        """
        Check every setting.

        Raises:
            InvalidConfiguration: On the first setting that is out of range.
        """
        if not self._is_int(self.board_size):
            raise InvalidConfiguration(f"Board size must be an integer, got {self.board_size!r}")
        if not self.MIN_BOARD_SIZE <= self.board_size <= self.MAX_BOARD_SIZE:
            raise InvalidConfiguration(
                f"Board size must be between {self.MIN_BOARD_SIZE} and "
                f"{self.MAX_BOARD_SIZE}, got {self.board_size}"
            )

        for label, marker in (("User", self.user_marker), ("Computer", self.computer_marker)):
            if not self.is_valid_marker(marker):
                raise InvalidConfiguration(
                    f"{label} marker must be a single visible character, got {marker!r}"
                )
        if self.user_marker == self.computer_marker:
            raise InvalidConfiguration(
                f"Players need different markers, both are {self.user_marker!r}"
            )

        if not self._is_int(self.winning_score) or self.winning_score < 1:
            raise InvalidConfiguration(
                f"Winning score must be a positive integer, got {self.winning_score!r}"
            )

        for label, name in (("User", self.user_name), ("Computer", self.computer_name)):
            if not isinstance(name, str) or not name.strip():
                raise InvalidConfiguration(f"{label} name must not be blank")

        if isinstance(self.response_time, bool) or not isinstance(self.response_time, (int, float)):
            raise InvalidConfiguration(
                f"Response time must be a number, got {self.response_time!r}"
            )
        if self.response_time < 0:
            raise InvalidConfiguration(
                f"Response time must not be negative, got {self.response_time}"
            )

    @staticmethod
    def is_valid_marker(marker) -> bool:
        """A marker is exactly one visible character that isn't the empty-square symbol."""
        return (
            isinstance(marker, str)
            and len(marker) == 1
            and not marker.isspace()
            and marker != Square.EMPTY_SYMBOL
        )

    @staticmethod
    def _is_int(value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    @classmethod
    def from_args(cls, args) -> "GameConfig":
        """
        Build a config from parsed command line arguments.

        Args:
            args: argparse namespace with size, marker, computer_marker,
                winning_score, name and no_delay.
        """
        return cls(
            board_size=args.size,
            user_marker=args.marker,
            computer_marker=args.computer_marker,
            winning_score=args.winning_score,
            user_name=args.name,
            response_time=0.0 if args.no_delay else cls.RESPONSE_TIME
        )

    def __repr__(self) -> str:
        return (
            f"GameConfig(board_size={self.board_size}, user_marker={self.user_marker!r}, "
            f"computer_marker={self.computer_marker!r}, winning_score={self.winning_score})"
        )
