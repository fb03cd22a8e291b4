"""
Text display for play_game().

Verbosity levels:
    0  game start and result only
    1  also each move as it is played
    2  also the board before every move (default)
    3  also the full move list at the end
"""

import sys
from typing import Optional, TextIO

from board_ai.config import VERBOSE_LEVEL
from board_ai.enums import Disc, Stone, player_display_name

ANSI_COLORS = {
    'blue': '\033[34m',
    'red': '\033[31m',
    'reset': '\033[0m',
}

# Keyed by member name: Stone and Disc members do not compare with each other
SIDE_COLORS = {
    Stone.BLACK.name: 'blue',
    Disc.DARK.name: 'blue',
    Stone.WHITE.name: 'red',
    Disc.LIGHT.name: 'red',
}


def ansi_colored(text, color):
    return f"{ANSI_COLORS.get(color, '')}{text}{ANSI_COLORS['reset']}"


class BasicDisplay:
    def __init__(self, stream: Optional[TextIO] = None, verbosity: int = VERBOSE_LEVEL,
                 color: Optional[bool] = None):
        self.stream = stream if stream is not None else sys.stdout
        self.verbosity = verbosity
        # Colour only real terminals unless told otherwise
        if color is None:
            isatty = getattr(self.stream, "isatty", None)
            color = bool(isatty and isatty())
        self.color = color

    def set_verbosity(self, verbosity: int) -> None:
        self.verbosity = verbosity

    def _side(self, side) -> str:
        name = player_display_name(side)
        if self.color and side is not None and side.name in SIDE_COLORS:
            return ansi_colored(name, SIDE_COLORS[side.name])
        return name

    def _print(self, *args, **kwargs):
        print(*args, file=self.stream, **kwargs)

    def on_game_start(self, board, first_name: str, second_name: str) -> None:
        first_side = board.current_player
        self._print("A new game has started.")
        self._print(f"Player 1 ({self._side(first_side)}): {first_name}")
        self._print(f"Player 2 ({self._side(first_side.opponent())}): {second_name}")

    def on_before_move(self, board, side, history) -> None:
        if self.verbosity < 2:
            return
        self._print()
        self._print(f"Turn #{len(history) + 1}")
        self._print(f"{self._side(side)}'s move")
        self._print("Board before move:")
        self._print(board)

    def on_after_move(self, board, side, move) -> None:
        if self.verbosity < 1:
            return
        self._print(f"Move: {board.format_move(move)}")

    def on_illegal_move(self, board, side, move) -> None:
        self._print(f"Illegal move: {board.format_move(move)}")

    def on_game_finish(self, board, result) -> None:
        self._print(f"The game has finished after {result.num_moves} moves.")
        self._print(board)
        if result.winner is None:
            self._print("The game was a draw.")
        else:
            self._print(f"{self._side(result.winner)} has won the game.")
        if self.verbosity >= 3:
            self._print("Moves:")
            for i, (side, move) in enumerate(result.history, start=1):
                self._print(f"#{i}: {player_display_name(side)} {board.format_move(move)}")
