"""
Game engine for Gomoku (five in a row).

Black moves first. A stone that completes a run of exactly five along any
axis wins; a full board without a winner is a draw. Cells are stored two
bits each in a BitPack, using the Stone enum values as cell codes.

Moves are 0-based cell indices ``row * size + col``. Helpers that take
coordinates (move_at, play) use 1-based rows and columns, the way moves are
entered and printed.
"""

import logging
from typing import List, Optional

import numpy as np

from board_ai.config import (
    GOMOKU_CELL_BITS,
    GOMOKU_DEFAULT_BOARD_SIZE,
    GOMOKU_MAX_BOARD_SIZE,
    GOMOKU_MIN_BOARD_SIZE,
    GOMOKU_WIN_LENGTH,
)
from board_ai.enums import Stone
from board_ai.error_handling import IllegalMoveError
from board_ai.games.bitpack import BitPack
from board_ai.games.lines import line_lists

logger = logging.getLogger(__name__)

EMPTY = 0b00

SYMBOLS = {EMPTY: ".", Stone.BLACK.value: "@", Stone.WHITE.value: "O"}


class GomokuBoard:
    """
    Gomoku position implementing the GamePosition contract.

    Args:
        size: Board side length, between 5 and 181.
    """

    __slots__ = ("size", "_cells", "_current_player", "_winner", "_num_moves", "_lines")

    def __init__(self, size: int = GOMOKU_DEFAULT_BOARD_SIZE):
        if not GOMOKU_MIN_BOARD_SIZE <= size <= GOMOKU_MAX_BOARD_SIZE:
            raise ValueError(
                f"Gomoku board size must be in [{GOMOKU_MIN_BOARD_SIZE}, {GOMOKU_MAX_BOARD_SIZE}], got {size}"
            )
        self.size = size
        self._lines = line_lists(size, GOMOKU_WIN_LENGTH + 1)
        self.reset()

    def reset(self) -> None:
        self._cells = BitPack(GOMOKU_CELL_BITS, self.size * self.size)
        self._current_player: Optional[Stone] = Stone.BLACK
        self._winner: Optional[Stone] = None
        self._num_moves = 0

    # ---------- Game contract ----------

    @property
    def current_player(self) -> Optional[Stone]:
        return self._current_player

    @property
    def winner(self) -> Optional[Stone]:
        return self._winner

    def is_finished(self) -> bool:
        return self._current_player is None

    def is_draw(self) -> bool:
        return self.is_finished() and self._winner is None

    def legal_moves(self) -> List[int]:
        if self.is_finished():
            return []
        get = self._cells.get
        return [m for m in range(self.size * self.size) if get(m) == EMPTY]

    def apply_move(self, move: int) -> None:
        if not self.is_legal_move(move):
            raise IllegalMoveError(move, self._illegal_reason(move))
        self._cells.set(move, self._current_player.value)
        self._num_moves += 1
        self._current_player = self._current_player.opponent()
        self._check_winner(move)

    def clone(self) -> "GomokuBoard":
        new = GomokuBoard.__new__(GomokuBoard)
        new.size = self.size
        new._lines = self._lines
        new._cells = self._cells.copy()
        new._current_player = self._current_player
        new._winner = self._winner
        new._num_moves = self._num_moves
        return new

    # ---------- Queries ----------

    def is_legal_move(self, move) -> bool:
        return (
            not self.is_finished()
            and isinstance(move, (int, np.integer))
            and 0 <= move < self.size * self.size
            and self._cells.get(move) == EMPTY
        )

    def cell(self, move: int) -> Optional[Stone]:
        v = self._cells.get(move)
        return None if v == EMPTY else Stone(v)

    @property
    def num_moves(self) -> int:
        return self._num_moves

    def move_at(self, row: int, col: int) -> int:
        """Cell index for 1-based (row, col)."""
        if not (1 <= row <= self.size and 1 <= col <= self.size):
            raise ValueError(f"Position ({row}, {col}) is off a {self.size}x{self.size} board")
        return (row - 1) * self.size + (col - 1)

    def play(self, row: int, col: int) -> None:
        """Apply the move at 1-based (row, col)."""
        self.apply_move(self.move_at(row, col))

    def format_move(self, move) -> str:
        if move is None:
            return "(none)"
        row, col = divmod(int(move), self.size)
        return f"({row + 1}, {col + 1})"

    def to_array(self) -> np.ndarray:
        """Cell codes as a (size, size) uint8 array."""
        return self._cells.to_numpy().reshape(self.size, self.size)

    # ---------- Internals ----------

    def _illegal_reason(self, move) -> str:
        if self.is_finished():
            return "game is finished"
        if not isinstance(move, (int, np.integer)) or not 0 <= move < self.size * self.size:
            return f"off a {self.size}x{self.size} board"
        return "cell is occupied"

    def _check_winner(self, move: int) -> None:
        get = self._cells.get
        v = get(move)
        for axis in self._lines[move]:
            run = 1
            for ray in axis:
                for i in ray:
                    if get(i) != v:
                        break
                    run += 1
            if run == GOMOKU_WIN_LENGTH:
                self._current_player = None
                self._winner = Stone(v)
                return
        if self._num_moves == self.size * self.size:
            # board is full
            self._current_player = None
            self._winner = None

    def __str__(self):
        get = self._cells.get
        rows = []
        for r in range(self.size):
            rows.append("".join(SYMBOLS[get(r * self.size + c)] for c in range(self.size)))
        return "\n".join(rows)

    def __repr__(self):
        return f"GomokuBoard(size={self.size}, moves={self._num_moves}, to_move={self._current_player})"
