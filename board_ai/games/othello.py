"""
Game engine for Othello (disc flipping).

Dark moves first from the standard four-disc centre. A move must bracket at
least one line of opponent discs, and every bracketed line is flipped. If
the opponent then has no move the same player moves again; when neither
side can move the game ends and the side with more discs wins.

Each cell is a 3-bit code. Occupied cells hold a Disc value (low bit set).
Empty cells additionally record who may place there, recomputed after every
move, so legal_moves() is a single scan:

    0b000  nobody may place      0b010  dark may place
    0b100  light may place       0b110  both may place
"""

import logging
from typing import List, Optional

import numpy as np

from board_ai.config import (
    OTHELLO_CELL_BITS,
    OTHELLO_DEFAULT_BOARD_SIZE,
    OTHELLO_MAX_BOARD_SIZE,
    OTHELLO_MIN_BOARD_SIZE,
)
from board_ai.enums import Disc
from board_ai.error_handling import IllegalMoveError
from board_ai.games.bitpack import BitPack
from board_ai.games.lines import line_lists

logger = logging.getLogger(__name__)

NONE = 0b000
NONE_DARK = 0b010
NONE_LIGHT = 0b100
NONE_BOTH = 0b110

SYMBOLS = {Disc.DARK.value: "@", Disc.LIGHT.value: "O"}


def is_empty(v: int) -> bool:
    return (v & 0b001) == 0


def placeable_mark(player: Disc) -> int:
    """Empty-cell code meaning ``player`` may place here."""
    return player.value ^ 0b011


def can_be_placed(v: int, player: Disc) -> bool:
    return v == placeable_mark(player) or v == NONE_BOTH


class OthelloBoard:
    """
    Othello position implementing the GamePosition contract.

    Args:
        size: Even board side length, between 4 and 10.
    """

    __slots__ = ("size", "_cells", "_current_player", "_winner", "num_dark", "num_light", "_lines")

    def __init__(self, size: int = OTHELLO_DEFAULT_BOARD_SIZE):
        if not OTHELLO_MIN_BOARD_SIZE <= size <= OTHELLO_MAX_BOARD_SIZE or size % 2:
            raise ValueError(
                f"Othello board size must be even and in [{OTHELLO_MIN_BOARD_SIZE}, "
                f"{OTHELLO_MAX_BOARD_SIZE}], got {size}"
            )
        self.size = size
        self._lines = line_lists(size, size - 1)
        self.reset()

    def reset(self) -> None:
        self._cells = BitPack(OTHELLO_CELL_BITS, self.size * self.size)
        self._current_player: Optional[Disc] = Disc.DARK
        self._winner: Optional[Disc] = None
        self.num_dark = 2
        self.num_light = 2
        self._starting_position()

    def _starting_position(self) -> None:
        k = self.size // 2
        cells = self._cells
        at = self.move_at
        cells.set(at(k, k + 1), Disc.DARK.value)
        cells.set(at(k + 1, k), Disc.DARK.value)
        cells.set(at(k, k), Disc.LIGHT.value)
        cells.set(at(k + 1, k + 1), Disc.LIGHT.value)

        cells.set(at(k - 1, k), NONE_DARK)
        cells.set(at(k, k - 1), NONE_DARK)
        cells.set(at(k + 1, k + 2), NONE_DARK)
        cells.set(at(k + 2, k + 1), NONE_DARK)

        cells.set(at(k - 1, k + 1), NONE_LIGHT)
        cells.set(at(k, k + 2), NONE_LIGHT)
        cells.set(at(k + 1, k - 1), NONE_LIGHT)
        cells.set(at(k + 2, k), NONE_LIGHT)

    # ---------- Game contract ----------

    @property
    def current_player(self) -> Optional[Disc]:
        return self._current_player

    @property
    def winner(self) -> Optional[Disc]:
        return self._winner

    def is_finished(self) -> bool:
        return self._current_player is None

    def is_draw(self) -> bool:
        return self.is_finished() and self._winner is None

    def legal_moves(self) -> List[int]:
        player = self._current_player
        if player is None:
            return []
        get = self._cells.get
        mark = placeable_mark(player)
        return [m for m in range(self.size * self.size) if get(m) in (mark, NONE_BOTH)]

    def apply_move(self, move: int) -> None:
        if not self.is_legal_move(move):
            raise IllegalMoveError(move, "game is finished" if self.is_finished() else "nothing to flip there")
        p = self._current_player
        q = p.opponent()
        self._place_and_flip(move, p, q)
        p_can_move, q_can_move = self._mark_placeable_cells(p, q)
        if q_can_move:
            self._current_player = q
        elif p_can_move:
            logger.debug(f"{q.name} has no legal move and passes")
            self._current_player = p
        else:
            self._finish()

    @classmethod
    def from_rows(cls, rows: List[str], current_player: Disc = Disc.DARK) -> "OthelloBoard":
        """
        Build a position from text rows using '@' (dark), 'O' (light) and '.'.

        If ``current_player`` has no move the opponent is to move instead; if
        neither has one the position is finished.
        """
        board = cls(len(rows))
        if any(len(row) != board.size for row in rows):
            raise ValueError(f"Expected {board.size} rows of {board.size} cells")
        codes = {'@': Disc.DARK.value, 'O': Disc.LIGHT.value, '.': NONE}
        board._cells.clear()
        for r, row in enumerate(rows):
            for c, ch in enumerate(row):
                if ch not in codes:
                    raise ValueError(f"Unknown cell symbol {ch!r}")
                board._cells.set(r * board.size + c, codes[ch])
        board.num_dark = sum(row.count('@') for row in rows)
        board.num_light = sum(row.count('O') for row in rows)
        p, q = current_player, current_player.opponent()
        p_can_move, q_can_move = board._mark_placeable_cells(p, q)
        if p_can_move:
            board._current_player = p
        elif q_can_move:
            board._current_player = q
        else:
            board._finish()
        return board

    def clone(self) -> "OthelloBoard":
        new = OthelloBoard.__new__(OthelloBoard)
        new.size = self.size
        new._lines = self._lines
        new._cells = self._cells.copy()
        new._current_player = self._current_player
        new._winner = self._winner
        new.num_dark = self.num_dark
        new.num_light = self.num_light
        return new

    # ---------- Queries ----------

    def is_legal_move(self, move) -> bool:
        return (
            not self.is_finished()
            and isinstance(move, (int, np.integer))
            and 0 <= move < self.size * self.size
            and can_be_placed(self._cells.get(move), self._current_player)
        )

    def cell(self, move: int) -> Optional[Disc]:
        v = self._cells.get(move)
        return None if is_empty(v) else Disc(v)

    def difference(self, player: Disc) -> int:
        """Disc count of ``player`` minus that of the opponent."""
        if player == Disc.DARK:
            return self.num_dark - self.num_light
        return self.num_light - self.num_dark

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

    def _finish(self) -> None:
        self._current_player = None
        if self.num_dark > self.num_light:
            self._winner = Disc.DARK
        elif self.num_dark < self.num_light:
            self._winner = Disc.LIGHT
        else:
            self._winner = None

    def _place_and_flip(self, move: int, p: Disc, q: Disc) -> None:
        cells = self._cells
        get = cells.get
        p_code, q_code = p.value, q.value
        cells.set(move, p_code)
        flipped = 0
        for axis in self._lines[move]:
            for ray in axis:
                # A ray flips when one or more q discs are capped by a p disc
                run = 0
                bracketed = False
                for i in ray:
                    v = get(i)
                    if v == q_code:
                        run += 1
                    elif v == p_code and run:
                        bracketed = True
                        break
                    else:
                        break
                if bracketed:
                    for i in ray[:run]:
                        cells.set(i, p_code)
                    flipped += run
        if p == Disc.DARK:
            self.num_dark += 1 + flipped
            self.num_light -= flipped
        else:
            self.num_light += 1 + flipped
            self.num_dark -= flipped

    def _mark_placeable_cells(self, p: Disc, q: Disc):
        """Recompute who may place on every empty cell; report whether p and q can move."""
        cells = self._cells
        get = cells.get
        p_mark, q_mark = placeable_mark(p), placeable_mark(q)
        p_can_move = False
        q_can_move = False
        for m in range(self.size * self.size):
            if not is_empty(get(m)):
                continue
            mark = NONE
            for axis in self._lines[m]:
                for ray in axis:
                    if not ray:
                        continue
                    first = get(ray[0])
                    if is_empty(first):
                        continue
                    # The side opposite the first disc may place if it caps the run
                    capper = Disc(first).opponent().value
                    for i in ray[1:]:
                        v = get(i)
                        if v == first:
                            continue
                        if v == capper:
                            mark |= capper ^ 0b011
                        break
                if mark == NONE_BOTH:
                    break
            cells.set(m, mark)
            if mark == p_mark or mark == NONE_BOTH:
                p_can_move = True
            if mark == q_mark or mark == NONE_BOTH:
                q_can_move = True
        return p_can_move, q_can_move

    def __str__(self):
        get = self._cells.get
        rows = []
        for r in range(self.size):
            rows.append("".join(SYMBOLS.get(get(r * self.size + c), ".") for c in range(self.size)))
        rows.append(f"Dark: {self.num_dark}")
        rows.append(f"Light: {self.num_light}")
        return "\n".join(rows)

    def __repr__(self):
        return (f"OthelloBoard(size={self.size}, dark={self.num_dark}, "
                f"light={self.num_light}, to_move={self._current_player})")
