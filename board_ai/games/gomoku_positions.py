"""
Known tactical Gomoku positions on a 9×9 board.

Each position is a move sequence (1-based row, col) from the empty board and
the set of moves that solve it. They are meant for eyeballing engine
strength, e.g. ``scripts/play_game.py --position 2``.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from board_ai.games.gomoku import GomokuBoard

POSITION_BOARD_SIZE = 9

Coord = Tuple[int, int]


@dataclass(frozen=True)
class TacticalPosition:
    name: str
    moves: Tuple[Coord, ...]
    solutions: FrozenSet[Coord]
    description: str

    def build(self) -> GomokuBoard:
        board = GomokuBoard(POSITION_BOARD_SIZE)
        for row, col in self.moves:
            board.play(row, col)
        return board

    def solution_moves(self, board: GomokuBoard) -> FrozenSet[int]:
        return frozenset(board.move_at(r, c) for r, c in self.solutions)


POSITIONS: Dict[int, TacticalPosition] = {
    1: TacticalPosition(
        name="open three",
        moves=((5, 6), (5, 5), (6, 5), (6, 4), (7, 4), (4, 7), (8, 3), (9, 2),
               (6, 6), (4, 6), (7, 3), (3, 7), (2, 8), (4, 5)),
        solutions=frozenset({(4, 4), (4, 8)}),
        description="Black to move must stop White's open three on row 4.",
    ),
    2: TacticalPosition(
        name="block the four",
        moves=((5, 5), (6, 5), (5, 4), (5, 6), (7, 4), (4, 7), (6, 4), (8, 4),
               (4, 4), (3, 4), (4, 5), (3, 6), (4, 6), (3, 7), (3, 5), (2, 5),
               (7, 3)),
        solutions=frozenset({(8, 2)}),
        description="White to move.",
    ),
    3: TacticalPosition(
        name="crowded middle game",
        moves=((5, 5), (4, 5), (5, 6), (5, 4), (4, 6), (3, 6), (2, 7), (6, 3),
               (7, 2), (6, 5), (6, 4), (7, 3), (5, 3), (7, 6), (3, 7), (2, 8),
               (8, 7), (7, 5), (5, 7), (7, 7), (7, 4), (4, 3), (3, 2), (4, 7),
               (3, 5), (7, 9), (7, 8), (2, 4), (4, 4)),
        solutions=frozenset({(2, 6), (6, 2)}),
        description="White to move.",
    ),
    4: TacticalPosition(
        name="two defences",
        moves=((6, 5), (5, 5), (5, 6), (4, 4), (7, 4), (4, 7), (6, 6), (4, 6),
               (4, 5), (6, 4), (3, 7), (5, 3), (3, 4), (7, 3), (8, 2)),
        solutions=frozenset({(2, 3), (6, 7)}),
        description="White to move.",
    ),
}


def load_position(number: int) -> Tuple[GomokuBoard, TacticalPosition]:
    if number not in POSITIONS:
        raise KeyError(f"Unknown position {number}; choose from {sorted(POSITIONS)}")
    position = POSITIONS[number]
    return position.build(), position
