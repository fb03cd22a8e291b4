"""
Per-board-size line tables.

For every cell of an n×n board, a line table lists the cells reached by
walking outward along each of the four axes (horizontal, diagonal,
vertical, anti-diagonal), in both directions, up to ``reach`` steps. Steps
that leave the board are -1.

Tables are built once per (n, reach) and shared by every board of that
size.
"""

from functools import lru_cache
from typing import List

import numpy as np

# (d_row, d_col) per axis; direction 0 walks the negated step, direction 1 the step
AXES = ((0, 1), (1, 1), (1, 0), (1, -1))
NUM_AXES = len(AXES)


@lru_cache(maxsize=None)
def build_lines(n: int, reach: int) -> np.ndarray:
    """
    Build the line table for an n×n board.

    Returns:
        int16 array of shape (n*n, 4, 2, reach); entry [m, axis, direction, k]
        is the cell index k+1 steps from m, or -1 past the edge.
    """
    if n <= 0:
        raise ValueError(f"Board size must be positive, got {n}")
    if reach <= 0:
        raise ValueError(f"reach must be positive, got {reach}")
    if n * n > np.iinfo(np.int16).max:
        raise ValueError(f"Board size {n} too large for int16 line tables")
    lines = np.full((n * n, NUM_AXES, 2, reach), -1, dtype=np.int16)
    for m in range(n * n):
        row, col = divmod(m, n)
        for axis, (d_row, d_col) in enumerate(AXES):
            for direction, sign in enumerate((-1, 1)):
                r, c = row + sign * d_row, col + sign * d_col
                for k in range(reach):
                    if not (0 <= r < n and 0 <= c < n):
                        break
                    lines[m, axis, direction, k] = r * n + c
                    r += sign * d_row
                    c += sign * d_col
    lines.setflags(write=False)
    return lines


@lru_cache(maxsize=None)
def line_lists(n: int, reach: int) -> List[List[List[List[int]]]]:
    """
    The same table as nested Python lists with the -1 padding dropped.

    Rays stop at the board edge. Boards walk these once per placed stone.
    """
    table = build_lines(n, reach)
    return [
        [[[int(i) for i in ray if i >= 0] for ray in axis] for axis in cell]
        for cell in table
    ]
