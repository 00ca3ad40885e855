# core_game.py (headless, vectorized)
from enum import Enum
from typing import FrozenSet, NamedTuple, Tuple, Union

import numpy as np

WIDTH = 10
# 100 rows of play plus room for the tallest piece
HEIGHT = 100 + 3


class PieceKind(Enum):
    Q = "Q"
    Z = "Z"
    S = "S"
    T = "T"
    I = "I"
    L = "L"
    J = "J"


# One orientation per kind, top row first.
tetrominoes = {
    PieceKind.Q: np.array([[1,1],
                           [1,1]], dtype=np.int8),
    PieceKind.Z: np.array([[1,1,0],
                           [0,1,1]], dtype=np.int8),
    PieceKind.S: np.array([[0,1,1],
                           [1,1,0]], dtype=np.int8),
    PieceKind.T: np.array([[1,1,1],
                           [0,1,0]], dtype=np.int8),
    PieceKind.I: np.array([[1,1,1,1]], dtype=np.int8),
    PieceKind.L: np.array([[1,0],
                           [1,0],
                           [1,1]], dtype=np.int8),
    PieceKind.J: np.array([[0,1],
                           [0,1],
                           [1,1]], dtype=np.int8),
}
for _mask in tetrominoes.values():
    _mask.setflags(write=False)


class Shape(NamedTuple):
    kind: PieceKind
    mask: np.ndarray
    # (column, row) offsets from the lowest-leftmost corner, rows counted upward
    cells: FrozenSet[Tuple[int, int]]
    width: int
    height: int


def _build_shape(kind: PieceKind) -> Shape:
    mask = tetrominoes[kind]
    h, w = mask.shape
    rs, cs = np.nonzero(mask)
    cells = frozenset((int(c), int(h - 1 - r)) for r, c in zip(rs, cs))
    return Shape(kind=kind, mask=mask, cells=cells, width=w, height=h)


_shapes = {kind: _build_shape(kind) for kind in PieceKind}


def shape_of(kind: Union[PieceKind, str]) -> Shape:
    """Look up the fixed shape for a piece kind (enum member or its letter)."""
    return _shapes[PieceKind(kind)]


def create_grid(rows: int = HEIGHT, cols: int = WIDTH) -> np.ndarray:
    return np.zeros((rows, cols), dtype=np.int8)


def column_heights(grid: np.ndarray) -> np.ndarray:
    """Stack height of every column, measured from the floor (last row)."""
    rows = grid.shape[0]
    occ = grid != 0
    any_col = occ.any(axis=0)
    first_occ = np.where(any_col, np.argmax(occ, axis=0), rows)
    return rows - first_occ


def bottom_gaps(shape: np.ndarray) -> np.ndarray:
    """Empty cells under the lowest filled cell of each shape column."""
    return np.argmax(shape[::-1] != 0, axis=0)


def get_drop_y(grid: np.ndarray, shape: np.ndarray, x: int) -> int:
    """
    Compute the row (from the top) at which shape comes to rest when dropped at column x.
    Returns -1 if the resting position does not fit under the top of the grid.
    """
    rows = grid.shape[0]
    h, w = shape.shape
    heights = column_heights(grid[:, x:x+w])
    base = int(np.max(heights - bottom_gaps(shape)))
    y = rows - base - h
    if y < 0:
        return -1
    return y


def lock_piece(grid, shape, x, y, color=1):
    h, w = shape.shape
    region = grid[y:y+h, x:x+w]
    mask = shape != 0
    region[mask] = color
    return grid


def clear_lines(grid):
    full_rows = np.where(np.all(grid != 0, axis=1))[0]
    lines_cleared = len(full_rows)
    if lines_cleared > 0:
        grid = np.delete(grid, full_rows, axis=0)
        new_rows = np.zeros((lines_cleared, grid.shape[1]), dtype=grid.dtype)
        grid = np.vstack((new_rows, grid))
    return grid, lines_cleared


def grid_height(grid: np.ndarray) -> int:
    """Rows from the floor up to the topmost occupied one, 0 when empty."""
    occupied_rows = np.flatnonzero(np.any(grid != 0, axis=1))
    if len(occupied_rows) == 0:
        return 0
    return int(grid.shape[0] - occupied_rows[0])
