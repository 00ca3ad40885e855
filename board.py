# board.py
import logging
from typing import Union

import numpy as np

import core_game as cg
from errors import BoardOverflow, InvalidPlacement

logger = logging.getLogger(__name__)


class Board:
    """A 10-wide well that pieces are dropped into, one simulation's worth of state."""

    cols = cg.WIDTH

    def __init__(self, max_height: int = cg.HEIGHT):
        if max_height < 1:
            raise ValueError(f"max_height must be positive, got {max_height}")
        self.rows = max_height
        self.grid = cg.create_grid(max_height, self.cols)
        self._height = 0
        self.lines_cleared = 0
        self.pieces_placed = 0

    def place(self, kind: Union[cg.PieceKind, str], column: int) -> int:
        """
        Drop a piece with its leftmost cell in `column`, lock it, clear full rows.
        Returns the new height.
        """
        shape = cg.shape_of(kind)
        if column < 0 or column + shape.width > self.cols:
            raise InvalidPlacement(
                f"{shape.kind.value} at column {column} spans columns "
                f"{column}..{column + shape.width - 1}, board has 0..{self.cols - 1}"
            )

        y = cg.get_drop_y(self.grid, shape.mask, column)
        if y < 0:
            raise BoardOverflow(
                f"{shape.kind.value} at column {column} would rest above row {self.rows}"
            )

        cg.lock_piece(self.grid, shape.mask, column, y)
        self.pieces_placed += 1

        self.grid, cleared = cg.clear_lines(self.grid)
        if cleared:
            self.lines_cleared += cleared
            logger.debug("%s%d cleared %d row(s)", shape.kind.value, column, cleared)

        self._height = cg.grid_height(self.grid)
        return self._height

    def height(self) -> int:
        return self._height

    def is_empty(self) -> bool:
        return self._height == 0

    def cells(self) -> np.ndarray:
        # read-only copy, row 0 is the top of the well
        view = self.grid.copy()
        view.setflags(write=False)
        return view
