"""Board representation for the playfield."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .tetromino import ActivePiece, Cell


# Dimensions of the playfield.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with ``Cell.EMPTY``."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Locked cells of the playfield, indexed ``grid[y, x]``.

    The board knows nothing about the falling piece; its cells only become
    part of the grid once :meth:`lock_piece` is called.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def get_cell(self, x: int, y: int) -> Cell:
        """Safely return the cell at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= x < self.width and 0 <= y < self.height:
            return Cell(int(self.grid[y, x]))
        raise IndexError("Cell out of bounds")

    def set_cell(self, x: int, y: int, value: Cell) -> None:
        """Safely set the cell at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= x < self.width and 0 <= y < self.height:
            self.grid[y, x] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_blocked(self, x: int, y: int) -> bool:
        """Return ``True`` if ``(x, y)`` is off the board or already filled.

        Treating off-board positions as occupied lets collision checks reject
        them without a separate bounds test.
        """

        if 0 <= x < self.width and 0 <= y < self.height:
            return bool(self.grid[y, x] != Cell.EMPTY)
        return True

    def lock_piece(self, piece: ActivePiece) -> None:
        """Write the piece's filled cells into the grid.

        Overlapping cells are overwritten; callers check for collisions before
        locking.
        """

        coordinates = np.asarray(piece.blocks(), dtype=np.int16)
        if coordinates.size == 0:
            return

        xs, ys = coordinates.T
        if (
            np.any(xs < 0)
            or np.any(xs >= self.width)
            or np.any(ys < 0)
            or np.any(ys >= self.height)
        ):
            raise IndexError("Block out of bounds")

        for cy, row in enumerate(piece.cases):
            for cx, cell in enumerate(row):
                if cell != Cell.EMPTY:
                    self.grid[piece.y + cy, piece.x + cx] = np.uint8(cell)

    def clear_full_lines(self) -> int:
        """Clear completed rows and return how many were removed.

        Remaining rows keep their relative order and drop down; the freed rows
        at the top come back empty.
        """

        full = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full))
        if cleared:
            remaining = self.grid[~full]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def clear(self) -> None:
        self.grid = create_empty_grid()

    def copy_grid(self) -> Grid:
        """Return a read-only copy of the grid for renderers."""

        grid = self.grid.copy()
        grid.flags.writeable = False
        return grid
