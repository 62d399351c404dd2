"""Collision, rotation and timing helpers shared by the session."""

from __future__ import annotations

import logging
from typing import List, Optional

from .board import Board
from .tetromino import ActivePiece, Cell, kick_offset, rotate_cases


LOGGER = logging.getLogger(__name__)

# Positions tried, relative to the kicked placement, when a rotation collides.
WALL_KICKS = ((0, 0), (-1, 0), (1, 0), (0, -1))


def fall_interval(level: int) -> float:
    """Return the gravity interval in seconds for ``level``.

    ``(0.8 - 0.007 * (level - 1)) ** (level - 1)``.  The exponent is zero at
    level one so the first level always falls once per second.
    """

    if level < 1:
        raise ValueError(f"Level must be at least 1, got {level}")
    return (0.8 - 0.007 * (level - 1)) ** (level - 1)


def check_collision(board: Board, piece: ActivePiece, dx: int, dy: int) -> bool:
    """Return ``True`` if ``piece`` would collide after moving by ``dx``, ``dy``.

    A collision is any filled cell of the shape landing outside the board
    (left, right, bottom or above the top row) or on a locked cell.  The piece
    itself is not modified.
    """

    left, top, right, bottom = piece.bounding_box()
    left, top = left + dx, top + dy
    if left < 0 or right + dx > board.width:
        return True
    if top < 0 or bottom + dy > board.height:
        return True

    for cy, row in enumerate(piece.cases):
        for cx, cell in enumerate(row):
            if cell != Cell.EMPTY and board.is_blocked(left + cx, top + cy):
                return True
    return False


def try_rotate(board: Board, piece: ActivePiece) -> bool:
    """Rotate ``piece`` clockwise in place, kicking it off walls if needed.

    The kick offset for the current rotation index is applied first (with the
    row clamped to the top of the board), then the placements in
    ``WALL_KICKS`` are tried in order.  When none of them fit the piece is
    left untouched and ``False`` is returned.
    """

    dx, dy = kick_offset(piece.kind, piece.rotation)
    candidate = ActivePiece(
        piece.kind,
        x=piece.x + dx,
        y=max(0, piece.y + dy),
        cases=rotate_cases(piece.cases),
        rotation=(piece.rotation + 1) % 4,
        fall_timer=piece.fall_timer,
    )

    for kx, ky in WALL_KICKS:
        if not check_collision(board, candidate, kx, ky):
            piece.x = candidate.x + kx
            piece.y = candidate.y + ky
            piece.cases = candidate.cases
            piece.rotation = candidate.rotation
            return True

    LOGGER.debug("Rotation of %s at (%d, %d) rejected", piece.kind.value, piece.x, piece.y)
    return False


def ghost_y(board: Board, piece: ActivePiece) -> int:
    """Return the row where ``piece`` would come to rest if dropped.

    Scans downward offsets until the first collision; the resting row is the
    offset just before it.
    """

    for offset in range(board.height + 2):
        if check_collision(board, piece, 0, offset):
            return piece.y + offset - 1
    return piece.y + board.height + 1


def render_grid(board: Board, active: Optional[ActivePiece] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece).
    """

    grid = [[int(value) for value in row] for row in board.grid]
    if active is not None:
        for cy, row in enumerate(active.cases):
            for cx, cell in enumerate(row):
                x, y = active.x + cx, active.y + cy
                if cell != Cell.EMPTY and 0 <= y < board.height and 0 <= x < board.width:
                    grid[y][x] = int(cell)
    return grid
