"""Piece catalog and the falling piece.

The seven piece kinds are static data: a shape template made of :class:`Cell`
values plus a four entry table of offsets applied when the piece rotates.
:class:`ActivePiece` is the mutable instance the session moves around the
board until it locks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Tuple

Shape = Tuple[Tuple["Cell", ...], ...]
Offset = Tuple[int, int]


class Cell(IntEnum):
    """Content of a single grid cell.

    ``EMPTY`` is ``0`` so the numpy grid can be tested with ``!= 0``.
    """

    EMPTY = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    YELLOW = 4
    DARK_YELLOW = 5
    PURPLE = 6
    CYAN = 7


class PieceKind(str, Enum):
    """Enumeration of the seven piece kinds."""

    Z = "Z"
    S = "S"
    J = "J"
    L = "L"
    O = "O"
    T = "T"
    I = "I"


def _template(color: Cell, *rows: str) -> Shape:
    return tuple(
        tuple(color if ch == "#" else Cell.EMPTY for ch in row) for row in rows
    )


PIECE_COLORS: Dict[PieceKind, Cell] = {
    PieceKind.Z: Cell.RED,
    PieceKind.S: Cell.GREEN,
    PieceKind.J: Cell.BLUE,
    PieceKind.L: Cell.YELLOW,
    PieceKind.O: Cell.DARK_YELLOW,
    PieceKind.T: Cell.PURPLE,
    PieceKind.I: Cell.CYAN,
}

# Spawn orientation of every kind.  The long bar spawns vertical.
_SHAPES: Dict[PieceKind, Shape] = {
    PieceKind.Z: _template(Cell.RED, "##.", ".##"),
    PieceKind.S: _template(Cell.GREEN, ".##", "##."),
    PieceKind.J: _template(Cell.BLUE, "#..", "###"),
    PieceKind.L: _template(Cell.YELLOW, "..#", "###"),
    PieceKind.O: _template(Cell.DARK_YELLOW, "##", "##"),
    PieceKind.T: _template(Cell.PURPLE, ".#.", "###"),
    PieceKind.I: _template(Cell.CYAN, "#", "#", "#", "#"),
}

DEFAULT_KICKS: Tuple[Offset, ...] = ((1, 0), (-1, 1), (0, -1), (0, 0))
SQUARE_KICKS: Tuple[Offset, ...] = ((0, 0), (0, 0), (0, 0), (0, 0))
# Alternates the bar between 4x1 and 1x4 around its middle; a full turn
# nets zero drift.
BAR_KICKS: Tuple[Offset, ...] = ((-1, 1), (1, -1), (-1, 1), (1, -1))

_KICKS: Dict[PieceKind, Tuple[Offset, ...]] = {
    kind: DEFAULT_KICKS for kind in PieceKind
}
_KICKS[PieceKind.O] = SQUARE_KICKS
_KICKS[PieceKind.I] = BAR_KICKS


def _as_kind(kind: object) -> PieceKind:
    try:
        return PieceKind(kind)
    except ValueError:
        raise ValueError(f"Unknown piece kind: {kind!r}") from None


def shape_of(kind: PieceKind) -> Shape:
    """Return the spawn template for ``kind``.

    Raises:
        ValueError: If ``kind`` is not one of the seven catalog entries.
    """

    return _SHAPES[_as_kind(kind)]


def color_of(kind: PieceKind) -> Cell:
    """Return the cell colour used by ``kind``."""

    return PIECE_COLORS[_as_kind(kind)]


def kick_offset(kind: PieceKind, rotation: int) -> Offset:
    """Return the ``(dx, dy)`` applied when ``kind`` rotates from ``rotation``.

    Parameters
    ----------
    kind:
        The :class:`PieceKind` being rotated.
    rotation:
        Rotation index *before* the turn, ``0`` to ``3``.
    """

    if not 0 <= rotation < 4:
        raise ValueError(f"Rotation index out of range: {rotation}")
    return _KICKS[_as_kind(kind)][rotation]


def rotate_cases(cases: Shape) -> Shape:
    """Return ``cases`` rotated 90 degrees clockwise.

    Works for any rectangular matrix: the transpose of an ``h x w`` shape is
    ``w x h`` and reversing each of its rows completes the clockwise turn.
    """

    transposed = zip(*cases)
    return tuple(tuple(reversed(row)) for row in transposed)


@dataclass
class ActivePiece:
    """Piece currently controlled by the player."""

    kind: PieceKind
    x: int = 0
    y: int = 0
    cases: Shape = field(default=())
    rotation: int = 0
    fall_timer: float = 0.0

    def __post_init__(self) -> None:
        self.kind = _as_kind(self.kind)
        if not self.cases:
            self.cases = shape_of(self.kind)

    @classmethod
    def spawn(cls, kind: PieceKind, board_width: int) -> "ActivePiece":
        """Create ``kind`` centred horizontally on the top row."""

        cases = shape_of(kind)
        return cls(kind, x=(board_width - len(cases[0])) // 2, y=0, cases=cases)

    @property
    def width(self) -> int:
        return len(self.cases[0])

    @property
    def height(self) -> int:
        return len(self.cases)

    def bounding_box(self) -> Tuple[int, int, int, int]:
        """Return ``(left, top, right, bottom)``, right and bottom exclusive."""

        return self.x, self.y, self.x + self.width, self.y + self.height

    def move(self, dx: int, dy: int) -> None:
        self.x += dx
        self.y += dy

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(x, y)`` of every filled cell."""

        return [
            (self.x + cx, self.y + cy)
            for cy, row in enumerate(self.cases)
            for cx, cell in enumerate(row)
            if cell != Cell.EMPTY
        ]
