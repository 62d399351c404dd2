"""Buffer of upcoming pieces."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Tuple
import random

from .board import WIDTH
from .tetromino import ActivePiece, PieceKind


DEFAULT_QUEUE_SIZE = 3


class PieceQueue:
    """Fixed-length queue of pieces waiting to spawn.

    Kinds are drawn independently and uniformly, so repeats are possible.
    Popping the head always appends exactly one fresh piece at the tail.
    """

    def __init__(
        self,
        size: int = DEFAULT_QUEUE_SIZE,
        rng: Optional[random.Random] = None,
        board_width: int = WIDTH,
    ) -> None:
        if size < 1:
            raise ValueError(f"Queue size must be positive, got {size}")
        self.size = size
        self.board_width = board_width
        self._rng = rng or random.Random()
        self._pieces: Deque[ActivePiece] = deque()
        self.reset()

    def draw_kind(self) -> PieceKind:
        """Return a random piece kind."""

        return self._rng.choice(list(PieceKind))

    def _draw_piece(self) -> ActivePiece:
        return ActivePiece.spawn(self.draw_kind(), self.board_width)

    def reset(self) -> None:
        """Discard the contents and draw ``size`` new pieces."""

        self._pieces = deque(self._draw_piece() for _ in range(self.size))

    def pop(self) -> ActivePiece:
        """Remove and return the head, appending one replacement."""

        piece = self._pieces.popleft()
        self._pieces.append(self._draw_piece())
        return piece

    def kinds(self) -> Tuple[PieceKind, ...]:
        return tuple(piece.kind for piece in self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)
