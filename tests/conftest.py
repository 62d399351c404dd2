from __future__ import annotations

import itertools
from typing import Callable, Iterable

import pytest

from blockfall.board import Board
from blockfall.config import SessionConfig
from blockfall.game_state import GameSession
from blockfall.piece_queue import PieceQueue
from blockfall.tetromino import Cell, PieceKind


@pytest.fixture
def make_session(monkeypatch) -> Callable[..., GameSession]:
    """Build a session whose queue cycles through the given kinds."""

    def factory(kinds: Iterable[PieceKind] = (PieceKind.O,), **config) -> GameSession:
        sequence = itertools.cycle(list(kinds))
        monkeypatch.setattr(PieceQueue, "draw_kind", lambda self: next(sequence))
        return GameSession(SessionConfig(**config))

    return factory


def fill_rows(board: Board, rows: Iterable[int], *, gap: Iterable[int] = ()) -> None:
    """Fill ``rows`` completely except for the columns in ``gap``."""

    holes = set(gap)
    for y in rows:
        for x in range(board.width):
            if x not in holes:
                board.set_cell(x, y, Cell.RED)
