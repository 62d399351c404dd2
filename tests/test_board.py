from __future__ import annotations

import numpy as np
import pytest

from blockfall.board import Board
from blockfall.tetromino import ActivePiece, Cell, PieceKind


def _fill_row(board: Board, y: int, value: Cell = Cell.RED) -> None:
    for x in range(board.width):
        board.set_cell(x, y, value)


def test_is_blocked_outside_board_and_on_filled_cells() -> None:
    board = Board()
    assert board.is_blocked(-1, 0)
    assert board.is_blocked(board.width, 0)
    assert board.is_blocked(0, board.height)
    assert not board.is_blocked(0, 0)
    board.set_cell(3, 7, Cell.BLUE)
    assert board.is_blocked(3, 7)
    assert board.get_cell(3, 7) is Cell.BLUE


def test_cell_access_out_of_bounds_raises() -> None:
    board = Board()
    with pytest.raises(IndexError):
        board.get_cell(10, 0)
    with pytest.raises(IndexError):
        board.set_cell(0, -1, Cell.RED)


def test_lock_piece_writes_only_filled_cells() -> None:
    board = Board()
    piece = ActivePiece.spawn(PieceKind.T, board.width)
    piece.y = 18
    board.lock_piece(piece)
    assert [board.get_cell(x, 18) for x in range(3, 6)] == [Cell.EMPTY, Cell.PURPLE, Cell.EMPTY]
    assert [board.get_cell(x, 19) for x in range(3, 6)] == [Cell.PURPLE] * 3
    assert int(np.count_nonzero(board.grid)) == 4


def test_lock_piece_out_of_bounds_raises() -> None:
    board = Board()
    piece = ActivePiece(PieceKind.I, x=0, y=18)
    with pytest.raises(IndexError):
        board.lock_piece(piece)


def test_two_bottom_rows_clear_to_empty_grid() -> None:
    board = Board()
    _fill_row(board, 18)
    _fill_row(board, 19)
    assert board.clear_full_lines() == 2
    assert not board.grid.any()


def test_clear_keeps_order_of_remaining_rows() -> None:
    board = Board()
    board.set_cell(5, 15, Cell.GREEN)
    _fill_row(board, 16)
    board.set_cell(0, 17, Cell.CYAN)
    board.set_cell(3, 17, Cell.CYAN)
    _fill_row(board, 18)
    board.set_cell(9, 19, Cell.YELLOW)

    assert board.clear_full_lines() == 2

    assert board.get_cell(9, 19) is Cell.YELLOW
    assert board.get_cell(0, 18) is Cell.CYAN
    assert board.get_cell(3, 18) is Cell.CYAN
    assert board.get_cell(5, 17) is Cell.GREEN
    assert int(np.count_nonzero(board.grid)) == 4
    assert not board.grid[:17].any()


def test_clear_without_full_rows_is_noop() -> None:
    board = Board()
    for x in range(board.width - 1):
        board.set_cell(x, 19, Cell.RED)
    before = board.grid.copy()
    assert board.clear_full_lines() == 0
    assert np.array_equal(board.grid, before)


def test_copy_grid_is_read_only_snapshot() -> None:
    board = Board()
    grid = board.copy_grid()
    with pytest.raises(ValueError):
        grid[0, 0] = 1
    board.set_cell(0, 0, Cell.RED)
    assert grid[0, 0] == 0


def test_clear_empties_every_cell() -> None:
    board = Board()
    _fill_row(board, 19)
    board.set_cell(2, 3, Cell.RED)
    board.clear()
    assert not board.grid.any()
    assert board.grid.shape == (board.height, board.width)
