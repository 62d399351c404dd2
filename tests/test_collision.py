from __future__ import annotations

from blockfall.board import Board
from blockfall.tetromino import ActivePiece, Cell, PieceKind
from blockfall.utils import check_collision, ghost_y, render_grid


def test_collision_at_board_edges() -> None:
    board = Board()
    piece = ActivePiece(PieceKind.O, x=8, y=18)
    assert not check_collision(board, piece, 0, 0)
    assert check_collision(board, piece, 1, 0)
    assert check_collision(board, piece, 0, 1)
    assert not check_collision(board, piece, -8, 0)
    assert check_collision(board, piece, -9, 0)
    assert check_collision(board, piece, 0, -19)


def test_collision_ignores_empty_template_cells() -> None:
    board = Board()
    piece = ActivePiece(PieceKind.Z, x=0, y=0)
    board.set_cell(2, 0, Cell.RED)
    board.set_cell(0, 1, Cell.RED)
    assert not check_collision(board, piece, 0, 0)
    board.set_cell(1, 1, Cell.RED)
    assert check_collision(board, piece, 0, 0)


def test_collision_does_not_move_piece() -> None:
    board = Board()
    piece = ActivePiece(PieceKind.T, x=3, y=4)
    check_collision(board, piece, 2, 3)
    assert (piece.x, piece.y) == (3, 4)


def test_ghost_rests_on_floor_or_stack() -> None:
    board = Board()
    piece = ActivePiece(PieceKind.O, x=4, y=0)
    assert ghost_y(board, piece) == 18
    board.set_cell(4, 10, Cell.BLUE)
    assert ghost_y(board, piece) == 8
    piece.y = 8
    assert ghost_y(board, piece) == 8


def test_vertical_bar_ghost() -> None:
    board = Board()
    piece = ActivePiece(PieceKind.I, x=0, y=2)
    assert ghost_y(board, piece) == 16


def test_render_grid_overlays_active_piece() -> None:
    board = Board()
    board.set_cell(0, 19, Cell.RED)
    piece = ActivePiece(PieceKind.O, x=4, y=0)
    grid = render_grid(board, piece)
    assert grid[19][0] == int(Cell.RED)
    assert grid[0][4] == grid[1][5] == int(Cell.DARK_YELLOW)
    assert not board.grid[0].any()


def test_bounding_box_edges_decide_wall_and_floor_hits() -> None:
    board = Board()
    bar = ActivePiece(PieceKind.I, x=9, y=16)
    assert bar.bounding_box() == (9, 16, 10, 20)
    assert not check_collision(board, bar, 0, 0)
    assert check_collision(board, bar, 1, 0)
    assert check_collision(board, bar, 0, 1)
