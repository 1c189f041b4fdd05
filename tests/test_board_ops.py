from blockfall.components.board import Board
from blockfall.components.tetromino import Tetromino
from blockfall.systems.board_ops import (
    drop_y,
    find_full_rows,
    ghost_y,
    has_visible_cell,
    is_valid_position,
    lock_piece,
    piece_cells,
    remove_rows,
    shape_cells,
    spawn_piece,
    spawn_position,
)
from tests.helpers import fill_row

import pytest


def test_new_board_is_empty_and_sized():
    board = Board(cols=10, rows=20)
    assert len(board.grid) == 20
    assert all(len(row) == 10 for row in board.grid)
    assert all(cell is None for row in board.grid for cell in row)


def test_every_shape_has_four_cells_in_every_rotation():
    for piece_type in ('I', 'O', 'T', 'S', 'Z', 'J', 'L'):
        for rotation in range(4):
            assert len(shape_cells(piece_type, rotation)) == 4


def test_unknown_piece_type_raises():
    with pytest.raises(ValueError):
        shape_cells('X', 0)


def test_position_rejects_walls_floor_and_overlap():
    board = Board(cols=10, rows=20)
    assert is_valid_position(board, Tetromino('T', 0, 0, 0))
    assert not is_valid_position(board, Tetromino('T', 0, -1, 0))
    assert not is_valid_position(board, Tetromino('T', 0, 8, 0))
    # T spawn box has its bottom row at y + 1
    assert is_valid_position(board, Tetromino('T', 0, 3, 18))
    assert not is_valid_position(board, Tetromino('T', 0, 3, 19))
    board.grid[10][4] = 'Z'
    assert not is_valid_position(board, Tetromino('T', 0, 3, 9))


def test_cells_above_the_board_are_valid_but_not_visible():
    board = Board(cols=10, rows=20)
    hidden = Tetromino('T', 0, 3, -2)
    assert is_valid_position(board, hidden)
    assert not has_visible_cell(hidden)
    assert has_visible_cell(Tetromino('T', 0, 3, -1))


def test_lock_piece_writes_type_and_drops_hidden_cells():
    board = Board(cols=10, rows=20)
    written = lock_piece(board, Tetromino('T', 0, 3, -1))
    assert written == [(3, 0), (4, 0), (5, 0)]
    assert board.grid[0][3:6] == ['T', 'T', 'T']


def test_find_full_rows_ignores_partial_rows():
    board = Board(cols=10, rows=20)
    fill_row(board, 19)
    fill_row(board, 17)
    fill_row(board, 18, cols=range(9))
    assert find_full_rows(board) == [17, 19]


def test_remove_rows_shifts_down_and_pads_top():
    board = Board(cols=10, rows=20)
    fill_row(board, 19)
    fill_row(board, 17)
    board.grid[18][0] = 'J'
    board.grid[16][5] = 'L'
    remove_rows(board, [17, 19])
    assert len(board.grid) == 20
    assert board.grid[19][0] == 'J'
    assert board.grid[18][5] == 'L'
    assert all(cell is None for cell in board.grid[0])
    assert all(cell is None for cell in board.grid[1])
    assert find_full_rows(board) == []


def test_spawn_positions_are_centered():
    assert spawn_position('I', 10) == (3, -1)
    assert spawn_position('O', 10) == (4, 0)
    for piece_type in ('T', 'S', 'Z', 'J', 'L'):
        assert spawn_position(piece_type, 10) == (3, 0)


def test_spawn_moves_up_when_the_spawn_row_is_blocked():
    board = Board(cols=10, rows=20)
    board.grid[1][4] = 'Z'
    piece = spawn_piece(board, 'T')
    assert piece == Tetromino('T', 0, 3, -1)


def test_spawn_fails_when_no_visible_placement_exists():
    board = Board(cols=10, rows=20)
    fill_row(board, 0)
    fill_row(board, 1)
    assert spawn_piece(board, 'T') is None
    assert spawn_piece(board, 'I') is None


def test_hard_drop_and_ghost_agree_without_mutating():
    board = Board(cols=10, rows=20)
    fill_row(board, 19, cols=range(5))
    piece = Tetromino('O', 0, 0, 0)
    assert drop_y(board, piece) == 17
    assert ghost_y(board, piece) == 17
    assert piece.y == 0
    assert ghost_y(board, None) is None
    landed = Tetromino('O', 0, 0, 17)
    assert sorted(piece_cells(landed)) == [(0, 17), (0, 18), (1, 17), (1, 18)]
