from __future__ import annotations

from dataclasses import replace
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from blockfall.components.board import Board, empty_row
from blockfall.components.tetromino import Tetromino
from blockfall.constants import BASE_SHAPES, I_KICKS, JLSTZ_KICKS, SPAWN_RETRY_OFFSETS

Position = Tuple[int, int]
Kick = Tuple[int, int]


def rotate_cw(matrix):
    return tuple(tuple(row) for row in zip(*matrix[::-1]))


@lru_cache(maxsize=None)
def shape_cells(piece_type: str, rotation: int) -> Tuple[Position, ...]:
    """Occupied (x, y) offsets inside the bounding box for a rotation state."""
    try:
        matrix = BASE_SHAPES[piece_type]
    except KeyError:
        raise ValueError(f"Unknown piece type: {piece_type}") from None
    for _ in range(rotation % 4):
        matrix = rotate_cw(matrix)
    return tuple(
        (x, y)
        for y, row in enumerate(matrix)
        for x, value in enumerate(row)
        if value
    )


def piece_cells(piece: Tetromino) -> List[Position]:
    return [(piece.x + dx, piece.y + dy) for dx, dy in shape_cells(piece.type, piece.rotation)]


def is_valid_position(board: Board, piece: Tetromino) -> bool:
    """True when every cell is inside the walls/floor and clear of locked cells.

    Cells above the top edge (y < 0) are always accepted.
    """
    for x, y in piece_cells(piece):
        if x < 0 or x >= board.cols or y >= board.rows:
            return False
        if y >= 0 and board.grid[y][x] is not None:
            return False
    return True


def has_visible_cell(piece: Tetromino) -> bool:
    return any(y >= 0 for _, y in piece_cells(piece))


def can_descend(board: Board, piece: Tetromino) -> bool:
    return is_valid_position(board, replace(piece, y=piece.y + 1))


def lock_piece(board: Board, piece: Tetromino) -> List[Position]:
    """Write the piece into the grid; cells above the board are dropped."""
    written: List[Position] = []
    for x, y in piece_cells(piece):
        if 0 <= y < board.rows and 0 <= x < board.cols:
            board.grid[y][x] = piece.type
            written.append((x, y))
    return written


def find_full_rows(board: Board) -> List[int]:
    return [y for y in range(board.rows) if all(cell is not None for cell in board.grid[y])]


def remove_rows(board: Board, rows: Sequence[int]) -> None:
    """Delete rows bottom-up, then pad with empty rows at the top."""
    for y in sorted(set(rows), reverse=True):
        if 0 <= y < len(board.grid):
            del board.grid[y]
    while len(board.grid) < board.rows:
        board.grid.insert(0, empty_row(board.cols))


# ----------------------------------------------------------------------------
# Piece placement
# ----------------------------------------------------------------------------

def spawn_position(piece_type: str, cols: int) -> Position:
    """Centered column; boxes with empty leading rows start above the board."""
    matrix = BASE_SHAPES[piece_type]
    width = len(matrix[0])
    empty = 0
    for row in matrix:
        if any(row):
            break
        empty += 1
    return (cols - width) // 2, -min(empty, 2)


def spawn_piece(board: Board, piece_type: str) -> Optional[Tetromino]:
    """Place a piece at its spawn point, retrying up to SPAWN_RETRY_OFFSETS rows higher.

    Returns ``None`` when no candidate is both valid and partially visible.
    """
    x, y = spawn_position(piece_type, board.cols)
    for offset in range(SPAWN_RETRY_OFFSETS + 1):
        candidate = Tetromino(type=piece_type, rotation=0, x=x, y=y - offset)
        if is_valid_position(board, candidate) and has_visible_cell(candidate):
            return candidate
    return None


def kick_candidates(piece_type: str, from_rotation: int, to_rotation: int) -> Tuple[Kick, ...]:
    table = I_KICKS if piece_type == 'I' else JLSTZ_KICKS
    return table.get((from_rotation % 4, to_rotation % 4), ((0, 0),))


def try_rotate(board: Board, piece: Tetromino, to_rotation: int) -> Optional[Tuple[Tetromino, Kick]]:
    """Return the first kicked placement that fits, with the kick used.

    The O piece keeps its shape, so its rotation succeeds without moving.
    """
    to_rotation %= 4
    if piece.type == 'O' or to_rotation == piece.rotation:
        return piece, (0, 0)
    for dx, dy in kick_candidates(piece.type, piece.rotation, to_rotation):
        candidate = replace(piece, rotation=to_rotation, x=piece.x + dx, y=piece.y + dy)
        if is_valid_position(board, candidate):
            return candidate, (dx, dy)
    return None


def drop_y(board: Board, piece: Tetromino) -> int:
    """Lowest row the piece can reach by falling straight down. Mutates nothing."""
    y = piece.y
    while is_valid_position(board, replace(piece, y=y + 1)):
        y += 1
    return y


def ghost_y(board: Board, piece: Optional[Tetromino]) -> Optional[int]:
    if piece is None:
        return None
    return drop_y(board, piece)
