from __future__ import annotations

import random
from typing import Iterable

from blockfall.config import EngineConfig
from blockfall.components.board import Board
from blockfall.components.tetromino import ActivePiece, Tetromino
from blockfall.session import GameSession
from blockfall.utils.components import session_component


class FakeClock:
    """Manually driven millisecond clock."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def advance(self, amount: float) -> None:
        self.value += amount

    def set(self, value: float) -> None:
        self.value = value

    def __call__(self) -> float:
        return self.value


def make_session(config: EngineConfig | None = None, *, seed: int = 7, start: bool = True):
    """Return (session, clock) driven by a fake clock and a seeded bag."""
    clock = FakeClock()
    session = GameSession(config, clock=clock, rng=random.Random(seed))
    if start:
        session.start()
    return session, clock


def board_of(session: GameSession) -> Board:
    return session_component(session.world, Board)


def place_piece(session: GameSession, piece_type: str, x: int, y: int, rotation: int = 0) -> Tetromino:
    piece = Tetromino(type=piece_type, rotation=rotation, x=x, y=y)
    session_component(session.world, ActivePiece).piece = piece
    return piece


def active_piece(session: GameSession) -> Tetromino | None:
    return session_component(session.world, ActivePiece).piece


def fill_row(board: Board, row: int, cols: Iterable[int] | None = None, piece_type: str = 'Z') -> None:
    for col in (range(board.cols) if cols is None else cols):
        board.grid[row][col] = piece_type
