"""Read-only view of a session for renderers.

Every field is immutable (tuples and frozen dataclasses), so consumers cannot
change engine state through a snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from blockfall.components.board import Board
from blockfall.components.clear_state import ClearState, ShakeSignal
from blockfall.components.game_state import GameState, SessionMode
from blockfall.components.hold_state import HoldState
from blockfall.components.session_counters import SessionCounters
from blockfall.components.tetromino import ActivePiece, NextPiece, Tetromino
from blockfall.systems.board_ops import ghost_y
from blockfall.utils.components import optional_component, session_component

GridView = Tuple[Tuple[Optional[str], ...], ...]


@dataclass(frozen=True)
class ClearView:
    rows: Tuple[int, ...]
    start: float
    duration: float
    is_tetris: bool


@dataclass(frozen=True)
class ShakeView:
    start: float
    duration: float
    amplitude: float


@dataclass(frozen=True)
class RenderSnapshot:
    grid: GridView
    active_piece: Optional[Tetromino]
    ghost_y: Optional[int]
    next_type: Optional[str]
    held_type: Optional[str]
    hold_available: bool
    clear_state: Optional[ClearView]
    shake: Optional[ShakeView]
    score: int
    lines: int
    level: int
    mode: SessionMode


def build_snapshot(world: World) -> RenderSnapshot:
    board = session_component(world, Board)
    piece = session_component(world, ActivePiece).piece
    hold = session_component(world, HoldState)
    counters = session_component(world, SessionCounters)
    clear = optional_component(world, ClearState)
    shake = optional_component(world, ShakeSignal)
    return RenderSnapshot(
        grid=tuple(tuple(row) for row in board.grid),
        active_piece=piece,
        ghost_y=ghost_y(board, piece),
        next_type=session_component(world, NextPiece).next_type,
        held_type=hold.held_type,
        hold_available=not hold.used_since_last_lock,
        clear_state=None if clear is None else ClearView(
            rows=tuple(clear.rows),
            start=clear.start,
            duration=clear.duration,
            is_tetris=clear.is_tetris,
        ),
        shake=None if shake is None else ShakeView(
            start=shake.start,
            duration=shake.duration,
            amplitude=shake.amplitude,
        ),
        score=counters.score,
        lines=counters.lines,
        level=counters.level,
        mode=session_component(world, GameState).mode,
    )
