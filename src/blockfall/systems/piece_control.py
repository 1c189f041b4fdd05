from __future__ import annotations

from dataclasses import replace

from esper import World

from blockfall.config import EngineConfig
from blockfall.components.board import Board
from blockfall.components.clear_state import ClearState
from blockfall.components.gravity_timer import GravityTimer
from blockfall.components.lock_state import LockState
from blockfall.components.session_counters import SessionCounters
from blockfall.components.tetromino import ActivePiece, NextPiece, Tetromino
from blockfall.events.bus import (
    EventBus,
    EVENT_HARD_DROP,
    EVENT_HARD_DROP_REQUEST,
    EVENT_MOVE_REQUEST,
    EVENT_PIECE_MOVED,
    EVENT_PIECE_ROTATED,
    EVENT_PIECE_SPAWNED,
    EVENT_ROTATE_REQUEST,
    EVENT_SOFT_DROP,
    EVENT_SOFT_DROP_STEP,
    EVENT_SPAWN_FAILED,
    EVENT_SPAWN_REQUEST,
)
from blockfall.systems.board_ops import drop_y, is_valid_position, spawn_piece, try_rotate
from blockfall.systems.gravity import gravity_interval
from blockfall.systems.lock_timer import apply_lock_reset, arm_lock, cancel_lock, lock_active_piece
from blockfall.utils.bag_randomizer import BagRandomizer
from blockfall.utils.components import session_component
from blockfall.utils.game_state import is_playing


class PieceControlSystem:
    """Spawns, shifts, rotates and drops the active piece.

    Every operation is a silent no-op unless the session is playing, a piece is
    active and no line clear is in progress.
    """

    def __init__(self, world: World, event_bus: EventBus, config: EngineConfig):
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.event_bus.subscribe(EVENT_MOVE_REQUEST, self.on_move_request)
        self.event_bus.subscribe(EVENT_ROTATE_REQUEST, self.on_rotate_request)
        self.event_bus.subscribe(EVENT_SOFT_DROP_STEP, self.on_soft_drop_step)
        self.event_bus.subscribe(EVENT_HARD_DROP_REQUEST, self.on_hard_drop_request)
        self.event_bus.subscribe(EVENT_SPAWN_REQUEST, self.on_spawn_request)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_move_request(self, sender, **payload):
        dx = payload.get('dx')
        now = payload.get('now')
        if dx not in (-1, 1) or now is None:
            return
        steps = max(1, int(payload.get('steps', 1)))
        for _ in range(steps):
            if not self.move_horizontal(dx, now):
                break

    def on_rotate_request(self, sender, **payload):
        now = payload.get('now')
        if now is None:
            return
        piece = self._controllable_piece()
        if piece is None:
            return
        delta = payload.get('delta', 1)
        self.rotate(piece.rotation + delta, now)

    def on_soft_drop_step(self, sender, **payload):
        now = payload.get('now')
        if now is None:
            return
        self.soft_drop_step(now)

    def on_hard_drop_request(self, sender, **payload):
        now = payload.get('now')
        if now is None:
            return
        self.hard_drop(now)

    def on_spawn_request(self, sender, **payload):
        now = payload.get('now')
        if now is None or not is_playing(self.world):
            return
        self.spawn(now, source=payload.get('source', 'lock'), piece_type=payload.get('piece_type'))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def spawn(self, now: float, *, source: str = 'lock', piece_type: str | None = None) -> Tetromino | None:
        """Spawn ``piece_type`` or the queued next piece.

        A blocked spawn emits ``spawn_failed``; the session turns that into game over.
        """
        if piece_type is None:
            piece_type = self._take_next_type()
        board = session_component(self.world, Board)
        piece = spawn_piece(board, piece_type)
        if piece is None:
            self.event_bus.emit(EVENT_SPAWN_FAILED, piece_type=piece_type, source=source)
            return None
        session_component(self.world, ActivePiece).piece = piece
        session_component(self.world, LockState).reset_for_new_piece()
        timer = session_component(self.world, GravityTimer)
        level = session_component(self.world, SessionCounters).level
        timer.deadline = now + gravity_interval(level, self.config)
        timer.remaining = None
        self.event_bus.emit(EVENT_PIECE_SPAWNED, piece=piece, source=source)
        return piece

    def move_horizontal(self, dx: int, now: float) -> bool:
        piece = self._controllable_piece()
        if piece is None:
            return False
        board = session_component(self.world, Board)
        moved = replace(piece, x=piece.x + dx)
        if not is_valid_position(board, moved):
            return False
        session_component(self.world, ActivePiece).piece = moved
        lock = session_component(self.world, LockState)
        apply_lock_reset(board, lock, moved, now, self.config.lock_delay_ms)
        self.event_bus.emit(EVENT_PIECE_MOVED, piece=moved, dx=dx)
        return True

    def rotate(self, to_rotation: int, now: float) -> bool:
        """Rotate through the SRS kick candidates; returns False if none fit."""
        piece = self._controllable_piece()
        if piece is None:
            return False
        board = session_component(self.world, Board)
        result = try_rotate(board, piece, to_rotation)
        if result is None:
            return False
        rotated, kick = result
        if rotated == piece:
            return True
        session_component(self.world, ActivePiece).piece = rotated
        lock = session_component(self.world, LockState)
        apply_lock_reset(board, lock, rotated, now, self.config.lock_delay_ms)
        self.event_bus.emit(EVENT_PIECE_ROTATED, piece=rotated, kick=kick)
        return True

    def soft_drop_step(self, now: float) -> bool:
        piece = self._controllable_piece()
        if piece is None:
            return False
        board = session_component(self.world, Board)
        lock = session_component(self.world, LockState)
        lowered = replace(piece, y=piece.y + 1)
        if not is_valid_position(board, lowered):
            arm_lock(lock, now, self.config.lock_delay_ms)
            return False
        session_component(self.world, ActivePiece).piece = lowered
        cancel_lock(lock)
        timer = session_component(self.world, GravityTimer)
        level = session_component(self.world, SessionCounters).level
        timer.deadline = now + gravity_interval(level, self.config)
        self.event_bus.emit(EVENT_SOFT_DROP, piece=lowered)
        return True

    def hard_drop(self, now: float) -> bool:
        piece = self._controllable_piece()
        if piece is None:
            return False
        board = session_component(self.world, Board)
        landed = replace(piece, y=drop_y(board, piece))
        session_component(self.world, ActivePiece).piece = landed
        cancel_lock(session_component(self.world, LockState))
        self.event_bus.emit(EVENT_HARD_DROP, piece=landed, distance=landed.y - piece.y)
        return lock_active_piece(self.world, self.event_bus, now)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _controllable_piece(self) -> Tetromino | None:
        if not is_playing(self.world):
            return None
        if list(self.world.get_component(ClearState)):
            return None
        return session_component(self.world, ActivePiece).piece

    def _take_next_type(self) -> str:
        bag = session_component(self.world, BagRandomizer)
        upcoming = session_component(self.world, NextPiece)
        piece_type = upcoming.next_type or bag.draw()
        upcoming.next_type = bag.draw()
        return piece_type
