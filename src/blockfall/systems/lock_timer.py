from __future__ import annotations

from esper import World

from blockfall.config import EngineConfig
from blockfall.components.board import Board
from blockfall.components.clear_state import ClearState
from blockfall.components.hold_state import HoldState
from blockfall.components.lock_state import LockState
from blockfall.components.tetromino import ActivePiece, Tetromino
from blockfall.events.bus import EVENT_PIECE_LOCKED, EventBus
from blockfall.systems.board_ops import can_descend, lock_piece
from blockfall.utils.components import session_component
from blockfall.utils.game_state import is_playing


def arm_lock(lock: LockState, now: float, delay: float) -> None:
    """Start the countdown unless it is already running."""
    if lock.deadline is None:
        lock.deadline = now + delay


def cancel_lock(lock: LockState) -> None:
    """Drop the countdown of a piece that can fall again.

    Once the reset budget is spent a running countdown is kept, so lifting the
    piece off its support cannot postpone the lock.
    """
    if lock.budget_exhausted:
        return
    lock.deadline = None


def apply_lock_reset(board: Board, lock: LockState, piece: Tetromino, now: float, delay: float) -> bool:
    """Adjust the lock timer after a successful shift or rotation.

    Once the reset budget is spent a running countdown is left untouched and a
    resting piece without one starts it. Otherwise a piece that can fall again
    loses its countdown and a resting piece gets a fresh one, consuming a
    reset. Returns True when a reset was consumed.
    """
    resting = not can_descend(board, piece)
    if lock.budget_exhausted:
        if resting:
            arm_lock(lock, now, delay)
        return False
    if not resting:
        cancel_lock(lock)
        return False
    lock.resets_used += 1
    lock.deadline = now + delay
    return True


def lock_active_piece(world: World, event_bus: EventBus, now: float) -> bool:
    """Write the active piece into the board and announce it.

    Clears the active slot, the lock countdown and the hold usage flag; line
    detection and the next spawn are driven by the ``piece_locked`` event.
    """
    active = session_component(world, ActivePiece)
    piece = active.piece
    if piece is None:
        return False
    board = session_component(world, Board)
    cells = lock_piece(board, piece)
    active.piece = None
    session_component(world, LockState).reset_for_new_piece()
    session_component(world, HoldState).used_since_last_lock = False
    event_bus.emit(EVENT_PIECE_LOCKED, piece=piece, cells=cells, now=now)
    return True


class LockTimerSystem:
    """Locks the piece once its lock-delay countdown expires.

    A piece that can fall again at expiry only escapes while it still has
    resets left; with the budget spent it locks where it is.
    """

    def __init__(self, world: World, event_bus: EventBus, config: EngineConfig):
        self.world = world
        self.event_bus = event_bus
        self.config = config

    def update(self, now: float) -> None:
        if not is_playing(self.world):
            return
        if list(self.world.get_component(ClearState)):
            return
        piece = session_component(self.world, ActivePiece).piece
        lock = session_component(self.world, LockState)
        if piece is None or lock.deadline is None or now < lock.deadline:
            return
        board = session_component(self.world, Board)
        if can_descend(board, piece) and not lock.budget_exhausted:
            # Kicked or shifted off its support since the countdown started.
            cancel_lock(lock)
            return
        lock_active_piece(self.world, self.event_bus, now)
