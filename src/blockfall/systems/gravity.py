from __future__ import annotations

from dataclasses import replace

from esper import World

from blockfall.config import EngineConfig
from blockfall.components.board import Board
from blockfall.components.clear_state import ClearState
from blockfall.components.gravity_timer import GravityTimer
from blockfall.components.lock_state import LockState
from blockfall.components.session_counters import SessionCounters
from blockfall.components.tetromino import ActivePiece
from blockfall.events.bus import EventBus
from blockfall.systems.board_ops import is_valid_position
from blockfall.systems.lock_timer import arm_lock, cancel_lock
from blockfall.utils.components import session_component
from blockfall.utils.game_state import is_playing


def gravity_interval(level: int, config: EngineConfig | None = None) -> float:
    """Milliseconds per row for a level.

    Levels 1..len(table) read the table; higher levels decay the last entry by
    a fixed step per level down to the kill-speed floor.
    """
    config = config or EngineConfig()
    table = config.gravity_table
    index = max(0, int(level) - 1)
    if index < len(table):
        return float(table[index])
    extra_levels = index - (len(table) - 1)
    decayed = table[-1] - extra_levels * config.gravity_decay_ms
    return float(max(config.min_gravity_ms, decayed))


class GravitySystem:
    """Pulls the active piece down one row every gravity interval."""

    def __init__(self, world: World, event_bus: EventBus, config: EngineConfig):
        self.world = world
        self.event_bus = event_bus
        self.config = config

    def current_interval(self) -> float:
        counters = session_component(self.world, SessionCounters)
        return gravity_interval(counters.level, self.config)

    def restart(self, now: float) -> None:
        """Schedule the next step one full interval from now."""
        timer = session_component(self.world, GravityTimer)
        timer.deadline = now + self.current_interval()
        timer.remaining = None

    def update(self, now: float) -> None:
        if not is_playing(self.world):
            return
        if list(self.world.get_component(ClearState)):
            return
        timer = session_component(self.world, GravityTimer)
        if timer.deadline is None:
            self.restart(now)
            return
        if now < timer.deadline:
            return
        self.apply_gravity(now)
        timer.deadline = now + self.current_interval()

    def apply_gravity(self, now: float) -> bool:
        """Move down one row; when blocked, arm the lock timer instead."""
        active = session_component(self.world, ActivePiece)
        piece = active.piece
        if piece is None:
            return False
        board = session_component(self.world, Board)
        lock = session_component(self.world, LockState)
        lowered = replace(piece, y=piece.y + 1)
        if is_valid_position(board, lowered):
            active.piece = lowered
            cancel_lock(lock)
            return True
        arm_lock(lock, now, self.config.lock_delay_ms)
        return False
