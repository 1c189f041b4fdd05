from __future__ import annotations

from esper import World

from blockfall.config import EngineConfig
from blockfall.components.clear_state import ClearState
from blockfall.components.hold_state import HoldState
from blockfall.components.lock_state import LockState
from blockfall.components.tetromino import ActivePiece
from blockfall.events.bus import EventBus, EVENT_HOLD, EVENT_HOLD_REQUEST, EVENT_SPAWN_REQUEST
from blockfall.utils.components import session_component
from blockfall.utils.game_state import is_playing


class HoldSystem:
    """Stashes the active piece once per piece lifetime.

    The usage flag is cleared by ``lock_active_piece`` when the next lock happens.
    """

    def __init__(self, world: World, event_bus: EventBus, config: EngineConfig):
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.event_bus.subscribe(EVENT_HOLD_REQUEST, self.on_hold_request)

    def on_hold_request(self, sender, **payload):
        now = payload.get('now')
        if now is None:
            return
        self.hold(now)

    def hold(self, now: float) -> bool:
        if not is_playing(self.world):
            return False
        if list(self.world.get_component(ClearState)):
            return False
        hold = session_component(self.world, HoldState)
        active = session_component(self.world, ActivePiece)
        if hold.used_since_last_lock or active.piece is None:
            return False

        current_type = active.piece.type
        swap_type = hold.held_type
        hold.held_type = current_type
        hold.used_since_last_lock = True
        active.piece = None
        session_component(self.world, LockState).reset_for_new_piece()
        # swap_type None means the slot was empty: the queued next piece comes in.
        self.event_bus.emit(EVENT_SPAWN_REQUEST, now=now, source='hold', piece_type=swap_type)
        if active.piece is None:
            # Blocked spawn; the session has already moved to game over.
            return True
        self.event_bus.emit(EVENT_HOLD, held_type=current_type, swapped_in=active.piece.type)
        return True
