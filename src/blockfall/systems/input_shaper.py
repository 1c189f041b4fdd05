from __future__ import annotations

from typing import Any

from esper import World

from blockfall.config import EngineConfig
from blockfall.components.input_state import InputState
from blockfall.events.bus import (
    EventBus,
    EVENT_INPUT_HORIZONTAL,
    EVENT_INPUT_SOFT_DROP,
    EVENT_MOVE_REQUEST,
    EVENT_SOFT_DROP_STEP,
)
from blockfall.utils.components import session_component
from blockfall.utils.game_state import is_playing


class InputShaperSystem:
    """Turns held keys into discrete move and soft-drop requests.

    Horizontal: a press moves once at once; after ``das_ms`` of holding, moves
    repeat every ``arr_ms`` (``arr_ms == 0`` slides to the wall). Only the most
    recently pressed direction is active. Soft drop steps on press and then
    every ``soft_drop_interval_ms``. Releases always clear the repeat state,
    even when the session is not playing.
    """

    def __init__(self, world: World, event_bus: EventBus, config: EngineConfig) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.event_bus.subscribe(EVENT_INPUT_HORIZONTAL, self._on_horizontal)
        self.event_bus.subscribe(EVENT_INPUT_SOFT_DROP, self._on_soft_drop)

    @property
    def state(self) -> InputState:
        return session_component(self.world, InputState)

    def _on_horizontal(self, sender: Any, **payload: Any) -> None:
        direction = payload.get("direction")
        now = payload.get("now")
        if direction not in (-1, 1) or now is None:
            return
        if payload.get("pressed", True):
            self.press_horizontal(direction, now)
        else:
            self.release_horizontal(direction, now)

    def _on_soft_drop(self, sender: Any, **payload: Any) -> None:
        now = payload.get("now")
        if now is None:
            return
        if payload.get("pressed", True):
            self.press_soft_drop(now)
        else:
            self.release_soft_drop()

    # ------------------------------------------------------------------
    # Horizontal
    # ------------------------------------------------------------------

    def press_horizontal(self, direction: int, now: float) -> None:
        if not is_playing(self.world):
            return
        state = self.state
        already_held = state.left_held if direction < 0 else state.right_held
        if already_held and state.direction == direction:
            return
        if direction < 0:
            state.left_held = True
        else:
            state.right_held = True
        self._activate(direction, now)

    def release_horizontal(self, direction: int, now: float) -> None:
        state = self.state
        if direction < 0:
            state.left_held = False
        else:
            state.right_held = False
        if state.direction != direction:
            return
        state.direction = 0
        state.press_time = None
        state.last_shift = None
        other = -direction
        other_held = state.left_held if other < 0 else state.right_held
        if other_held and is_playing(self.world):
            self._activate(other, now)

    def _activate(self, direction: int, now: float) -> None:
        state = self.state
        state.direction = direction
        state.press_time = now
        state.last_shift = now
        self.event_bus.emit(EVENT_MOVE_REQUEST, dx=direction, now=now)

    # ------------------------------------------------------------------
    # Soft drop
    # ------------------------------------------------------------------

    def press_soft_drop(self, now: float) -> None:
        if not is_playing(self.world):
            return
        state = self.state
        if state.soft_drop_held:
            return
        state.soft_drop_held = True
        state.last_soft_drop = now
        self.event_bus.emit(EVENT_SOFT_DROP_STEP, now=now)

    def release_soft_drop(self) -> None:
        state = self.state
        state.soft_drop_held = False
        state.last_soft_drop = None

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self, now: float) -> None:
        if not is_playing(self.world):
            return
        state = self.state
        if state.direction and state.press_time is not None and state.last_shift is not None:
            if now - state.press_time >= self.config.das_ms:
                if self.config.arr_ms <= 0:
                    self.event_bus.emit(EVENT_MOVE_REQUEST, dx=state.direction, now=now, steps=self.config.cols)
                    state.last_shift = now
                elif now - state.last_shift >= self.config.arr_ms:
                    self.event_bus.emit(EVENT_MOVE_REQUEST, dx=state.direction, now=now)
                    state.last_shift = now
        if state.soft_drop_held and state.last_soft_drop is not None:
            if now - state.last_soft_drop >= self.config.soft_drop_interval_ms:
                self.event_bus.emit(EVENT_SOFT_DROP_STEP, now=now)
                state.last_soft_drop = now
