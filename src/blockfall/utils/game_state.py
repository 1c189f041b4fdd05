from __future__ import annotations

from esper import World

from blockfall.components.game_state import GameState, SessionMode
from blockfall.events.bus import EVENT_SESSION_MODE_CHANGED, EVENT_STATE_CHANGED, EventBus


def is_playing(world: World) -> bool:
    for _, state in world.get_component(GameState):
        return state.mode == SessionMode.PLAYING
    return False


def set_session_mode(world: World, event_bus: EventBus, mode: SessionMode) -> None:
    """Update the session mode and emit change events when it differs.

    ``state_changed`` fires only when the playing/not-playing status flips.
    """
    for _, state in world.get_component(GameState):
        previous_mode = state.mode
        if previous_mode == mode:
            return
        state.mode = mode
        event_bus.emit(EVENT_SESSION_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)
        was_playing = previous_mode == SessionMode.PLAYING
        now_playing = mode == SessionMode.PLAYING
        if was_playing != now_playing:
            event_bus.emit(EVENT_STATE_CHANGED, is_playing=now_playing)
        return
