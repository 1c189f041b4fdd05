"""Push-style consumer: map bus events onto the methods of one observer object."""
from __future__ import annotations

from blockfall.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_LEVEL_CHANGED,
    EVENT_LINE_CLEAR,
    EVENT_LINES_CHANGED,
    EVENT_SCORE_CHANGED,
    EVENT_STATE_CHANGED,
)


class SessionObserver:
    """Base class with no-op callbacks; hosts override what they need."""

    def on_score_change(self, score: int) -> None:
        pass

    def on_lines_change(self, lines: int) -> None:
        pass

    def on_level_change(self, level: int) -> None:
        pass

    def on_line_clear(self, count: int) -> None:
        pass

    def on_game_over(self, score: int) -> None:
        pass

    def on_state_change(self, is_playing: bool) -> None:
        pass


def bind_observer(event_bus: EventBus, observer: SessionObserver) -> None:
    event_bus.subscribe(EVENT_SCORE_CHANGED, lambda sender, **p: observer.on_score_change(p.get("score", 0)))
    event_bus.subscribe(EVENT_LINES_CHANGED, lambda sender, **p: observer.on_lines_change(p.get("lines", 0)))
    event_bus.subscribe(EVENT_LEVEL_CHANGED, lambda sender, **p: observer.on_level_change(p.get("level", 1)))
    event_bus.subscribe(EVENT_LINE_CLEAR, lambda sender, **p: observer.on_line_clear(p.get("count", 0)))
    event_bus.subscribe(EVENT_GAME_OVER, lambda sender, **p: observer.on_game_over(p.get("score", 0)))
    event_bus.subscribe(EVENT_STATE_CHANGED, lambda sender, **p: observer.on_state_change(bool(p.get("is_playing"))))
