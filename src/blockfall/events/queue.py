from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple

from blockfall.events.bus import OUTWARD_EVENTS, EventBus

RecordedEvent = Tuple[str, Dict[str, Any]]


class EventQueue:
    """Pull-style consumer: records bus events until the host drains them."""

    def __init__(self, event_bus: EventBus, names: Iterable[str] = OUTWARD_EVENTS):
        self._events: List[RecordedEvent] = []
        self._names = tuple(names)
        for name in self._names:
            event_bus.subscribe(name, self._recorder(name))

    def _recorder(self, name: str):
        def record(sender, **payload):
            self._events.append((name, dict(payload)))
        return record

    def drain(self) -> List[RecordedEvent]:
        events, self._events = self._events, []
        return events

    def names(self) -> List[str]:
        return [name for name, _ in self._events]

    def __len__(self) -> int:
        return len(self._events)
