from blockfall.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_LINE_CLEAR,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_SPAWNED,
    EVENT_SCORE_CHANGED,
)
from blockfall.events.observer import SessionObserver, bind_observer
from blockfall.events.queue import EventQueue
from blockfall.session import GameSession
from tests.helpers import FakeClock, board_of, fill_row, make_session, place_piece

import random


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_event_bus_unsubscribe():
    bus = EventBus()
    calls = []

    def handler(sender, **kwargs):
        calls.append(kwargs)

    bus.subscribe("test", handler)
    bus.unsubscribe("test", handler)
    bus.emit("test", value=1)
    bus.unsubscribe("missing", handler)
    assert calls == []


def test_event_queue_records_in_order_and_drains():
    bus = EventBus()
    queue = EventQueue(bus)
    session = GameSession(event_bus=bus, clock=FakeClock(), rng=random.Random(3))
    session.start()
    names = queue.names()
    assert names.index(EVENT_SCORE_CHANGED) < names.index(EVENT_PIECE_SPAWNED)
    drained = queue.drain()
    assert len(drained) == len(names)
    assert len(queue) == 0
    session.hard_drop()
    assert EVENT_PIECE_LOCKED in queue.names()


class _RecordingObserver(SessionObserver):
    def __init__(self):
        self.calls = []

    def on_score_change(self, score):
        self.calls.append(('score', score))

    def on_line_clear(self, count):
        self.calls.append(('clear', count))

    def on_game_over(self, score):
        self.calls.append(('over', score))

    def on_state_change(self, is_playing):
        self.calls.append(('playing', is_playing))


def test_observer_receives_session_callbacks():
    session, clock = make_session(start=False)
    observer = _RecordingObserver()
    bind_observer(session.event_bus, observer)
    session.start()
    assert ('score', 0) in observer.calls
    assert ('playing', True) in observer.calls

    board = board_of(session)
    fill_row(board, 19, cols=range(8))
    place_piece(session, 'O', 8, 18)
    session.hard_drop()
    clock.set(360)
    session.advance()
    assert ('clear', 1) in observer.calls
    assert ('score', 100) in observer.calls


def test_base_observer_ignores_everything():
    session, clock = make_session(start=False)
    bind_observer(session.event_bus, SessionObserver())
    session.start()
    session.hard_drop()
    assert session.is_playing


def test_game_over_payload_reaches_the_queue():
    session, clock = make_session()
    queue = EventQueue(session.event_bus, names=(EVENT_GAME_OVER, EVENT_LINE_CLEAR))
    for y in (0, 1):
        fill_row(board_of(session), y, cols=range(3, 7))
    place_piece(session, 'O', 0, 18)
    session.hard_drop()
    assert queue.drain() == [(EVENT_GAME_OVER, {'score': 0, 'lines': 0, 'level': 1})]
