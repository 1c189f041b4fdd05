from blockfall.components.game_state import SessionMode
from blockfall.events.bus import EVENT_GAME_OVER, EVENT_HOLD
from blockfall.systems.board_ops import spawn_position
from tests.helpers import active_piece, board_of, fill_row, make_session, place_piece


def test_first_hold_takes_the_next_piece():
    session, clock = make_session()
    place_piece(session, 'I', 5, 6)
    upcoming = session.snapshot().next_type
    holds = []
    session.subscribe(EVENT_HOLD, lambda s, **k: holds.append(k))

    session.hold()
    snap = session.snapshot()
    assert snap.held_type == 'I'
    assert snap.active_piece.type == upcoming
    assert (snap.active_piece.x, snap.active_piece.y) == spawn_position(upcoming, 10)
    assert not snap.hold_available
    assert holds == [{'held_type': 'I', 'swapped_in': upcoming}]


def test_second_hold_before_lock_is_ignored():
    session, clock = make_session()
    place_piece(session, 'I', 5, 6)
    session.hold()
    current = active_piece(session)
    session.hold()
    assert active_piece(session) == current
    assert session.snapshot().held_type == 'I'


def test_hold_after_lock_swaps_with_the_stored_piece():
    session, clock = make_session()
    place_piece(session, 'I', 5, 6)
    session.hold()
    session.hard_drop()
    assert session.snapshot().hold_available
    replaced = active_piece(session).type

    session.hold()
    snap = session.snapshot()
    assert snap.held_type == replaced
    assert snap.active_piece.type == 'I'
    assert (snap.active_piece.x, snap.active_piece.y) == spawn_position('I', 10)
    assert snap.active_piece.rotation == 0


def test_blocked_swap_ends_the_game():
    session, clock = make_session()
    place_piece(session, 'I', 5, 6)
    session.hold()
    session.hard_drop()
    place_piece(session, 'T', 3, 10)
    board = board_of(session)
    fill_row(board, 0)
    fill_row(board, 1)
    overs = []
    session.subscribe(EVENT_GAME_OVER, lambda s, **k: overs.append(k))

    session.hold()
    assert session.mode == SessionMode.GAME_OVER
    assert len(overs) == 1
    assert active_piece(session) is None
