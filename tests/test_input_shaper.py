from blockfall.components.input_state import InputState
from blockfall.config import EngineConfig
from blockfall.utils.components import session_component
from tests.helpers import active_piece, make_session, place_piece


def _x(session):
    return active_piece(session).x


def test_press_moves_once_then_repeats_after_das():
    session, clock = make_session()
    place_piece(session, 'T', 3, 5)
    session.move_left(True)
    assert _x(session) == 2
    clock.set(79)
    session.advance()
    assert _x(session) == 2
    clock.set(80)
    session.advance()
    assert _x(session) == 1
    clock.set(100)
    session.advance()
    assert _x(session) == 1
    clock.set(110)
    session.advance()
    assert _x(session) == 0
    clock.set(140)
    session.advance()
    assert _x(session) == 0

    session.move_left(False)
    clock.set(300)
    session.advance()
    assert _x(session) == 0


def test_latest_direction_wins_and_release_falls_back():
    session, clock = make_session()
    place_piece(session, 'T', 3, 5)
    session.move_left(True)
    assert _x(session) == 2
    clock.set(10)
    session.move_right(True)
    assert _x(session) == 3
    clock.set(20)
    session.move_right(False)
    assert _x(session) == 2
    state = session_component(session.world, InputState)
    assert state.direction == -1
    assert state.press_time == 20


def test_zero_arr_slides_to_the_wall():
    session, clock = make_session(EngineConfig(arr_ms=0))
    place_piece(session, 'T', 3, 5)
    session.move_right(True)
    assert _x(session) == 4
    clock.set(80)
    session.advance()
    assert _x(session) == 7


def test_sensitivity_preset_shortens_das():
    session, clock = make_session(EngineConfig().with_sensitivity('instant'))
    place_piece(session, 'T', 3, 5)
    session.move_left(True)
    clock.set(33)
    session.advance()
    assert _x(session) == 1


def test_soft_drop_steps_on_press_and_repeats():
    session, clock = make_session()
    place_piece(session, 'T', 3, 0)
    session.soft_drop(True)
    assert active_piece(session).y == 1
    clock.set(59)
    session.advance()
    assert active_piece(session).y == 1
    clock.set(60)
    session.advance()
    assert active_piece(session).y == 2
    session.soft_drop(False)
    clock.set(200)
    session.advance()
    assert active_piece(session).y == 2


def test_presses_are_ignored_and_releases_honoured_while_paused():
    session, clock = make_session()
    place_piece(session, 'T', 3, 5)
    session.move_left(True)
    session.pause()
    session.move_left(False)
    session.move_right(True)
    state = session_component(session.world, InputState)
    assert not state.left_held
    assert not state.right_held
    assert state.direction == 0
    session.resume()
    clock.set(500)
    session.advance()
    assert _x(session) == 2
