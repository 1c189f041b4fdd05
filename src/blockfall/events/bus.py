from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# HOST COMMANDS -> SYSTEMS
# Each request event has exactly one receiving system.
# ============================================================================
EVENT_INPUT_HORIZONTAL = "input_horizontal"    # payload: direction=-1|1, pressed=bool, now=float
EVENT_INPUT_SOFT_DROP = "input_soft_drop"      # payload: pressed=bool, now=float
EVENT_MOVE_REQUEST = "move_request"            # payload: dx=int, now=float
EVENT_ROTATE_REQUEST = "rotate_request"        # payload: delta=1|-1, now=float
EVENT_SOFT_DROP_STEP = "soft_drop_step"        # payload: now=float
EVENT_HARD_DROP_REQUEST = "hard_drop_request"  # payload: now=float
EVENT_HOLD_REQUEST = "hold_request"            # payload: now=float
EVENT_SPAWN_REQUEST = "spawn_request"          # payload: now=float, source=str, piece_type=str|None
EVENT_SPAWN_FAILED = "spawn_failed"            # payload: piece_type=str, source=str


# ============================================================================
# PIECE LIFECYCLE
# ============================================================================
EVENT_PIECE_SPAWNED = "piece_spawned"    # payload: piece=Tetromino, source=str
EVENT_PIECE_MOVED = "piece_moved"        # payload: piece=Tetromino, dx=int
EVENT_PIECE_ROTATED = "piece_rotated"    # payload: piece=Tetromino, kick=(x, y)
EVENT_SOFT_DROP = "soft_drop"            # payload: piece=Tetromino
EVENT_HARD_DROP = "hard_drop"            # payload: piece=Tetromino, distance=int
EVENT_PIECE_LOCKED = "piece_locked"      # payload: piece=Tetromino, cells=[(x, y), ...], now=float
EVENT_HOLD = "hold"                      # payload: held_type=str, swapped_in=str


# ============================================================================
# LINE CLEARS & SCORING
# ============================================================================
EVENT_CLEAR_STARTED = "clear_started"    # payload: rows=[int], duration=float, is_tetris=bool
EVENT_LINE_CLEAR = "line_clear"          # payload: count=int, rows=[int], points=int, label=str|None, is_tetris=bool
EVENT_SHAKE = "shake"                    # payload: duration=float, amplitude=float
EVENT_SCORE_CHANGED = "score_changed"    # payload: score=int
EVENT_LINES_CHANGED = "lines_changed"    # payload: lines=int
EVENT_LEVEL_CHANGED = "level_changed"    # payload: level=int


# ============================================================================
# SESSION FLOW & STATE
# ============================================================================
EVENT_SESSION_MODE_CHANGED = "session_mode_changed"  # payload: previous_mode=SessionMode|None, new_mode=SessionMode
EVENT_STATE_CHANGED = "state_changed"                # payload: is_playing=bool
EVENT_GAME_RESTART = "game_restart"                  # payload: None
EVENT_GAME_OVER = "game_over"                        # payload: score=int, lines=int, level=int


# Events a host may consume; EventQueue records these by default.
OUTWARD_EVENTS = (
    EVENT_PIECE_SPAWNED,
    EVENT_PIECE_MOVED,
    EVENT_PIECE_ROTATED,
    EVENT_SOFT_DROP,
    EVENT_HARD_DROP,
    EVENT_PIECE_LOCKED,
    EVENT_HOLD,
    EVENT_CLEAR_STARTED,
    EVENT_LINE_CLEAR,
    EVENT_SHAKE,
    EVENT_SCORE_CHANGED,
    EVENT_LINES_CHANGED,
    EVENT_LEVEL_CHANGED,
    EVENT_SESSION_MODE_CHANGED,
    EVENT_STATE_CHANGED,
    EVENT_GAME_RESTART,
    EVENT_GAME_OVER,
)
