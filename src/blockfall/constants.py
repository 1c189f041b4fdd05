GRID_COLS = 10
GRID_ROWS = 20

# Upward retries when the canonical spawn row is blocked (hidden buffer above the board).
SPAWN_RETRY_OFFSETS = 3

# Movement feel, all in milliseconds.
DAS_MS = 80             # delay before horizontal auto-repeat starts
ARR_MS = 30             # horizontal auto-repeat interval
SOFT_DROP_INTERVAL_MS = 60
LOCK_DELAY_MS = 450
MAX_LOCK_RESETS = 15

# DAS/ARR multipliers selectable by the host.
SENSITIVITY_PRESETS = {
    'slow': (1.5, 1.5),
    'normal': (1.0, 1.0),
    'fast': (0.7, 0.6),
    'instant': (0.4, 0.3),
}

# Gravity (ms per row) for levels 1..15. Past the table the last entry decays per level.
GRAVITY_TABLE = (500, 520, 450, 380, 320, 270, 230, 200, 170, 150, 135, 120, 105, 95, 85)
GRAVITY_DECAY_MS = 5
MIN_GRAVITY_MS = 20  # kill-speed floor

# Points per clear size (index = rows cleared), multiplied by the level.
LINE_SCORES = (0, 100, 300, 500, 900)
LINES_PER_LEVEL = 10
CLEAR_LABELS = {2: 'DOUBLE', 3: 'TRIPLE', 4: 'TETRIS'}

# Clear window before rows are removed.
CLEAR_DURATION_MS = 360
TETRIS_CLEAR_DURATION_MS = 650

# Cosmetic screen shake after a four-line clear (data only).
SHAKE_DURATION_MS = 450
SHAKE_AMPLITUDE = 4.0


# ============================================================================
# TETROMINOES
# ============================================================================
PIECE_TYPES = ('I', 'O', 'T', 'S', 'Z', 'J', 'L')

# Spawn orientation inside each bounding box; rows grow downward.
BASE_SHAPES = {
    'I': ((0, 0, 0, 0), (1, 1, 1, 1), (0, 0, 0, 0), (0, 0, 0, 0)),
    'O': ((1, 1), (1, 1)),
    'T': ((0, 1, 0), (1, 1, 1), (0, 0, 0)),
    'S': ((0, 1, 1), (1, 1, 0), (0, 0, 0)),
    'Z': ((1, 1, 0), (0, 1, 1), (0, 0, 0)),
    'J': ((1, 0, 0), (1, 1, 1), (0, 0, 0)),
    'L': ((0, 0, 1), (1, 1, 1), (0, 0, 0)),
}

# SRS wall kicks keyed by (from_rotation, to_rotation). Offsets are in board
# coordinates (y grows downward), tried in order; (0, 0) is always first.
JLSTZ_KICKS = {
    (0, 1): ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (1, 0): ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    (1, 2): ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    (2, 1): ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (2, 3): ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    (3, 2): ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (3, 0): ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (0, 3): ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
}
I_KICKS = {
    (0, 1): ((0, 0), (-2, 0), (1, 0), (-2, 1), (1, -2)),
    (1, 0): ((0, 0), (2, 0), (-1, 0), (2, -1), (-1, 2)),
    (1, 2): ((0, 0), (-1, 0), (2, 0), (-1, -2), (2, 1)),
    (2, 1): ((0, 0), (1, 0), (-2, 0), (1, 2), (-2, -1)),
    (2, 3): ((0, 0), (2, 0), (-1, 0), (2, -1), (-1, 2)),
    (3, 2): ((0, 0), (-2, 0), (1, 0), (-2, 1), (1, -2)),
    (3, 0): ((0, 0), (1, 0), (-2, 0), (1, 2), (-2, -1)),
    (0, 3): ((0, 0), (-1, 0), (2, 0), (-1, -2), (2, 1)),
}
