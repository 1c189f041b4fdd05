"""Tunable engine settings with the canonical defaults from ``constants``."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple

from blockfall import constants as C


@dataclass(slots=True)
class EngineConfig:
    """Timing, scoring and board settings shared by every system of a session.

    Durations are milliseconds. Negative durations are clamped to zero and the
    start level is clamped to at least 1.
    """

    cols: int = C.GRID_COLS
    rows: int = C.GRID_ROWS
    start_level: int = 1
    das_ms: float = C.DAS_MS
    arr_ms: float = C.ARR_MS
    soft_drop_interval_ms: float = C.SOFT_DROP_INTERVAL_MS
    lock_delay_ms: float = C.LOCK_DELAY_MS
    max_lock_resets: int = C.MAX_LOCK_RESETS
    gravity_table: Tuple[float, ...] = field(default=C.GRAVITY_TABLE)
    gravity_decay_ms: float = C.GRAVITY_DECAY_MS
    min_gravity_ms: float = C.MIN_GRAVITY_MS
    line_scores: Tuple[int, ...] = field(default=C.LINE_SCORES)
    lines_per_level: int = C.LINES_PER_LEVEL
    clear_duration_ms: float = C.CLEAR_DURATION_MS
    tetris_clear_duration_ms: float = C.TETRIS_CLEAR_DURATION_MS
    shake_duration_ms: float = C.SHAKE_DURATION_MS
    shake_amplitude: float = C.SHAKE_AMPLITUDE

    def __post_init__(self) -> None:
        self.start_level = max(1, int(self.start_level))
        self.max_lock_resets = max(0, int(self.max_lock_resets))
        self.lines_per_level = max(1, int(self.lines_per_level))
        for name in (
            'das_ms',
            'arr_ms',
            'soft_drop_interval_ms',
            'lock_delay_ms',
            'gravity_decay_ms',
            'min_gravity_ms',
            'clear_duration_ms',
            'tetris_clear_duration_ms',
            'shake_duration_ms',
        ):
            setattr(self, name, max(0.0, float(getattr(self, name))))
        self.gravity_table = tuple(self.gravity_table) or C.GRAVITY_TABLE
        self.line_scores = tuple(self.line_scores)

    def with_sensitivity(self, preset: str) -> EngineConfig:
        """Return a copy with this config's DAS/ARR scaled by a named preset."""
        try:
            das_mult, arr_mult = C.SENSITIVITY_PRESETS[preset]
        except KeyError:
            raise ValueError(f"Unknown sensitivity preset: {preset}") from None
        return replace(self, das_ms=self.das_ms * das_mult, arr_ms=self.arr_ms * arr_mult)

    def line_score(self, count: int) -> int:
        if count <= 0 or not self.line_scores:
            return 0
        index = min(count, len(self.line_scores) - 1)
        return self.line_scores[index]
