from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class InputState:
    """Held-key bookkeeping for DAS/ARR and soft-drop repeat.

    ``direction`` is the active horizontal direction (-1, 0 or 1); only the most
    recently pressed side is active. Times are absolute clock values; while
    paused they are stored as elapsed offsets in the ``*_elapsed`` fields.
    """
    left_held: bool = False
    right_held: bool = False
    direction: int = 0
    press_time: Optional[float] = None
    last_shift: Optional[float] = None
    soft_drop_held: bool = False
    last_soft_drop: Optional[float] = None
    press_elapsed: Optional[float] = None
    shift_elapsed: Optional[float] = None
    soft_drop_elapsed: Optional[float] = None

    def release_horizontal(self) -> None:
        self.left_held = False
        self.right_held = False
        self.direction = 0
        self.press_time = None
        self.last_shift = None

    def release_all(self) -> None:
        self.release_horizontal()
        self.soft_drop_held = False
        self.last_soft_drop = None
        self.press_elapsed = None
        self.shift_elapsed = None
        self.soft_drop_elapsed = None
