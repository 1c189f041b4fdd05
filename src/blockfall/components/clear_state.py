from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class ClearState:
    """Present on the session entity only while full rows wait to be removed.

    ``generation`` ties the window to the session run that created it so a
    restart can never finalize a stale clear.
    """
    rows: List[int] = field(default_factory=list)
    start: float = 0.0
    duration: float = 0.0
    is_tetris: bool = False
    generation: int = 0
    remaining: Optional[float] = None

    @property
    def deadline(self) -> float:
        return self.start + self.duration


@dataclass(slots=True)
class ShakeSignal:
    """Cosmetic shake request after a four-line clear; renderers decide how to show it."""
    start: float
    duration: float
    amplitude: float
    remaining: Optional[float] = None

    @property
    def deadline(self) -> float:
        return self.start + self.duration
