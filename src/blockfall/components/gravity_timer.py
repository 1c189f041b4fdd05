from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class GravityTimer:
    """Absolute time of the next gravity step (``remaining`` while paused)."""
    deadline: Optional[float] = None
    remaining: Optional[float] = None
