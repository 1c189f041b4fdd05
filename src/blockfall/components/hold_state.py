from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class HoldState:
    """Stashed piece type and the once-per-piece usage flag (cleared on lock)."""
    held_type: Optional[str] = None
    used_since_last_lock: bool = False
