"""Session state resource describing the high-level lifecycle."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class SessionMode(Enum):
    """Lifecycle states of a session; commands only act while PLAYING."""
    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the session mode.

    ``generation`` increases on every start so time-based work scheduled by an
    earlier run can recognise itself as stale. ``paused_at`` is the clock value
    at which the session was paused.
    """
    mode: SessionMode = SessionMode.IDLE
    generation: int = 0
    paused_at: Optional[float] = None
