from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class LockState:
    """Lock-delay countdown for the current piece.

    ``deadline`` is the absolute lock time while armed. ``resets_used`` counts
    the moves/rotations that postponed the lock; it starts over with each piece.
    ``remaining`` holds the frozen countdown while the session is paused.
    """
    reset_budget: int
    deadline: Optional[float] = None
    resets_used: int = 0
    remaining: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self.deadline is not None or self.remaining is not None

    @property
    def budget_exhausted(self) -> bool:
        return self.resets_used >= self.reset_budget

    def reset_for_new_piece(self) -> None:
        self.deadline = None
        self.remaining = None
        self.resets_used = 0
