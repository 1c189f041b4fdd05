from dataclasses import dataclass


@dataclass(slots=True)
class SessionCounters:
    """Score, cleared lines and level; only ``GameSession.start`` lowers them."""
    start_level: int = 1
    score: int = 0
    lines: int = 0
    level: int = 1

    def reset(self, start_level: int) -> None:
        self.start_level = max(1, start_level)
        self.score = 0
        self.lines = 0
        self.level = self.start_level
