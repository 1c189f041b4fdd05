from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Tetromino:
    """Immutable piece placement; moves produce a new instance via ``dataclasses.replace``."""
    type: str
    rotation: int
    x: int
    y: int


@dataclass(slots=True)
class ActivePiece:
    """Holds the falling piece, or ``None`` between lock and the next spawn."""
    piece: Optional[Tetromino] = None


@dataclass(slots=True)
class NextPiece:
    next_type: Optional[str] = None
