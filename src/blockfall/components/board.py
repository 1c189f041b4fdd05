from dataclasses import dataclass, field
from typing import List, Optional

Cell = Optional[str]
Grid = List[List[Cell]]


def empty_row(cols: int) -> List[Cell]:
    return [None] * cols


@dataclass(slots=True)
class Board:
    """Locked cells of the playfield; row 0 is the top.

    A cell is ``None`` when empty, otherwise the piece type that locked there.
    """
    cols: int
    rows: int
    grid: Grid = field(default_factory=list)

    def __post_init__(self):
        if not self.grid:
            self.grid = [empty_row(self.cols) for _ in range(self.rows)]

    def clear(self) -> None:
        self.grid = [empty_row(self.cols) for _ in range(self.rows)]
