from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from hexmatch.components.cell import EMPTY_CELL, Cell

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Hexagonal grid of cells addressed by ``(x, y)``.

    Columns are indexed by ``x``; odd columns sit half a cell lower when drawn.
    ``y == 0`` is the bottom row and gravity pulls toward lower ``y``.
    """
    width: int
    height: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[EMPTY_CELL for _ in range(self.height)] for _ in range(self.width)]

    @classmethod
    def from_columns(cls, columns: Sequence[Sequence[int]]) -> "Board":
        """Build a board from per-column color ids (``columns[x][y]``)."""
        width = len(columns)
        height = len(columns[0]) if width else 0
        cells = [[Cell(color) for color in column] for column in columns]
        return cls(width=width, height=height, cells=cells)

    def is_valid(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[Cell]:
        if not self.is_valid(x, y):
            return None
        return self.cells[x][y]

    def color_at(self, x: int, y: int) -> Optional[int]:
        cell = self.get(x, y)
        return None if cell is None else cell.color

    def set(self, x: int, y: int, cell: Cell) -> None:
        self.cells[x][y] = cell

    def clear(self, x: int, y: int) -> None:
        self.cells[x][y] = EMPTY_CELL

    def positions(self) -> Iterator[Position]:
        """Raster order used by every scan: column by column, bottom to top."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def clone(self) -> "Board":
        # Cells are frozen, so copying the column lists is a full deep copy.
        return Board(self.width, self.height, [list(column) for column in self.cells])

    def colors(self) -> List[List[int]]:
        return [[cell.color for cell in column] for column in self.cells]

    def count_filled(self) -> int:
        return sum(1 for x, y in self.positions() if not self.cells[x][y].is_empty)

    def bomb_positions(self) -> List[Position]:
        return [(x, y) for x, y in self.positions() if self.cells[x][y].has_bomb]
