from dataclasses import dataclass

from hexmatch.components.board import Position
from hexmatch.components.cell import EMPTY_CELL, Cell


@dataclass(slots=True)
class ColumnGenerator:
    """Source of new cells sitting just above the top of one column.

    ``source`` is outside the grid; the pending cell slides in from there.
    """
    column: int
    source: Position
    pending: Cell = EMPTY_CELL
