from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from hexmatch.components.board import Board, Position
from hexmatch.components.cell import Cell

Offset = Tuple[int, int]

GRAVITY_DOWN: Offset = (0, -1)


@dataclass(frozen=True, slots=True)
class Move:
    """Gravity step: slide a cell to the first empty offset."""
    priority: int
    offsets: Tuple[Offset, ...]

    def apply(self, board: Board, x: int, y: int, fallback: Optional[Cell] = None) -> Optional[Position]:
        """Move the cell at ``(x, y)`` (or ``fallback`` when off-grid) and return its destination.

        Returns None when there is nothing to move or no offset lands on an
        empty in-bounds cell; the board is left untouched in that case.
        """
        in_grid = board.is_valid(x, y)
        element = board.get(x, y) if in_grid else fallback
        if element is None or element.is_empty:
            return None
        for dx, dy in self.offsets:
            target = board.get(x + dx, y + dy)
            if target is not None and target.is_empty:
                board.set(x + dx, y + dy, element)
                if in_grid:
                    board.clear(x, y)
                return x + dx, y + dy
        return None


class MoveSet:
    def __init__(self, moves: Iterable[Move]):
        self._moves: List[Move] = sorted(moves, key=lambda move: move.priority)

    def __iter__(self) -> Iterator[Move]:
        return iter(self._moves)

    def __len__(self) -> int:
        return len(self._moves)


def default_moves() -> MoveSet:
    return MoveSet([Move(priority=0, offsets=(GRAVITY_DOWN,))])
