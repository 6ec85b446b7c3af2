"""Resolve a clicked cell into the three-cell triangle the player rotates."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from hexmatch.components.board import Position

Offset = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class SelectionPattern:
    """Two neighbour offsets plus the permutation that puts the triple in rotation order."""
    offsets: Tuple[Offset, Offset]
    order: Tuple[int, int, int]


# Tried in order; the first pattern that stays on the grid wins.
ODD_COLUMN_PATTERNS: Tuple[SelectionPattern, ...] = (
    SelectionPattern(((1, 0), (0, 1)), (0, 2, 1)),
    SelectionPattern(((0, -1), (1, -1)), (1, 0, 2)),
    SelectionPattern(((-1, -1), (0, -1)), (1, 0, 2)),
    SelectionPattern(((-1, 0), (-1, -1)), (2, 1, 0)),
    SelectionPattern(((-1, 0), (0, 1)), (2, 0, 1)),
)

EVEN_COLUMN_PATTERNS: Tuple[SelectionPattern, ...] = (
    SelectionPattern(((0, 1), (1, 1)), (0, 1, 2)),
    SelectionPattern(((1, 0), (1, 1)), (0, 2, 1)),
    SelectionPattern(((-1, 0), (0, -1)), (1, 0, 2)),
    SelectionPattern(((-1, 0), (-1, 1)), (2, 0, 1)),
    SelectionPattern(((0, -1), (1, 0)), (1, 0, 2)),
)


class SelectionResolver:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def patterns_for(self, x: int) -> Tuple[SelectionPattern, ...]:
        return ODD_COLUMN_PATTERNS if x % 2 == 1 else EVEN_COLUMN_PATTERNS

    def resolve(self, clicked: Position) -> List[Position]:
        """Return the clicked cell and its two partners in canonical order.

        When no pattern fits (only on degenerate one-row or one-column grids)
        the clicked cell is returned alone.
        """
        x, y = clicked
        for pattern in self.patterns_for(x):
            candidates = [(x + dx, y + dy) for dx, dy in pattern.offsets]
            if all(self.in_bounds(cx, cy) for cx, cy in candidates):
                triple = [clicked, *candidates]
                return [triple[index] for index in pattern.order]
        return [clicked]
