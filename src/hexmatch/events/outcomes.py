"""Structured results returned by the engine.

The engine never publishes events itself; callers receive these objects and
decide how to dispatch them (see ``SessionSystem``).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from hexmatch.components.board import Position
from hexmatch.components.cell import Cell


class MatchPattern(Enum):
    TRIPLE = "triple"


@dataclass(slots=True)
class ExplodeElement:
    """One rule matched at one anchor: the cleared cells and their color."""
    color: int
    pattern: MatchPattern
    positions: List[Position]

    @property
    def size(self) -> int:
        return len(self.positions)


@dataclass(frozen=True, slots=True)
class BombElement:
    position: Position
    moves_left: int


@dataclass(slots=True)
class BombOutcome:
    exploded: bool = False
    bombs: List[BombElement] = field(default_factory=list)


@dataclass(slots=True)
class ExplodeOutcome:
    valid: bool
    pass_index: int = 0
    explode_elements: List[ExplodeElement] = field(default_factory=list)
    bomb_outcome: BombOutcome = field(default_factory=BombOutcome)
    score: int = 0
    selection: Optional[List[Position]] = None
    clockwise: bool = False

    @property
    def player_initiated(self) -> bool:
        return bool(self.selection)

    @property
    def exploded_count(self) -> int:
        return sum(element.size for element in self.explode_elements)

    def exploded_positions(self) -> List[Position]:
        return [pos for element in self.explode_elements for pos in element.positions]


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A cell sliding from ``source`` to ``target``.

    ``source == target`` marks a freshly generated cell appearing at its
    generator coordinate above the grid.
    """
    cell: Cell
    source: Position
    target: Position

    @property
    def is_spawn(self) -> bool:
        return self.source == self.target


@dataclass(slots=True)
class FillOutcome:
    moves_left: bool
    cascade_passes: List[List[MoveRecord]] = field(default_factory=list)
    score: int = 0

    def spawns(self) -> List[MoveRecord]:
        return [record for batch in self.cascade_passes for record in batch if record.is_spawn]

    def slides(self) -> List[MoveRecord]:
        return [record for batch in self.cascade_passes for record in batch if not record.is_spawn]
