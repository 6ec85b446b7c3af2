from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hexmatch.constants import EMPTY


@dataclass(frozen=True, slots=True)
class BombState:
    """Countdown attached to a cell; reaching zero ends the session."""
    moves_left: int

    def ticked(self) -> "BombState":
        return BombState(moves_left=self.moves_left - 1)


@dataclass(frozen=True, slots=True)
class Cell:
    """Value stored at one grid coordinate.

    Cells are immutable: changing a color or bomb timer means writing a new
    Cell back to the board.
    """
    color: int = EMPTY
    bomb: Optional[BombState] = None

    @property
    def is_empty(self) -> bool:
        return self.color == EMPTY

    @property
    def has_bomb(self) -> bool:
        return self.bomb is not None


EMPTY_CELL = Cell()
