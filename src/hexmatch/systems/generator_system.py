from __future__ import annotations

import logging
import random
from typing import List

from hexmatch.components.board import Board
from hexmatch.components.cell import BombState, Cell
from hexmatch.components.column_generator import ColumnGenerator
from hexmatch.systems.board_ops import get_generators

logger = logging.getLogger(__name__)


class GeneratorSystem:
    """Produces new cells for the column generators and for whole-board refreshes."""

    def __init__(self, rng: random.Random, color_count: int, bomb_timer: int):
        self.rng = rng
        self.color_count = color_count
        self.bomb_timer = bomb_timer

    def generate(self, with_bomb: bool = False) -> Cell:
        # Uniform over real colors; EMPTY (0) is never produced.
        color = self.rng.randint(1, self.color_count)
        bomb = BombState(moves_left=self.bomb_timer) if with_bomb else None
        return Cell(color=color, bomb=bomb)

    def generators(self) -> List[ColumnGenerator]:
        return get_generators()

    def prime(self) -> None:
        """Give every column generator a pending cell."""
        for generator in self.generators():
            generator.pending = self.generate()

    def regenerate(self, generator: ColumnGenerator, with_bomb: bool = False) -> None:
        generator.pending = self.generate(with_bomb)
        if with_bomb:
            logger.info("Bomb queued above column %d", generator.column)

    def fill_board(self, board: Board) -> None:
        for x, y in board.positions():
            board.set(x, y, self.generate())
