from __future__ import annotations

from typing import List

import esper

from hexmatch.components.board import Board
from hexmatch.components.column_generator import ColumnGenerator
from hexmatch.components.score_state import ScoreState


def get_board_entity() -> int:
    for entity, _ in esper.get_component(Board):
        return entity
    raise RuntimeError("Board component not found")


def get_board() -> Board:
    return esper.component_for_entity(get_board_entity(), Board)


def replace_board(board: Board) -> None:
    """Swap the live board for ``board`` (used to promote a mock grid)."""
    esper.add_component(get_board_entity(), board)


def get_score_state() -> ScoreState:
    for _, state in esper.get_component(ScoreState):
        return state
    raise RuntimeError("ScoreState component not found")


def get_generators() -> List[ColumnGenerator]:
    return sorted((gen for _, gen in esper.get_component(ColumnGenerator)), key=lambda gen: gen.column)
