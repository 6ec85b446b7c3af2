from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

from hexmatch.components.board import Board
from hexmatch.components.cell import BombState, Cell
from hexmatch.config import EngineConfig
from hexmatch.systems.match_engine import MatchEngine

# 3x3 boards written column by column: COLUMNS[x][y], y = 0 at the bottom.

# (0,0),(1,0),(1,1) already share color 1; nothing else lines up.
READY_TRIANGLE_COLUMNS = [[1, 2, 1], [1, 1, 2], [2, 1, 2]]

# Turning [(0,0),(1,0),(1,1)] twice clockwise (or once counter-clockwise)
# lines up (1,0),(2,0),(1,1) in color 1; a single clockwise turn matches nothing.
TWO_STEP_COLUMNS = [[1, 3, 2], [1, 2, 3], [1, 2, 3]]

# Two rules overlap at anchor (0,0): both triangles through (0,0) and (1,1) are color 1.
OVERLAP_COLUMNS = [[1, 1, 2], [1, 1, 3], [2, 3, 2]]


def make_engine(width: int = 3, height: int = 3, colors: int = 3, seed: int = 7, **overrides) -> MatchEngine:
    config = EngineConfig(width=width, height=height, color_count=colors, seed=seed, **overrides)
    return MatchEngine(config)


def board_from_columns(columns: Sequence[Sequence[int]]) -> Board:
    return Board.from_columns(columns)


def striped_board(width: int, height: int) -> Board:
    """Columns cycling through colors 1, 2, 3.

    Neighbouring columns never share a color, so the board holds no match and
    no rotation can create one.
    """
    return Board.from_columns([[1 + x % 3] * height for x in range(width)])


def with_bombs(board: Board, bombs: Iterable[Tuple[int, int, int]]) -> Board:
    for x, y, moves_left in bombs:
        board.set(x, y, Cell(board.color_at(x, y), BombState(moves_left)))
    return board


def with_holes(board: Board, holes: Iterable[Tuple[int, int]]) -> Board:
    for x, y in holes:
        board.clear(x, y)
    return board


def find_selection(engine: MatchEngine, *, valid: bool, avoid: Optional[Tuple[int, int]] = None):
    """First ``(selection, clockwise)`` in raster order whose rotation matches (or, with
    ``valid=False``, matches in neither direction). Selections containing ``avoid``
    are skipped. Returns None when nothing qualifies.
    """
    board = engine.board_snapshot()
    for x, y in board.positions():
        selection = engine.select(x, y)
        if avoid in selection:
            continue
        results = [engine.attempt_rotation(selection, clockwise, commit=False).valid for clockwise in (True, False)]
        if valid and any(results):
            return selection, results[0]
        if not valid and not any(results):
            return selection, True
    return None


def settle(engine: MatchEngine) -> list:
    """Run auto-resolve and fill until the board holds no match; returns the valid outcomes."""
    outcomes = []
    while not engine.is_game_over:
        outcome = engine.trigger_auto_resolve()
        if not outcome.valid:
            break
        outcomes.append(outcome)
        engine.resolve_fill()
    return outcomes
