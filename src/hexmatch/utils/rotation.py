from __future__ import annotations

from typing import List, Sequence

from hexmatch.components.board import Board, Position


def _cycle_indices(clockwise: bool) -> tuple[int, int]:
    return (0, 2) if clockwise else (2, 0)


def rotate_cells(board: Board, selection: Sequence[Position], steps: int, clockwise: bool) -> None:
    """Rotate the contents of a three-cell selection by ``steps`` 120 degree turns.

    One clockwise step moves the cell at index 1 to index 0, index 2 to
    index 1 and index 0 to index 2; counter-clockwise is the mirror.
    """
    first, last = _cycle_indices(clockwise)
    a, mid, b = selection[first], selection[1], selection[last]
    for _ in range(steps):
        held = board.get(*a)
        board.set(*a, board.get(*mid))
        board.set(*mid, board.get(*b))
        board.set(*b, held)


def rotation_path(selection: Sequence[Position], turns: int, clockwise: bool) -> List[List[Position]]:
    """Destinations of the three selected cells after each of ``turns`` steps.

    ``path[step][i]`` is where the cell that started at ``selection[i]`` sits
    after ``step + 1`` turns, matching what ``rotate_cells`` does to contents.
    """
    # Coordinates travel opposite to the content shuffle.
    first, last = _cycle_indices(not clockwise)
    path: List[List[Position]] = []
    for step in range(turns):
        coords = list(selection)
        for _ in range(step + 1):
            held = coords[first]
            coords[first] = coords[1]
            coords[1] = coords[last]
            coords[last] = held
        path.append(coords)
    return path
