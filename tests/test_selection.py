import pytest

from hexmatch.rules.match_rules import TRIPLE_PLACEMENTS
from hexmatch.rules.selection import SelectionResolver


def _rule_triangles(width, height):
    triangles = set()
    for x in range(width):
        for y in range(height):
            for parity, offsets in TRIPLE_PLACEMENTS:
                if (x % 2, y % 2) != parity:
                    continue
                cells = frozenset((x + dx, y + dy) for dx, dy in offsets)
                if all(0 <= cx < width and 0 <= cy < height for cx, cy in cells):
                    triangles.add(cells)
    return triangles


def test_even_column_interior_uses_first_pattern():
    resolver = SelectionResolver(8, 9)
    assert resolver.resolve((2, 2)) == [(2, 2), (2, 3), (3, 3)]


def test_odd_column_interior_is_reordered():
    resolver = SelectionResolver(8, 9)
    assert resolver.resolve((1, 1)) == [(1, 1), (1, 2), (2, 1)]


def test_top_right_corner_falls_back_to_inward_pattern():
    resolver = SelectionResolver(8, 9)
    assert resolver.resolve((7, 8)) == [(6, 7), (7, 8), (7, 7)]


def test_clicked_cell_is_always_part_of_selection():
    resolver = SelectionResolver(8, 9)
    for x in range(8):
        for y in range(9):
            assert (x, y) in resolver.resolve((x, y))


@pytest.mark.parametrize("width,height", [(8, 9), (3, 3), (2, 2), (5, 4)])
def test_every_selection_is_a_matchable_triangle(width, height):
    resolver = SelectionResolver(width, height)
    triangles = _rule_triangles(width, height)
    for x in range(width):
        for y in range(height):
            selection = resolver.resolve((x, y))
            assert len(set(selection)) == 3
            assert all(resolver.in_bounds(cx, cy) for cx, cy in selection)
            assert frozenset(selection) in triangles


def test_single_column_grid_yields_partial_selection():
    resolver = SelectionResolver(1, 3)
    assert resolver.resolve((0, 1)) == [(0, 1)]
