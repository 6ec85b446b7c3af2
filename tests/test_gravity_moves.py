from hexmatch.components.board import Board
from hexmatch.components.cell import Cell
from hexmatch.constants import EMPTY
from hexmatch.rules.moves import GRAVITY_DOWN, Move, MoveSet, default_moves


def _column_board(colors):
    return Board.from_columns([colors])


def default_moves_first() -> Move:
    return next(iter(default_moves()))


def test_cell_slides_into_empty_cell_below():
    board = _column_board([EMPTY, 2, 3])
    target = default_moves_first().apply(board, 0, 1)
    assert target == (0, 0)
    assert board.colors() == [[2, EMPTY, 3]]


def test_no_move_when_destination_filled_or_off_grid():
    board = _column_board([1, 2, EMPTY])
    move = default_moves_first()
    assert move.apply(board, 0, 0) is None
    assert move.apply(board, 0, 1) is None
    assert board.colors() == [[1, 2, EMPTY]]


def test_empty_source_does_not_move():
    board = _column_board([EMPTY, EMPTY, 3])
    assert default_moves_first().apply(board, 0, 1) is None


def test_fallback_element_enters_from_above_grid():
    board = _column_board([1, 2, EMPTY])
    spawned = Cell(4)
    target = default_moves_first().apply(board, 0, 3, fallback=spawned)
    assert target == (0, 2)
    assert board.get(0, 2) is spawned


def test_off_grid_without_fallback_is_ignored():
    board = _column_board([1, 2, EMPTY])
    assert default_moves_first().apply(board, 0, 3) is None


def test_first_empty_offset_wins():
    board = Board.from_columns([[EMPTY, 1], [EMPTY, EMPTY]])
    move = Move(priority=0, offsets=((0, -1), (1, -1)))
    assert move.apply(board, 0, 1) == (0, 0)
    assert board.get(1, 0).is_empty


def test_move_set_sorted_by_priority():
    slow = Move(priority=3, offsets=((1, -1),))
    fast = Move(priority=1, offsets=(GRAVITY_DOWN,))
    assert list(MoveSet([slow, fast])) == [fast, slow]
    assert len(default_moves()) == 1