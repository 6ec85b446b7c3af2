import pytest

from hexmatch.components.board import Board
from hexmatch.components.game_state import GAME_OVER_NO_MOVES, EngineMode
from hexmatch.config import BoardGenerationError, ConfigurationError, EngineConfig
from hexmatch.rules.match_rules import RuleSet
from hexmatch.systems.match_engine import MatchEngine

from tests.helpers import READY_TRIANGLE_COLUMNS, make_engine, striped_board


@pytest.mark.parametrize("seed", range(4))
@pytest.mark.parametrize("width,height,colors", [(8, 9, 5), (3, 3, 3), (5, 4, 4)])
def test_new_engine_always_has_a_move(seed, width, height, colors):
    engine = make_engine(width=width, height=height, colors=colors, seed=seed)
    board = engine.board_snapshot()
    assert board.count_filled() == width * height
    assert all(1 <= board.color_at(x, y) <= colors for x, y in board.positions())
    assert engine.has_available_move()
    assert engine.mode == EngineMode.IDLE
    assert engine.score == 0
    engine.close()


def test_same_seed_same_game():
    first = make_engine(width=8, height=9, colors=5, seed=42)
    second = make_engine(width=8, height=9, colors=5, seed=42)
    assert first.board_snapshot().colors() == second.board_snapshot().colors()
    first.close()
    second.close()


def test_default_configuration_builds():
    engine = MatchEngine()
    assert (engine.config.width, engine.config.height) == (8, 9)
    assert len(engine.rules) == 8 * engine.config.color_count
    engine.close()


def test_invalid_configuration_raises_before_any_state():
    with pytest.raises(ConfigurationError):
        MatchEngine(EngineConfig(color_count=20))


def test_unplayable_grid_exhausts_refresh_budget():
    with pytest.raises(BoardGenerationError):
        MatchEngine(EngineConfig(width=1, height=3, max_refresh_attempts=3, seed=1))


def test_striped_board_has_no_move():
    engine = make_engine(width=6, height=6, colors=3)
    engine.load_board(striped_board(6, 6))
    assert not engine.has_available_move()
    engine.close()


def test_fill_without_moves_ends_the_game():
    engine = make_engine(width=6, height=6, colors=3)
    engine.load_board(striped_board(6, 6))

    fill = engine.resolve_fill()

    assert not fill.moves_left
    assert engine.is_game_over
    assert engine.game_state.game_over_reason == GAME_OVER_NO_MOVES
    engine.close()


def test_game_over_is_sticky_until_reset():
    engine = make_engine(width=6, height=6, colors=3)
    engine.load_board(striped_board(6, 6))
    engine.resolve_fill()

    engine.trigger_auto_resolve()

    assert engine.mode == EngineMode.GAME_OVER
    assert engine.game_state.game_over_reason == GAME_OVER_NO_MOVES
    engine.close()


def test_refresh_replaces_dead_board():
    engine = make_engine(width=6, height=6, colors=3)
    engine.load_board(striped_board(6, 6))
    engine.initialize_or_refresh()
    assert engine.has_available_move()
    engine.close()


def test_reset_session_starts_over():
    engine = make_engine(colors=2)
    engine.load_board(Board.from_columns(READY_TRIANGLE_COLUMNS))
    engine.attempt_rotation([(0, 0), (1, 0), (1, 1)], clockwise=True)
    engine._activate()
    engine.scoring.state.dropped_bomb_count = 3
    engine.load_board(striped_board(3, 3))
    engine.resolve_fill()
    assert engine.is_game_over

    engine.reset_session()

    assert engine.score == 0
    assert engine.dropped_bomb_count == 0
    assert engine.mode == EngineMode.IDLE
    assert engine.game_state.game_over_reason is None
    assert engine.game_state.player_turns == 0
    assert engine.has_available_move()
    engine.close()


def test_engines_keep_separate_state():
    first = make_engine(colors=2, seed=1)
    second = make_engine(colors=2, seed=2)
    first.load_board(Board.from_columns(READY_TRIANGLE_COLUMNS))
    first.attempt_rotation([(0, 0), (1, 0), (1, 1)], clockwise=True)
    assert first.score == 15
    assert second.score == 0
    first.close()
    second.close()


def test_injected_empty_rule_set_is_used():
    # With no rules nothing can ever match, so no playable board exists.
    with pytest.raises(BoardGenerationError):
        MatchEngine(EngineConfig(width=3, height=3, color_count=2, max_refresh_attempts=2), rules=RuleSet([]))


@pytest.mark.parametrize("seed", range(10))
def test_crowded_palette_builds_or_reports_generation_error(seed):
    config = EngineConfig(width=2, height=2, color_count=15, seed=seed, max_refresh_attempts=1)
    try:
        engine = MatchEngine(config)
    except BoardGenerationError as exc:
        assert "1 attempts" in str(exc)
    else:
        assert engine.has_available_move()
        engine.close()
