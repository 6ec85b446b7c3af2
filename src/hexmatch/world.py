from __future__ import annotations

import itertools

import esper

from hexmatch.components.board import Board
from hexmatch.components.column_generator import ColumnGenerator
from hexmatch.components.game_state import GameState
from hexmatch.components.score_state import ScoreState
from hexmatch.config import EngineConfig

_world_ids = itertools.count(1)


def create_world(config: EngineConfig) -> str:
    """Create and activate a fresh esper world context for one engine.

    Returns the context name; callers switch back to it with
    ``esper.switch_world`` before touching its components.
    """
    name = f"hexmatch-{next(_world_ids)}"
    esper.switch_world(name)

    esper.create_entity(GameState())
    esper.create_entity(
        ScoreState(bomb_cost=config.bomb_score, explosion_score=config.explosion_score)
    )
    esper.create_entity(Board(config.width, config.height))

    # One generator per column, parked on the row just above the grid.
    for x in range(config.width):
        esper.create_entity(ColumnGenerator(column=x, source=(x, config.height)))
    return name


def destroy_world(name: str) -> None:
    if esper.current_world == name:
        esper.switch_world("default")
    esper.delete_world(name)
