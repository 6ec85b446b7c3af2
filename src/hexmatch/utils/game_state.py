from __future__ import annotations

from typing import Optional

import esper

from hexmatch.components.game_state import EngineMode, GameState


def get_or_create_game_state() -> GameState:
    """Return the shared GameState component, creating it if absent."""
    for _, state in esper.get_component(GameState):
        return state
    state = GameState()
    esper.create_entity(state)
    return state


def set_engine_mode(mode: EngineMode, *, reason: Optional[str] = None) -> EngineMode:
    """Update the engine mode and return the previous one.

    Once the game is over only an explicit reset (IDLE with the reason
    cleared by ``reset_game_state``) leaves GAME_OVER.
    """
    state = get_or_create_game_state()
    previous = state.mode
    if previous == EngineMode.GAME_OVER and mode != EngineMode.GAME_OVER:
        return previous
    state.mode = mode
    if mode == EngineMode.GAME_OVER and state.game_over_reason is None:
        state.game_over_reason = reason
    return previous


def reset_game_state() -> None:
    state = get_or_create_game_state()
    state.mode = EngineMode.IDLE
    state.game_over_reason = None
    state.player_turns = 0
    state.auto_resolves = 0
