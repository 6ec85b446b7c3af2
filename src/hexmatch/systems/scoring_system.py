from __future__ import annotations

import logging
from dataclasses import replace

from hexmatch.components.board import Board
from hexmatch.components.score_state import ScoreState
from hexmatch.events.outcomes import BombElement, BombOutcome, ExplodeOutcome
from hexmatch.systems.board_ops import get_score_state

logger = logging.getLogger(__name__)


class ScoringSystem:
    """Score accumulation plus the bomb hazard tied to score milestones."""

    @property
    def state(self) -> ScoreState:
        return get_score_state()

    @property
    def score(self) -> int:
        return self.state.score

    def set_score(self, outcome: ExplodeOutcome) -> int:
        """Credit every exploded cell of a valid outcome; returns the points added."""
        if not outcome.valid:
            return 0
        state = self.state
        gained = outcome.exploded_count * state.explosion_score
        state.score += gained
        return gained

    def ready_bomb_count(self) -> int:
        """Bombs the current score pays for, reserved immediately.

        Reservations that cannot be placed must be handed back through
        ``left_bombs``.
        """
        state = self.state
        unused = state.score - state.dropped_bomb_count * state.bomb_cost
        if unused < state.bomb_cost:
            return 0
        ready = unused // state.bomb_cost
        state.dropped_bomb_count += ready
        return ready

    def left_bombs(self, count: int) -> None:
        self.state.dropped_bomb_count -= count

    def bomb_check(self, board: Board) -> BombOutcome:
        """Tick every bomb on the board down by one move.

        The whole board is always processed, even after a bomb has already
        reached zero, so every timer moves exactly once per call.
        """
        outcome = BombOutcome()
        for x, y in board.positions():
            cell = board.get(x, y)
            if cell is None or cell.bomb is None:
                continue
            bomb = cell.bomb.ticked()
            if bomb.moves_left <= 0:
                outcome.exploded = True
                logger.warning("Bomb exploded at (%d, %d)", x, y)
            board.set(x, y, replace(cell, bomb=bomb))
            outcome.bombs.append(BombElement(position=(x, y), moves_left=bomb.moves_left))
        return outcome

    def reset(self) -> None:
        state = self.state
        state.score = 0
        state.dropped_bomb_count = 0
