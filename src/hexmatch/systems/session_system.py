from __future__ import annotations

import logging
from typing import List, Optional

from hexmatch.components.board import Position
from hexmatch.components.game_state import GAME_OVER_BOMB, GAME_OVER_NO_MOVES
from hexmatch.constants import FULL_TURN_STEPS
from hexmatch.events.bus import (
    EVENT_AUTO_RESOLVE_REQUEST,
    EVENT_BOMBS_UPDATED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CELL_SELECT_REQUEST,
    EVENT_CELLS_EXPLODED,
    EVENT_FILL_COMPLETED,
    EVENT_GAME_OVER,
    EVENT_ROTATION_ACCEPTED,
    EVENT_ROTATION_REJECTED,
    EVENT_ROTATION_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_CHANGED,
    EVENT_SESSION_RESTART_REQUEST,
    EVENT_SESSION_STARTED,
    EventBus,
)
from hexmatch.events.outcomes import ExplodeOutcome
from hexmatch.systems.match_engine import MatchEngine

logger = logging.getLogger(__name__)


class SessionSystem:
    """Drives full turns on a MatchEngine and publishes what happened.

    The engine only returns outcomes; this system is the single place where
    they are turned into bus events for presentation code. A turn is:
    rotation, explosion, fill, then repeated auto-resolve and fill passes
    until the board is quiet or the game is over.
    """

    def __init__(self, engine: MatchEngine, event_bus: EventBus):
        self.engine = engine
        self.event_bus = event_bus
        self.selection: Optional[List[Position]] = None
        self._last_score = engine.score
        self.event_bus.subscribe(EVENT_CELL_SELECT_REQUEST, self.on_cell_select_request)
        self.event_bus.subscribe(EVENT_ROTATION_REQUEST, self.on_rotation_request)
        self.event_bus.subscribe(EVENT_AUTO_RESOLVE_REQUEST, self.on_auto_resolve_request)
        self.event_bus.subscribe(EVENT_SESSION_RESTART_REQUEST, self.on_restart_request)

    # ------------------------------------------------------------------
    # Bus handlers

    def on_cell_select_request(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        self.select(x, y)

    def on_rotation_request(self, sender, **kwargs):
        self.rotate(bool(kwargs.get('clockwise', False)))

    def on_auto_resolve_request(self, sender, **kwargs):
        self.auto_resolve()

    def on_restart_request(self, sender, **kwargs):
        self.restart()

    # ------------------------------------------------------------------
    # Turn flow

    def start(self) -> None:
        """Announce the board and clear any matches it was generated with."""
        config = self.engine.config
        self._last_score = self.engine.score
        self.event_bus.emit(EVENT_SESSION_STARTED, width=config.width, height=config.height, score=self._last_score)
        self.auto_resolve()

    def restart(self) -> None:
        self.engine.reset_session()
        self.selection = None
        self.start()

    def select(self, x: int, y: int) -> Optional[List[Position]]:
        if self.engine.is_game_over:
            return None
        self.selection = self.engine.select(x, y)
        self.event_bus.emit(EVENT_SELECTION_CHANGED, selection=list(self.selection))
        return self.selection

    def rotate(self, clockwise: bool) -> Optional[ExplodeOutcome]:
        if self.selection is None or self.engine.is_game_over:
            return None
        selection = self.selection
        outcome = self.engine.attempt_rotation(selection, clockwise)

        bomb_outcome = outcome.bomb_outcome
        if bomb_outcome.bombs:
            self.event_bus.emit(EVENT_BOMBS_UPDATED, bombs=list(bomb_outcome.bombs), exploded=bomb_outcome.exploded)

        if outcome.valid:
            path = self.engine.rotation_path(selection, outcome.pass_index, clockwise)
            self.event_bus.emit(
                EVENT_ROTATION_ACCEPTED,
                selection=list(selection),
                clockwise=clockwise,
                pass_index=outcome.pass_index,
                path=path,
            )
        else:
            # Rejected rotations animate a full turn back to where they started.
            # Partial selections have nothing to turn.
            path = []
            if len(selection) == 3:
                path = self.engine.rotation_path(selection, FULL_TURN_STEPS, clockwise)
            self.event_bus.emit(EVENT_ROTATION_REJECTED, selection=list(selection), clockwise=clockwise, path=path)

        self.selection = None
        self.event_bus.emit(EVENT_SELECTION_CHANGED, selection=None)

        if bomb_outcome.exploded:
            self._publish_explosion(outcome, depth=1)
            self._game_over(GAME_OVER_BOMB)
        elif outcome.valid:
            self._resolve(outcome)
        return outcome

    def auto_resolve(self) -> Optional[ExplodeOutcome]:
        if self.engine.is_game_over:
            return None
        outcome = self.engine.trigger_auto_resolve()
        if outcome.valid:
            self._resolve(outcome)
        return outcome

    def _resolve(self, outcome: ExplodeOutcome) -> None:
        depth = 1
        while True:
            self._publish_explosion(outcome, depth)
            fill = self.engine.resolve_fill()
            self.event_bus.emit(EVENT_FILL_COMPLETED, outcome=fill, depth=depth)
            if not fill.moves_left:
                self._game_over(GAME_OVER_NO_MOVES)
                return
            outcome = self.engine.trigger_auto_resolve()
            if not outcome.valid:
                self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth)
                return
            depth += 1

    def _publish_explosion(self, outcome: ExplodeOutcome, depth: int) -> None:
        self.event_bus.emit(EVENT_CELLS_EXPLODED, outcome=outcome, depth=depth)
        delta = outcome.score - self._last_score
        self._last_score = outcome.score
        if delta:
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=outcome.score, delta=delta)

    def _game_over(self, reason: str) -> None:
        logger.info("Game over (%s) with score %d", reason, self.engine.score)
        self.event_bus.emit(EVENT_GAME_OVER, reason=reason, score=self.engine.score)
