"""Core rules engine for the hex triple-rotate puzzle.

The engine owns one esper world context holding the live board, the score
state, the engine state and one generator per column. Every public method
activates that context first, so several engines may live in one process as
long as calls are not interleaved mid-operation.

Rotations are evaluated speculatively: the live board is cloned into two
mock boards, one turned by 120 degrees and one by 240, and the first mock
that contains a match replaces the live board.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

import esper

from hexmatch.components.board import Board, Position
from hexmatch.components.cell import Cell
from hexmatch.components.game_state import (
    GAME_OVER_BOMB,
    GAME_OVER_NO_MOVES,
    EngineMode,
    GameState,
)
from hexmatch.config import BoardGenerationError, EngineConfig
from hexmatch.constants import ROTATION_STEPS
from hexmatch.events.outcomes import (
    BombElement,
    ExplodeElement,
    ExplodeOutcome,
    FillOutcome,
    MoveRecord,
)
from hexmatch.rules.match_rules import RuleSet, build_rules
from hexmatch.rules.moves import MoveSet, default_moves
from hexmatch.rules.selection import SelectionResolver
from hexmatch.systems.board_ops import get_board, replace_board
from hexmatch.systems.generator_system import GeneratorSystem
from hexmatch.systems.scoring_system import ScoringSystem
from hexmatch.utils.game_state import get_or_create_game_state, reset_game_state, set_engine_mode
from hexmatch.utils.rotation import rotate_cells, rotation_path
from hexmatch.world import create_world, destroy_world

logger = logging.getLogger(__name__)


class MatchEngine:
    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        rules: RuleSet | None = None,
        moves: MoveSet | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = (config or EngineConfig()).validate()
        self.rules = rules if rules is not None else build_rules(self.config.color_count)
        self.moves = moves if moves is not None else default_moves()
        self.rng = rng or random.Random(self.config.seed)
        self.selection_resolver = SelectionResolver(self.config.width, self.config.height)
        self.world_name = create_world(self.config)
        self.generator_system = GeneratorSystem(self.rng, self.config.color_count, self.config.bomb_timer)
        self.scoring = ScoringSystem()
        self.generator_system.prime()
        self.initialize_or_refresh()
        logger.info(
            "Engine ready: %dx%d board, %d colors, %d rules",
            self.config.width,
            self.config.height,
            self.config.color_count,
            len(self.rules),
        )

    # ------------------------------------------------------------------
    # World access

    def _activate(self) -> None:
        if esper.current_world != self.world_name:
            esper.switch_world(self.world_name)

    def close(self) -> None:
        destroy_world(self.world_name)

    @property
    def game_state(self) -> GameState:
        self._activate()
        return get_or_create_game_state()

    @property
    def mode(self) -> EngineMode:
        return self.game_state.mode

    @property
    def is_game_over(self) -> bool:
        return self.mode == EngineMode.GAME_OVER

    @property
    def score(self) -> int:
        self._activate()
        return self.scoring.score

    @property
    def dropped_bomb_count(self) -> int:
        self._activate()
        return self.scoring.state.dropped_bomb_count

    def board_snapshot(self) -> Board:
        self._activate()
        return get_board().clone()

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        self._activate()
        return get_board().get(x, y)

    def color_at(self, x: int, y: int) -> Optional[int]:
        self._activate()
        return get_board().color_at(x, y)

    def bombs(self) -> List[BombElement]:
        self._activate()
        board = get_board()
        return [
            BombElement(position=(x, y), moves_left=board.get(x, y).bomb.moves_left)
            for x, y in board.bomb_positions()
        ]

    def load_board(self, board: Board) -> None:
        """Replace the live board with a copy of ``board``."""
        if (board.width, board.height) != (self.config.width, self.config.height):
            raise ValueError(
                f"Board is {board.width}x{board.height}, engine expects "
                f"{self.config.width}x{self.config.height}"
            )
        self._activate()
        replace_board(board.clone())

    def select(self, x: int, y: int) -> List[Position]:
        return self.selection_resolver.resolve((x, y))

    @staticmethod
    def rotation_path(selection: Sequence[Position], turns: int, clockwise: bool) -> List[List[Position]]:
        return rotation_path(selection, turns, clockwise)

    # ------------------------------------------------------------------
    # Rotation / explosion

    def attempt_rotation(
        self,
        selection: Optional[Sequence[Position]] = None,
        clockwise: bool = False,
        *,
        commit: bool = True,
    ) -> ExplodeOutcome:
        """Try to rotate ``selection`` and resolve any resulting matches.

        With ``selection=None`` the board is only probed for matches already
        present (chain reactions after a fill). ``commit=False`` evaluates
        without touching the live board, the score or bomb timers.
        """
        self._activate()
        selected = list(selection) if selection else None
        if selected is not None and not self._is_rotatable(selected):
            # Partial selections only happen on degenerate grids: no action possible.
            return ExplodeOutcome(valid=False, score=self.scoring.score, selection=selected, clockwise=clockwise)

        if commit:
            set_engine_mode(EngineMode.EVALUATING)

        live = get_board()
        mocks: List[Board] = [live.clone() for _ in ROTATION_STEPS]
        if selected is not None:
            for mock, steps in zip(mocks, ROTATION_STEPS):
                rotate_cells(mock, selected, steps, clockwise)

        explode_elements: List[ExplodeElement] = []
        pass_index = 0
        for index, mock in enumerate(mocks):
            explode_elements = self.rules.scan(mock)
            if explode_elements:
                pass_index = ROTATION_STEPS[index]
                break

        outcome = ExplodeOutcome(
            valid=bool(explode_elements),
            pass_index=pass_index,
            explode_elements=explode_elements,
            selection=selected,
            clockwise=clockwise,
        )
        if not commit:
            outcome.score = self.scoring.score
            return outcome

        state = get_or_create_game_state()
        if outcome.valid:
            replace_board(mocks[pass_index - 1])
            self.scoring.set_score(outcome)
            if selected is not None:
                state.player_turns += 1
                outcome.bomb_outcome = self.scoring.bomb_check(get_board())
            else:
                state.auto_resolves += 1
            set_engine_mode(EngineMode.RESOLVING)
        else:
            if selected is not None:
                logger.debug("Rotation of %s rejected", selected)
            set_engine_mode(EngineMode.IDLE)

        if outcome.bomb_outcome.exploded:
            set_engine_mode(EngineMode.GAME_OVER, reason=GAME_OVER_BOMB)
        outcome.score = self.scoring.score
        return outcome

    def _is_rotatable(self, selection: Sequence[Position]) -> bool:
        if len(selection) != 3 or len(set(selection)) != 3:
            return False
        return all(self.selection_resolver.in_bounds(x, y) for x, y in selection)

    def trigger_auto_resolve(self) -> ExplodeOutcome:
        return self.attempt_rotation(None)

    # ------------------------------------------------------------------
    # Fill cascade

    def resolve_fill(self) -> FillOutcome:
        """Let cells fall and generators refill until the board is stable."""
        self._activate()
        set_engine_mode(EngineMode.FILLING)
        passes: List[List[MoveRecord]] = []
        while True:
            records: List[MoveRecord] = []
            self._apply_gravity(records)
            bomb_budget = self.scoring.ready_bomb_count()
            bomb_budget = self._spawn_from_generators(records, bomb_budget)
            self.scoring.left_bombs(bomb_budget)
            if not records:
                break
            passes.append(records)

        moves_left = self.has_available_move()
        if moves_left:
            set_engine_mode(EngineMode.IDLE)
        else:
            logger.warning("No move left after fill, game over")
            set_engine_mode(EngineMode.GAME_OVER, reason=GAME_OVER_NO_MOVES)
        return FillOutcome(moves_left=moves_left, cascade_passes=passes, score=self.scoring.score)

    def _apply_gravity(self, records: List[MoveRecord]) -> None:
        board = get_board()
        for x, y in board.positions():
            for move in self.moves:
                cell = board.get(x, y)
                target = move.apply(board, x, y)
                if target is not None:
                    records.append(MoveRecord(cell=cell, source=(x, y), target=target))

    def _spawn_from_generators(self, records: List[MoveRecord], bomb_budget: int) -> int:
        board = get_board()
        for generator in self.generator_system.generators():
            for move in self.moves:
                cell = generator.pending
                target = move.apply(board, *generator.source, fallback=cell)
                if target is None:
                    continue
                records.append(MoveRecord(cell=cell, source=generator.source, target=generator.source))
                records.append(MoveRecord(cell=cell, source=generator.source, target=target))
                if bomb_budget > 0:
                    self.generator_system.regenerate(generator, with_bomb=True)
                    bomb_budget -= 1
                else:
                    self.generator_system.regenerate(generator)
        return bomb_budget

    # ------------------------------------------------------------------
    # Lose-condition search and board setup

    def has_available_move(self) -> bool:
        self._activate()
        for x, y in get_board().positions():
            selection = self.select(x, y)
            if self.attempt_rotation(selection, commit=False).valid:
                return True
        return False

    def initialize_or_refresh(self) -> None:
        """Fill the whole board with fresh cells until at least one move exists.

        Raises ``BoardGenerationError`` after ``max_refresh_attempts`` dead boards.
        """
        self._activate()
        board = get_board()
        for attempt in range(1, self.config.max_refresh_attempts + 1):
            self.generator_system.fill_board(board)
            if self.has_available_move():
                logger.info("Board initialized after %d attempt(s)", attempt)
                return
            logger.debug("Generated board has no move, refreshing (attempt %d)", attempt)
        raise BoardGenerationError(
            f"Unable to generate a playable {self.config.width}x{self.config.height} board "
            f"with {self.config.color_count} colors in {self.config.max_refresh_attempts} attempts"
        )

    def reset_session(self) -> None:
        """Start over: zero score and bomb reservations, fresh board and generators."""
        self._activate()
        self.scoring.reset()
        reset_game_state()
        self.generator_system.prime()
        self.initialize_or_refresh()
