"""Engine state resource describing where a turn currently is."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class EngineMode(Enum):
    IDLE = auto()
    EVALUATING = auto()
    RESOLVING = auto()
    FILLING = auto()
    GAME_OVER = auto()


GAME_OVER_BOMB = "bomb"
GAME_OVER_NO_MOVES = "no_moves"


@dataclass(slots=True)
class GameState:
    """Singleton component storing the engine mode and turn counters."""
    mode: EngineMode = EngineMode.IDLE
    game_over_reason: Optional[str] = None
    player_turns: int = 0
    auto_resolves: int = 0
