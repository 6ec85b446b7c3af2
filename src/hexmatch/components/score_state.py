from dataclasses import dataclass

from hexmatch.constants import BOMB_SCORE, EXPLOSION_SCORE


@dataclass(slots=True)
class ScoreState:
    """Singleton component holding the running score and bomb reservations."""
    score: int = 0
    dropped_bomb_count: int = 0
    bomb_cost: int = BOMB_SCORE
    explosion_score: int = EXPLOSION_SCORE
