"""Engine configuration, fixed for the lifetime of a session."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hexmatch.constants import (
    BOMB_SCORE,
    BOMB_TIMER,
    COLOR_COUNT,
    EXPLOSION_SCORE,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_COLORS,
    MAX_REFRESH_ATTEMPTS,
    MIN_COLORS,
)


class ConfigurationError(ValueError):
    """Raised when an engine is constructed with an unusable configuration."""


class BoardGenerationError(RuntimeError):
    """Raised when no playable board could be produced within the retry budget."""


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Fixed engine settings.

    ``validate`` only checks ranges. Whether a playable board exists is found
    out at construction: very small grids with a large palette (e.g. 2x2 with
    15 colors) rarely roll a board with a move, and may exhaust
    ``max_refresh_attempts`` and raise ``BoardGenerationError`` for some seeds.
    """
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    color_count: int = COLOR_COUNT
    bomb_score: int = BOMB_SCORE
    explosion_score: int = EXPLOSION_SCORE
    bomb_timer: int = BOMB_TIMER
    seed: Optional[int] = None
    max_refresh_attempts: int = MAX_REFRESH_ATTEMPTS

    def validate(self) -> "EngineConfig":
        if self.width < 1 or self.height < 1:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if not MIN_COLORS <= self.color_count <= MAX_COLORS:
            raise ConfigurationError(
                f"color_count must be within {MIN_COLORS}..{MAX_COLORS}, got {self.color_count}"
            )
        for name in ("bomb_score", "explosion_score", "bomb_timer", "max_refresh_attempts"):
            value = getattr(self, name)
            if value < 1:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        return self
