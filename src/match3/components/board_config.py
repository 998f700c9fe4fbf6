from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping

from match3.constants import (
    CASCADE_MULTIPLIER,
    DEFAULT_PALETTE,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_CASCADE_ITERATIONS,
    MAX_FILL_ATTEMPTS,
    MAX_SHUFFLE_ATTEMPTS,
    MIN_MATCH_LENGTH,
    SHAPE_POINTS,
)


@dataclass(slots=True)
class BoardConfig:
    """Board dimensions, token palette and resolver tuning for one session.

    Lives on the board entity next to the GridStore. The palette keeps its
    declared order with duplicates removed; an invalid configuration is a
    wiring fault and raises ``ValueError`` straight away.
    """
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    min_match_length: int = MIN_MATCH_LENGTH
    max_cascade_iterations: int = MAX_CASCADE_ITERATIONS
    max_shuffle_attempts: int = MAX_SHUFFLE_ATTEMPTS
    max_fill_attempts: int = MAX_FILL_ATTEMPTS
    cascade_multiplier: float = CASCADE_MULTIPLIER
    shape_points: Dict[str, int] = field(default_factory=lambda: dict(SHAPE_POINTS))

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.width}x{self.height}")
        seen: set[str] = set()
        filtered: List[str] = []
        for name in self.palette:
            if not isinstance(name, str) or not name:
                raise ValueError(f"Token type names must be non-empty strings, got {name!r}")
            if name not in seen:
                filtered.append(name)
                seen.add(name)
        if not filtered:
            raise ValueError("Board palette must contain at least one token type")
        self.palette = filtered
        if self.min_match_length < 3:
            raise ValueError("min_match_length must be at least 3")
        if self.max_cascade_iterations <= 0 or self.max_shuffle_attempts <= 0 or self.max_fill_attempts <= 0:
            raise ValueError("Safety limits must be positive")
        if self.cascade_multiplier < 1:
            raise ValueError("cascade_multiplier must be >= 1")
        merged = dict(SHAPE_POINTS)
        merged.update(self.shape_points)
        self.shape_points = merged

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BoardConfig":
        """Build a config from loader output, ignoring keys it does not know."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        if 'palette' in kwargs:
            kwargs['palette'] = list(kwargs['palette'])
        if 'shape_points' in kwargs:
            kwargs['shape_points'] = dict(kwargs['shape_points'])
        return cls(**kwargs)

    def points_for(self, shape_key: str) -> int:
        return self.shape_points.get(shape_key, self.shape_points['line3'])
