from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterator, Tuple

from match3.components.position import Position


class MatchShape(Enum):
    """Shape classes for merged matches. Values double as scoring keys."""
    LINE3 = 'line3'
    LINE4 = 'line4'
    LINE5 = 'line5'
    L_SHAPE = 'l_shape'
    T_SHAPE = 't_shape'
    CROSS = 'cross'


@dataclass(frozen=True, slots=True)
class Match:
    """One or more merged same-type runs of at least three cells.

    ``positions`` holds each cell once, in the order the scan first reached it.
    ``anchor`` is the cell with the most in-match orthogonal neighbours and is
    only meant for scoring popups and effect placement.
    """
    type_name: str
    positions: Tuple[Position, ...]
    shape: MatchShape
    anchor: Position

    @property
    def position_set(self) -> FrozenSet[Position]:
        return frozenset(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    def __contains__(self, pos: object) -> bool:
        return pos in self.positions
