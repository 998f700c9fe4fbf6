"""Cascade trace entries.

A swap request produces one ``CascadeTrace``: the ordered record of everything
the resolver did. Renderers replay it at their own pace, so every entry carries
the full payload needed to animate it without reading the board.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Type, TypeVar

from match3.components.match import Match
from match3.components.move_step import MoveStep
from match3.components.position import Position
from match3.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_DEADLOCKED,
    EVENT_DESTROYED,
    EVENT_FELL,
    EVENT_MATCHES_FOUND,
    EVENT_REFILLED,
    EVENT_SETTLED,
    EVENT_SHUFFLED,
    EVENT_SWAP_COMMITTED,
    EVENT_SWAP_REJECTED,
)


class SwapRejectReason(Enum):
    OUT_OF_BOUNDS = 'out_of_bounds'
    NOT_ADJACENT = 'not_adjacent'
    CELL_EMPTY = 'cell_empty'
    NO_MATCH_PRODUCED = 'no_match_produced'
    BUSY = 'busy'


@dataclass(frozen=True, slots=True)
class ShuffleSummary:
    """Outcome of one shuffle: which tokens changed cell, and the type totals.

    ``type_counts`` holds (type name, count) pairs sorted by name; ``counts()``
    returns them as a dict.
    """
    moves: Tuple[Tuple[Position, Position], ...]
    type_counts: Tuple[Tuple[str, int], ...]
    attempt: int = 1

    def counts(self) -> Dict[str, int]:
        return dict(self.type_counts)


@dataclass(frozen=True, slots=True)
class TraceEntry:
    event: ClassVar[str] = ''

    def payload(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True, slots=True)
class SwapRejected(TraceEntry):
    event: ClassVar[str] = EVENT_SWAP_REJECTED
    a: Position
    b: Position
    reason: SwapRejectReason
    reverted: bool = False


@dataclass(frozen=True, slots=True)
class SwapCommitted(TraceEntry):
    event: ClassVar[str] = EVENT_SWAP_COMMITTED
    a: Position
    b: Position


@dataclass(frozen=True, slots=True)
class MatchesFound(TraceEntry):
    event: ClassVar[str] = EVENT_MATCHES_FOUND
    matches: Tuple[Match, ...]
    cascade_level: int


@dataclass(frozen=True, slots=True)
class Destroyed(TraceEntry):
    event: ClassVar[str] = EVENT_DESTROYED
    positions: Tuple[Position, ...]
    cascade_level: int
    points: int = 0
    multiplier: float = 1.0


@dataclass(frozen=True, slots=True)
class Fell(TraceEntry):
    event: ClassVar[str] = EVENT_FELL
    moves: Tuple[MoveStep, ...]


@dataclass(frozen=True, slots=True)
class Refilled(TraceEntry):
    event: ClassVar[str] = EVENT_REFILLED
    new_cells: Tuple[MoveStep, ...]


@dataclass(frozen=True, slots=True)
class Settled(TraceEntry):
    event: ClassVar[str] = EVENT_SETTLED
    cascade_level: int
    turn_score: int
    total_score: int
    moves_available: bool = True


@dataclass(frozen=True, slots=True)
class Deadlocked(TraceEntry):
    event: ClassVar[str] = EVENT_DEADLOCKED
    attempt: int = 1


@dataclass(frozen=True, slots=True)
class Shuffled(TraceEntry):
    event: ClassVar[str] = EVENT_SHUFFLED
    summary: ShuffleSummary


@dataclass(frozen=True, slots=True)
class BoardReset(TraceEntry):
    event: ClassVar[str] = EVENT_BOARD_RESET
    new_cells: Tuple[Position, ...]
    reason: str


E = TypeVar('E', bound=TraceEntry)


@dataclass(slots=True)
class CascadeTrace:
    entries: List[TraceEntry] = field(default_factory=list)

    def append(self, entry: TraceEntry) -> None:
        self.entries.append(entry)

    def of_type(self, entry_type: Type[E]) -> List[E]:
        return [entry for entry in self.entries if isinstance(entry, entry_type)]

    def events(self) -> List[str]:
        return [entry.event for entry in self.entries]

    def __iter__(self) -> Iterator[TraceEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> TraceEntry:
        return self.entries[index]


@dataclass(frozen=True, slots=True)
class SwapResult:
    accepted: bool
    reason: Optional[SwapRejectReason]
    trace: CascadeTrace
