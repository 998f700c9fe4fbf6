from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from match3.components.position import Position

Occupant = Optional[str]


class Cell(NamedTuple):
    position: Position
    occupant: Occupant


@dataclass(slots=True)
class GridStore:
    """Owned width x height grid of token type names.

    ``cells[y][x]`` holds the type name at ``(x, y)`` or ``None`` when the cell
    is empty. Row 0 is the bottom of the board. Every accessor bounds-checks:
    reads off the board return ``None`` and writes report ``False`` without
    touching anything.
    """
    width: int
    height: int
    cells: List[List[Occupant]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if not self.cells:
            self.cells = [[None] * self.width for _ in range(self.height)]
        elif len(self.cells) != self.height or any(len(row) != self.width for row in self.cells):
            raise ValueError("cells do not match grid dimensions")

    @classmethod
    def from_rows(cls, rows: List[List[Occupant]]) -> "GridStore":
        """Build a grid from rows listed top row first, the way boards are drawn."""
        if not rows:
            raise ValueError("rows must not be empty")
        height = len(rows)
        width = len(rows[0])
        cells = [list(row) for row in reversed(rows)]
        return cls(width=width, height=height, cells=cells)

    def is_valid(self, pos: Position) -> bool:
        x, y = pos
        if not (isinstance(x, int) and isinstance(y, int)):
            return False
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, pos: Position) -> Occupant:
        if not self.is_valid(pos):
            return None
        x, y = pos
        return self.cells[y][x]

    def set(self, pos: Position, type_name: Occupant) -> bool:
        if not self.is_valid(pos):
            return False
        x, y = pos
        self.cells[y][x] = type_name
        return True

    def clear(self, pos: Position) -> bool:
        return self.set(pos, None)

    def swap(self, a: Position, b: Position) -> bool:
        """Exchange the occupants of two cells. No other side effects."""
        if not (self.is_valid(a) and self.is_valid(b)):
            return False
        ax, ay = a
        bx, by = b
        self.cells[ay][ax], self.cells[by][bx] = self.cells[by][bx], self.cells[ay][ax]
        return True

    def is_empty(self, pos: Position) -> bool:
        return self.is_valid(pos) and self.get(pos) is None

    def is_occupied(self, pos: Position) -> bool:
        return self.get(pos) is not None

    def empty_positions_in_column(self, x: int) -> List[Position]:
        """Empty cells of column ``x`` ordered bottom to top."""
        if not 0 <= x < self.width:
            return []
        return [(x, y) for y in range(self.height) if self.cells[y][x] is None]

    def positions(self) -> Iterator[Position]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def column_positions(self, x: int) -> List[Position]:
        if not 0 <= x < self.width:
            return []
        return [(x, y) for y in range(self.height)]

    def occupied(self) -> Iterator[Tuple[Position, str]]:
        """Occupied cells in row-major order, bottom row first."""
        for y in range(self.height):
            row = self.cells[y]
            for x in range(self.width):
                type_name = row[x]
                if type_name is not None:
                    yield (x, y), type_name

    def column_types(self, x: int) -> List[str]:
        """Occupied type names of column ``x`` bottom to top, gaps skipped."""
        if not 0 <= x < self.width:
            return []
        return [self.cells[y][x] for y in range(self.height) if self.cells[y][x] is not None]

    def type_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for _, type_name in self.occupied():
            counts[type_name] = counts.get(type_name, 0) + 1
        return counts

    def copy(self) -> "GridStore":
        return GridStore(width=self.width, height=self.height, cells=[list(row) for row in self.cells])

    def freeze(self) -> "GridSnapshot":
        return GridSnapshot(
            width=self.width,
            height=self.height,
            cells=tuple(tuple(row) for row in self.cells),
        )


@dataclass(frozen=True, slots=True)
class GridSnapshot:
    """Read-only copy of a grid handed to renderers and debuggers."""
    width: int
    height: int
    cells: Tuple[Tuple[Occupant, ...], ...]

    def get(self, pos: Position) -> Occupant:
        x, y = pos
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return self.cells[y][x]

    def cells_list(self) -> List[Cell]:
        return [
            Cell(position=(x, y), occupant=self.cells[y][x])
            for y in range(self.height)
            for x in range(self.width)
        ]

    def type_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for row in self.cells:
            for type_name in row:
                if type_name is not None:
                    counts[type_name] = counts.get(type_name, 0) + 1
        return counts

    def as_rows(self) -> List[List[Occupant]]:
        """Rows listed top row first, the inverse of ``GridStore.from_rows``."""
        return [list(row) for row in reversed(self.cells)]

    def thaw(self) -> GridStore:
        return GridStore(width=self.width, height=self.height, cells=[list(row) for row in self.cells])
