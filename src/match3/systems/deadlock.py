from __future__ import annotations

from typing import Iterator, List, Tuple

from match3.components.grid import GridStore
from match3.components.position import Position
from match3.constants import MIN_MATCH_LENGTH
from match3.systems.swap_validator import would_match

SwapPair = Tuple[Position, Position]


def adjacent_pairs(grid: GridStore) -> Iterator[SwapPair]:
    """Every horizontally then vertically adjacent pair, each exactly once."""
    for y in range(grid.height):
        for x in range(grid.width - 1):
            yield (x, y), (x + 1, y)
    for x in range(grid.width):
        for y in range(grid.height - 1):
            yield (x, y), (x, y + 1)


def find_valid_swaps(grid: GridStore, *, min_length: int = MIN_MATCH_LENGTH) -> List[SwapPair]:
    """Enumerate adjacent swaps that would produce a match."""
    return [pair for pair in adjacent_pairs(grid) if would_match(grid, *pair, min_length=min_length)]


def has_any_move(grid: GridStore, *, min_length: int = MIN_MATCH_LENGTH) -> bool:
    return any(would_match(grid, a, b, min_length=min_length) for a, b in adjacent_pairs(grid))


def count_moves(grid: GridStore, *, min_length: int = MIN_MATCH_LENGTH) -> int:
    return len(find_valid_swaps(grid, min_length=min_length))
