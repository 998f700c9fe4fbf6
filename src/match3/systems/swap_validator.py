from __future__ import annotations

from typing import Optional

from match3.components.grid import GridStore
from match3.components.position import Position, is_adjacent
from match3.components.trace import SwapRejectReason
from match3.constants import MIN_MATCH_LENGTH
from match3.systems.match_detector import find_matches_at


def check_swap(grid: GridStore, a: Position, b: Position) -> Optional[SwapRejectReason]:
    """Return why a swap is illegal, or None when it may be attempted."""
    if not (grid.is_valid(a) and grid.is_valid(b)):
        return SwapRejectReason.OUT_OF_BOUNDS
    if not is_adjacent(a, b):
        return SwapRejectReason.NOT_ADJACENT
    if grid.is_empty(a) or grid.is_empty(b):
        return SwapRejectReason.CELL_EMPTY
    return None


def is_legal_swap(grid: GridStore, a: Position, b: Position) -> bool:
    return check_swap(grid, a, b) is None


def would_match(grid: GridStore, a: Position, b: Position, *, min_length: int = MIN_MATCH_LENGTH) -> bool:
    """Return True if swapping a and b would create a match through either cell.

    The swap is applied to the grid for the duration of the check and always
    undone before returning, so the grid is left exactly as it was found.
    """
    if not is_legal_swap(grid, a, b):
        return False
    grid.swap(a, b)
    try:
        return bool(find_matches_at(grid, (a, b), min_length=min_length))
    finally:
        grid.swap(a, b)
