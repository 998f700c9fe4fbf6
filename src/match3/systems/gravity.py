from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from match3.components.grid import GridStore
from match3.components.move_step import MoveStep


def _columns(grid: GridStore, columns: Optional[Iterable[int]]) -> List[int]:
    if columns is None:
        return list(range(grid.width))
    return [x for x in sorted(set(columns)) if 0 <= x < grid.width]


def compute_gravity_moves(grid: GridStore, columns: Optional[Iterable[int]] = None) -> List[MoveStep]:
    """Moves that compact each column's tokens downward, keeping their order.

    A write cursor starts at the bottom row; every occupied cell read above it
    moves down to the cursor. Cells already in place produce no move.
    """
    moves: List[MoveStep] = []
    for x in _columns(grid, columns):
        write_y = 0
        for read_y in range(grid.height):
            type_name = grid.get((x, read_y))
            if type_name is None:
                continue
            if read_y != write_y:
                moves.append(
                    MoveStep(source=(x, read_y), target=(x, write_y), distance=read_y - write_y, type_name=type_name)
                )
            write_y += 1
    return moves


def apply_gravity_moves(grid: GridStore, moves: Iterable[MoveStep]) -> None:
    """Apply moves in the order compute_gravity_moves produced them.

    Each move lands on a cell that is empty by then: either cleared before
    gravity ran or vacated by an earlier move in the same column.
    """
    for move in moves:
        type_name = grid.get(move.source)
        if type_name is None:
            continue
        grid.set(move.target, type_name)
        grid.clear(move.source)


def refill_demand(grid: GridStore, columns: Optional[Iterable[int]] = None) -> Dict[int, int]:
    """Number of trailing empty cells at the top of each column."""
    demand: Dict[int, int] = {}
    for x in _columns(grid, columns):
        count = 0
        for y in range(grid.height - 1, -1, -1):
            if grid.get((x, y)) is not None:
                break
            count += 1
        demand[x] = count
    return demand


def compact(grid: GridStore, columns: Optional[Iterable[int]] = None) -> List[MoveStep]:
    """Compute and apply gravity for the given columns, returning the moves."""
    moves = compute_gravity_moves(grid, columns)
    apply_gravity_moves(grid, moves)
    return moves
