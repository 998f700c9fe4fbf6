from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from match3.board import BoardHandle, create_board
from match3.components.grid import GridStore
from match3.components.position import Position


def build_grid(rows: Sequence[str]) -> GridStore:
    """Grid from strings drawn top row first; '.' marks an empty cell."""
    return GridStore.from_rows([[None if ch == '.' else ch for ch in row] for row in rows])


def striped_rows(
    width: int,
    height: int,
    types: Sequence[str],
    overrides: Optional[Dict[Position, str]] = None,
    *,
    step: int = 1,
) -> List[str]:
    """Rows (top first) of ``types[(x + step * y) % len(types)]`` with some cells overridden.

    Three types with step 1 give diagonal stripes, which hold no match and no
    valid move. Four types with step 2 hold no two equal neighbours at all.
    """
    overrides = overrides or {}
    rows = []
    for y in range(height - 1, -1, -1):
        row = ''
        for x in range(width):
            row += overrides.get((x, y), types[(x + step * y) % len(types)])
        rows.append(row)
    return rows


def build_board(
    rows: Sequence[str],
    palette: Optional[Sequence[str]] = None,
    seed: Any = 0,
    **tuning: Any,
) -> BoardHandle:
    """Board session whose grid is laid out exactly as ``rows``."""
    grid = build_grid(rows)
    palette = list(palette) if palette else sorted(grid.type_counts())
    board = create_board(grid.width, grid.height, palette, seed, fill=False, **tuning)
    board.grid.cells = grid.cells
    return board
