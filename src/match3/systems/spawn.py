from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence

from match3.components.grid import GridStore
from match3.components.move_step import MoveStep
from match3.components.position import Position
from match3.constants import MAX_FILL_ATTEMPTS, MIN_MATCH_LENGTH
from match3.systems.deadlock import has_any_move
from match3.systems.match_detector import find_all_matches

logger = logging.getLogger(__name__)


def forbidden_types(position: Position, grid: GridStore) -> set[str]:
    """Types that would complete a run of three with the two cells left of or below position."""
    x, y = position
    forbidden: set[str] = set()
    left1 = grid.get((x - 1, y))
    left2 = grid.get((x - 2, y))
    if left1 is not None and left1 == left2:
        forbidden.add(left1)
    down1 = grid.get((x, y - 1))
    down2 = grid.get((x, y - 2))
    if down1 is not None and down1 == down2:
        forbidden.add(down1)
    return forbidden


def choose_type(position: Position, grid: GridStore, palette: Sequence[str], rng: random.Random) -> str:
    """Pick a uniformly random palette type that does not auto-complete a run.

    Falls back to an unconstrained pick when every type is forbidden, which
    only happens with a palette of one or two types.
    """
    if not palette:
        raise ValueError("Cannot spawn a token from an empty palette")
    forbidden = forbidden_types(position, grid)
    available = [name for name in palette if name not in forbidden]
    if not available:
        available = list(palette)
    return rng.choice(available)


def refill_empty_cells(
    grid: GridStore,
    palette: Sequence[str],
    rng: random.Random,
    columns: Optional[Iterable[int]] = None,
) -> List[MoveStep]:
    """Spawn a token into every empty cell, row by row from the bottom.

    Returns one spawned MoveStep per new token. Tokens entering the same column
    queue up in the virtual slots above the board, so the k-th token spawned
    into a column starts at ``(x, height + k)``.
    """
    cols = sorted(set(columns)) if columns is not None else list(range(grid.width))
    cols = [x for x in cols if 0 <= x < grid.width]
    spawned: List[MoveStep] = []
    spawn_index = {x: 0 for x in cols}
    for y in range(grid.height):
        for x in cols:
            pos = (x, y)
            if not grid.is_empty(pos):
                continue
            type_name = choose_type(pos, grid, palette, rng)
            grid.set(pos, type_name)
            source = (x, grid.height + spawn_index[x])
            spawn_index[x] += 1
            spawned.append(
                MoveStep(source=source, target=pos, distance=source[1] - y, type_name=type_name, spawned=True)
            )
    return spawned


def fill_grid(
    grid: GridStore,
    palette: Sequence[str],
    rng: random.Random,
    *,
    max_attempts: int = MAX_FILL_ATTEMPTS,
    min_length: int = MIN_MATCH_LENGTH,
) -> List[Position]:
    """Fill the whole grid with no matches and, when possible, at least one valid move.

    Every cell is overwritten. Layouts are drawn until one offers a move; if
    none does within ``max_attempts`` the last match-free layout is kept.
    Returns the filled positions in fill order.
    """
    if not palette:
        raise ValueError("Cannot fill a board from an empty palette")
    positions = list(grid.positions())
    fallback: Optional[List[List[Optional[str]]]] = None
    for attempt in range(1, max_attempts + 1):
        for pos in positions:
            grid.clear(pos)
        for pos in positions:
            grid.set(pos, choose_type(pos, grid, palette, rng))
        if find_all_matches(grid, min_length=min_length):
            continue
        if has_any_move(grid, min_length=min_length):
            if attempt > 1:
                logger.debug("Playable layout found after %d attempts", attempt)
            return positions
        fallback = [list(row) for row in grid.cells]
    if fallback is None:
        logger.warning(
            "No match-free %dx%d layout after %d attempts with %d types",
            grid.width, grid.height, max_attempts, len(palette),
        )
        return positions
    grid.cells = fallback
    logger.warning(
        "No playable %dx%d layout after %d attempts with %d types; keeping a layout without moves",
        grid.width, grid.height, max_attempts, len(palette),
    )
    return positions
