from __future__ import annotations

import logging
import random
from typing import List, Tuple

from match3.components.grid import GridStore
from match3.components.position import Position
from match3.components.trace import ShuffleSummary

logger = logging.getLogger(__name__)


def shuffle(grid: GridStore, rng: random.Random, *, attempt: int = 1) -> ShuffleSummary:
    """Randomly reassign every occupied token to an occupied cell.

    Empty cells stay empty and per-type counts are conserved exactly. The
    permutation is a Fisher-Yates shuffle of the target cells drawn from the
    injected rng.
    """
    entries: List[Tuple[Position, str]] = list(grid.occupied())
    targets = [pos for pos, _ in entries]
    rng.shuffle(targets)
    counts: dict[str, int] = {}
    moves: List[Tuple[Position, Position]] = []
    for (source, type_name), target in zip(entries, targets):
        counts[type_name] = counts.get(type_name, 0) + 1
        if source != target:
            moves.append((source, target))
    for (_, type_name), target in zip(entries, targets):
        grid.set(target, type_name)
    logger.debug("Shuffle attempt %d moved %d of %d tokens", attempt, len(moves), len(entries))
    return ShuffleSummary(moves=tuple(moves), type_counts=tuple(sorted(counts.items())), attempt=attempt)
