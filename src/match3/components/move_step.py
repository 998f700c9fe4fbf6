from dataclasses import dataclass

from match3.components.position import Position


@dataclass(frozen=True, slots=True)
class MoveStep:
    """A token travelling straight down its column.

    Gravity steps move an existing token from ``source`` to ``target``. Refill
    steps have ``spawned`` set and a ``source`` in the virtual slots stacked
    above the column, ``(x, height + k)`` for the k-th token spawned there.
    """
    source: Position
    target: Position
    distance: int
    type_name: str
    spawned: bool = False
