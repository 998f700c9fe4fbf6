from typing import Iterator, Tuple

# (x, y) with y = 0 on the bottom row.
Position = Tuple[int, int]

ORTHOGONAL_STEPS: Tuple[Position, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


def orthogonal_neighbors(pos: Position) -> Iterator[Position]:
    x, y = pos
    for dx, dy in ORTHOGONAL_STEPS:
        yield x + dx, y + dy


def is_adjacent(a: Position, b: Position) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
