import random

from hypothesis import given, settings
from hypothesis import strategies as st

from match3.components.trace import Shuffled
from match3.systems.shuffler import shuffle
from tests.helpers import build_grid, striped_rows


@settings(max_examples=50, deadline=None)
@given(st.integers(min_value=0, max_value=2**32 - 1))
def test_shuffle_conserves_type_counts(seed):
    grid = build_grid(striped_rows(6, 5, "ABCD", {(1, 1): 'A', (4, 3): 'B'}))
    before = grid.type_counts()
    summary = shuffle(grid, random.Random(seed))
    assert grid.type_counts() == before
    assert summary.counts() == before


def test_shuffle_keeps_empty_cells_empty():
    grid = build_grid([
        "A.B",
        "CAB",
        ".CA",
    ])
    shuffle(grid, random.Random(5), attempt=3)
    assert grid.is_empty((1, 2))
    assert grid.is_empty((0, 0))
    assert sum(1 for _ in grid.occupied()) == 7


def test_shuffle_summary_describes_the_moves():
    grid = build_grid(striped_rows(4, 4, "ABC"))
    before = grid.copy()
    summary = shuffle(grid, random.Random(11), attempt=2)
    assert summary.attempt == 2
    for source, target in summary.moves:
        assert source != target
        assert grid.get(target) == before.get(source)


def test_shuffle_is_reproducible():
    first = build_grid(striped_rows(5, 5, "ABCD"))
    second = first.copy()
    shuffle(first, random.Random(99))
    shuffle(second, random.Random(99))
    assert first.freeze() == second.freeze()


def test_shuffle_summary_is_hashable():
    grid = build_grid(striped_rows(4, 4, "ABC"))
    summary = shuffle(grid, random.Random(3))
    assert summary.type_counts == tuple(sorted(summary.counts().items()))
    assert hash(Shuffled(summary=summary)) == hash(Shuffled(summary=summary))
