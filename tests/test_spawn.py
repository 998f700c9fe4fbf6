import random

import pytest

from match3.components.grid import GridStore
from match3.systems.deadlock import has_any_move
from match3.systems.match_detector import find_all_matches
from match3.systems.spawn import choose_type, fill_grid, forbidden_types, refill_empty_cells
from tests.helpers import build_grid


def test_forbidden_types_left_and_below():
    grid = build_grid([
        "B..",
        "B..",
        "AA.",
    ])
    assert forbidden_types((2, 0), grid) == {'A'}
    assert forbidden_types((0, 2), grid) == set()
    tall = build_grid([
        "...",
        "B..",
        "B..",
        "AA.",
    ])
    assert forbidden_types((0, 3), tall) == {'B'}


def test_choose_type_never_completes_a_run():
    grid = build_grid([
        "B..",
        "B..",
        "AA.",
    ])
    rng = random.Random(7)
    for _ in range(200):
        assert choose_type((2, 0), grid, ['A', 'B', 'C'], rng) != 'A'


def test_choose_type_falls_back_when_everything_is_forbidden():
    grid = build_grid([
        "BB.",
        "..A",
        "..A",
    ])
    assert forbidden_types((2, 2), grid) == {'A', 'B'}
    rng = random.Random(1)
    picks = {choose_type((2, 2), grid, ['A', 'B'], rng) for _ in range(50)}
    assert picks <= {'A', 'B'}
    assert picks


def test_choose_type_empty_palette_raises():
    grid = GridStore(width=2, height=2)
    with pytest.raises(ValueError):
        choose_type((0, 0), grid, [], random.Random(0))


def test_refill_spawns_bottom_up_from_virtual_slots():
    grid = build_grid([
        "..",
        ".A",
        "BA",
    ])
    spawned = refill_empty_cells(grid, ['C', 'D', 'E'], random.Random(3))
    assert [step.target for step in spawned] == [(0, 1), (0, 2), (1, 2)]
    assert [step.source for step in spawned] == [(0, 3), (0, 4), (1, 3)]
    assert [step.distance for step in spawned] == [2, 2, 1]
    assert all(step.spawned for step in spawned)
    assert all(grid.is_occupied(pos) for pos in grid.positions())
    for step in spawned:
        assert grid.get(step.target) == step.type_name


def test_refill_limited_to_columns():
    grid = build_grid([
        "..",
        "..",
    ])
    spawned = refill_empty_cells(grid, ['A', 'B', 'C'], random.Random(0), columns=[1])
    assert {step.target[0] for step in spawned} == {1}
    assert grid.empty_positions_in_column(0) == [(0, 0), (0, 1)]


def test_initial_board_has_no_matches():
    for seed in range(25):
        grid = GridStore(width=8, height=8)
        fill_grid(grid, ['red', 'green', 'blue', 'yellow', 'magenta'], random.Random(seed))
        assert not find_all_matches(grid), f'Seed {seed} produced a match'
        assert has_any_move(grid), f'Seed {seed} produced a board without moves'
        assert all(grid.is_occupied(pos) for pos in grid.positions())


def test_fill_keeps_match_free_layout_when_no_move_exists():
    # A 2x2 board can never hold a run of three.
    grid = GridStore(width=2, height=2)
    positions = fill_grid(grid, ['A', 'B', 'C'], random.Random(0), max_attempts=5)
    assert len(positions) == 4
    assert all(grid.is_occupied(pos) for pos in grid.positions())
    assert not find_all_matches(grid)


def test_fill_is_reproducible_for_a_seed():
    first = GridStore(width=6, height=6)
    second = GridStore(width=6, height=6)
    fill_grid(first, ['A', 'B', 'C', 'D'], random.Random(42))
    fill_grid(second, ['A', 'B', 'C', 'D'], random.Random(42))
    assert first.freeze() == second.freeze()
