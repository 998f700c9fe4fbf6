import pytest

from match3.board import create_board
from match3.components.board_config import BoardConfig
from match3.constants import SHAPE_POINTS


def test_defaults():
    config = BoardConfig()
    assert (config.width, config.height) == (8, 8)
    assert len(config.palette) == 5
    assert config.max_cascade_iterations == 20
    assert config.cascade_multiplier == 1.5
    assert config.shape_points == SHAPE_POINTS


def test_palette_duplicates_are_dropped_in_order():
    config = BoardConfig(palette=['red', 'blue', 'red', 'green', 'blue'])
    assert config.palette == ['red', 'blue', 'green']


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"height": -3},
    {"palette": []},
    {"palette": ['', '']},
    {"palette": ['red', '']},
    {"palette": ['red', 0]},
    {"palette": ['red', None]},
    {"min_match_length": 2},
    {"max_cascade_iterations": 0},
    {"max_shuffle_attempts": -1},
    {"cascade_multiplier": 0.5},
])
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        BoardConfig(**kwargs)


def test_create_board_rejects_bad_arguments():
    with pytest.raises(ValueError):
        create_board(0, 8, ['A', 'B', 'C'])
    with pytest.raises(ValueError):
        create_board(8, 8, [])


def test_from_mapping_ignores_unknown_keys():
    config = BoardConfig.from_mapping({
        "width": 6,
        "height": 7,
        "palette": ("hex", "nature", "blood"),
        "shape_points": {"line3": 10},
        "tile_size": 64,
    })
    assert (config.width, config.height) == (6, 7)
    assert config.palette == ['hex', 'nature', 'blood']
    assert config.points_for('line3') == 10
    assert config.points_for('cross') == SHAPE_POINTS['cross']
