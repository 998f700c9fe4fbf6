from match3.components.board_config import BoardConfig
from match3.components.match import Match, MatchShape
from match3.systems.scoring import base_points, score_matches


def _match(shape, size=3):
    positions = tuple((x, 0) for x in range(size))
    return Match(type_name='A', positions=positions, shape=shape, anchor=positions[0])


def test_base_points_per_shape():
    config = BoardConfig()
    assert base_points([_match(MatchShape.LINE3)], config) == 50
    assert base_points([_match(MatchShape.LINE4, 4)], config) == 100
    assert base_points([_match(MatchShape.LINE5, 5)], config) == 200
    assert base_points([_match(MatchShape.L_SHAPE, 5)], config) == 150
    assert base_points([_match(MatchShape.T_SHAPE, 5)], config) == 150
    assert base_points([_match(MatchShape.CROSS, 5)], config) == 200


def test_points_add_up_across_matches_and_scale_with_multiplier():
    config = BoardConfig()
    matches = [_match(MatchShape.LINE3), _match(MatchShape.LINE4, 4)]
    assert score_matches(matches, config, 1.0) == 150
    assert score_matches(matches, config, 1.5) == 225
    assert score_matches([_match(MatchShape.LINE3)], config, 2.25) == 112


def test_custom_shape_points():
    config = BoardConfig(shape_points={'line3': 7})
    assert score_matches([_match(MatchShape.LINE3)], config, 1.0) == 7
