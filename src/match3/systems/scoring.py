from typing import Iterable

from match3.components.board_config import BoardConfig
from match3.components.match import Match


def base_points(matches: Iterable[Match], config: BoardConfig) -> int:
    return sum(config.points_for(match.shape.value) for match in matches)


def score_matches(matches: Iterable[Match], config: BoardConfig, multiplier: float) -> int:
    """Points for one destroy iteration at the current cascade multiplier."""
    return int(round(base_points(matches, config) * multiplier))
