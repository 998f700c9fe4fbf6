from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from match3.board import create_board, request_swap
from match3.components.trace import BoardReset, MatchesFound, Settled, Shuffled
from match3.constants import DEFAULT_PALETTE, GRID_HEIGHT, GRID_WIDTH
from match3.systems.deadlock import adjacent_pairs, find_valid_swaps
from match3.systems.match_detector import find_all_matches, shape_counts


@dataclass(slots=True)
class SoakReport:
    """Aggregate numbers from a run of random swap requests."""
    requests: int = 0
    accepted: int = 0
    shuffles: int = 0
    resets: int = 0
    cascade_depths: List[int] = field(default_factory=list)
    shapes: Dict[str, int] = field(default_factory=dict)
    final_score: int = 0
    final_matches: int = 0

    @property
    def max_cascade_level(self) -> int:
        return max(self.cascade_depths, default=0)

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.requests if self.requests else 0.0

    def summary_lines(self) -> List[str]:
        return [
            f"requests:           {self.requests}",
            f"accepted:           {self.accepted} ({self.acceptance_rate:.1%})",
            f"max cascade level:  {self.max_cascade_level}",
            f"shuffles:           {self.shuffles}",
            f"board resets:       {self.resets}",
            f"final score:        {self.final_score}",
            f"matches left:       {self.final_matches}",
            "shapes:             " + ", ".join(f"{k}={v}" for k, v in sorted(self.shapes.items())),
        ]


def run_soak(
    width: int = GRID_WIDTH,
    height: int = GRID_HEIGHT,
    palette: Sequence[str] = DEFAULT_PALETTE,
    seed: int = 0,
    swaps: int = 1000,
) -> SoakReport:
    """Play ``swaps`` random legal swap requests against one board.

    Half of the requests pick from the current hint list so cascades actually
    happen; the rest are arbitrary adjacent pairs, most of which get reverted.
    The same seed always yields the same report.
    """
    board = create_board(width, height, palette, seed)
    picker = random.Random(seed)
    pairs = list(adjacent_pairs(board.grid))
    report = SoakReport()
    for _ in range(swaps):
        hints = find_valid_swaps(board.grid) if picker.random() < 0.5 else []
        a, b = picker.choice(hints) if hints else picker.choice(pairs)
        result = request_swap(board, a, b)
        report.requests += 1
        report.shuffles += len(result.trace.of_type(Shuffled))
        report.resets += len(result.trace.of_type(BoardReset))
        for found in result.trace.of_type(MatchesFound):
            for shape, count in shape_counts(found.matches).items():
                report.shapes[shape.value] = report.shapes.get(shape.value, 0) + count
        if result.accepted:
            report.accepted += 1
            settled = result.trace.of_type(Settled)
            if settled:
                report.cascade_depths.append(settled[-1].cascade_level)
    report.final_score = board.state.score
    report.final_matches = len(find_all_matches(board.grid))
    return report
