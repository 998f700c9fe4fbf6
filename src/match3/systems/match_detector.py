from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set, Tuple

from match3.components.grid import GridStore
from match3.components.match import Match, MatchShape
from match3.components.position import Position, orthogonal_neighbors
from match3.constants import MIN_MATCH_LENGTH

# A candidate run: (type_name, positions in scan order).
Run = Tuple[str, List[Position]]


def find_all_matches(grid: GridStore, *, min_length: int = MIN_MATCH_LENGTH) -> List[Match]:
    """Detect every horizontal and vertical run of ``min_length`` or more, merged into matches."""
    runs = _horizontal_runs(grid, min_length) + _vertical_runs(grid, min_length)
    return _build_matches(runs)


def find_matches_at(
    grid: GridStore,
    positions: Iterable[Position],
    *,
    min_length: int = MIN_MATCH_LENGTH,
) -> List[Match]:
    """Detect matches running through any of ``positions``.

    Each seed extends a horizontal and a vertical line outward while the type
    holds. A cell already covered by a recorded line is not extended again
    along that axis, but still along the other one.
    """
    runs: List[Run] = []
    seen_h: Set[Position] = set()
    seen_v: Set[Position] = set()
    for pos in positions:
        type_name = grid.get(pos)
        if type_name is None:
            continue
        if pos not in seen_h:
            line = _line_through(grid, pos, type_name, (1, 0))
            seen_h.update(line)
            if len(line) >= min_length:
                runs.append((type_name, line))
        if pos not in seen_v:
            line = _line_through(grid, pos, type_name, (0, 1))
            seen_v.update(line)
            if len(line) >= min_length:
                runs.append((type_name, line))
    return _build_matches(runs)


def has_match_at(grid: GridStore, pos: Position, *, min_length: int = MIN_MATCH_LENGTH) -> bool:
    """Return True if a horizontal or vertical run through pos reaches ``min_length``."""
    type_name = grid.get(pos)
    if type_name is None:
        return False
    if len(_line_through(grid, pos, type_name, (1, 0))) >= min_length:
        return True
    return len(_line_through(grid, pos, type_name, (0, 1))) >= min_length


def matched_positions(matches: Iterable[Match]) -> List[Position]:
    """Union of all match cells, sorted for deterministic ordering."""
    return sorted({pos for match in matches for pos in match.positions})


def classify_shape(positions: Iterable[Position]) -> MatchShape:
    """Classify a merged match. Cross, then T, then L, then plain line length."""
    cells = list(dict.fromkeys(positions))
    members = set(cells)
    size = len(cells)
    xs = {x for x, _ in cells}
    ys = {y for _, y in cells}
    if len(xs) == 1 or len(ys) == 1:
        return _line_shape(size)
    if _is_cross(members):
        return MatchShape.CROSS
    if size >= 5 and _is_t_shape(members):
        return MatchShape.T_SHAPE
    if size >= 5 and _is_l_shape(members):
        return MatchShape.L_SHAPE
    return _line_shape(size)


def find_anchor(positions: Iterable[Position]) -> Position:
    """Cell with the most in-match orthogonal neighbours; first scanned wins ties."""
    cells = list(dict.fromkeys(positions))
    members = set(cells)
    best = cells[0]
    best_count = -1
    for pos in cells:
        count = sum(1 for n in orthogonal_neighbors(pos) if n in members)
        if count > best_count:
            best = pos
            best_count = count
    return best


def _horizontal_runs(grid: GridStore, min_length: int) -> List[Run]:
    runs: List[Run] = []
    for y in range(grid.height):
        run: List[Position] = []
        last_type: Optional[str] = None
        for x in range(grid.width):
            tval = grid.get((x, y))
            if tval is not None and tval == last_type:
                run.append((x, y))
            else:
                if last_type is not None and len(run) >= min_length:
                    runs.append((last_type, run))
                run = [(x, y)] if tval is not None else []
                last_type = tval
        if last_type is not None and len(run) >= min_length:
            runs.append((last_type, run))
    return runs


def _vertical_runs(grid: GridStore, min_length: int) -> List[Run]:
    runs: List[Run] = []
    for x in range(grid.width):
        run: List[Position] = []
        last_type: Optional[str] = None
        for y in range(grid.height):
            tval = grid.get((x, y))
            if tval is not None and tval == last_type:
                run.append((x, y))
            else:
                if last_type is not None and len(run) >= min_length:
                    runs.append((last_type, run))
                run = [(x, y)] if tval is not None else []
                last_type = tval
        if last_type is not None and len(run) >= min_length:
            runs.append((last_type, run))
    return runs


def _line_through(grid: GridStore, pos: Position, type_name: str, step: Position) -> List[Position]:
    dx, dy = step
    x, y = pos
    back: List[Position] = []
    cx, cy = x - dx, y - dy
    while grid.get((cx, cy)) == type_name:
        back.append((cx, cy))
        cx, cy = cx - dx, cy - dy
    line = list(reversed(back))
    line.append(pos)
    cx, cy = x + dx, y + dy
    while grid.get((cx, cy)) == type_name:
        line.append((cx, cy))
        cx, cy = cx + dx, cy + dy
    return line


def _merge_runs(runs: List[Run]) -> List[Run]:
    """Union same-type runs that share a cell, repeating until nothing changes."""
    merged: List[Run] = []
    used = [False] * len(runs)
    for i, (type_name, positions) in enumerate(runs):
        if used[i]:
            continue
        used[i] = True
        current = list(positions)
        members = set(current)
        changed = True
        while changed:
            changed = False
            for j, (other_type, other) in enumerate(runs):
                if used[j] or other_type != type_name:
                    continue
                if members.isdisjoint(other):
                    continue
                for pos in other:
                    if pos not in members:
                        members.add(pos)
                        current.append(pos)
                used[j] = True
                changed = True
        merged.append((type_name, current))
    return merged


def _build_matches(runs: List[Run]) -> List[Match]:
    matches: List[Match] = []
    for type_name, positions in _merge_runs(runs):
        matches.append(
            Match(
                type_name=type_name,
                positions=tuple(positions),
                shape=classify_shape(positions),
                anchor=find_anchor(positions),
            )
        )
    return matches


def _line_shape(size: int) -> MatchShape:
    if size >= 5:
        return MatchShape.LINE5
    if size == 4:
        return MatchShape.LINE4
    return MatchShape.LINE3


def _is_cross(members: Set[Position]) -> bool:
    return any(all(n in members for n in orthogonal_neighbors(pos)) for pos in members)


def _axis_run(members: Set[Position], pos: Position, step: Position) -> Tuple[int, bool]:
    """Length of the in-match run through pos along step, and whether pos is an end of it."""
    dx, dy = step
    x, y = pos
    before = 0
    while (x - (before + 1) * dx, y - (before + 1) * dy) in members:
        before += 1
    after = 0
    while (x + (after + 1) * dx, y + (after + 1) * dy) in members:
        after += 1
    return before + after + 1, before == 0 or after == 0


def _is_t_shape(members: Set[Position]) -> bool:
    # Bar cell strictly inside a run of 3+ on one axis that also starts a stem of 2+ on the other.
    for pos in members:
        h_len, h_end = _axis_run(members, pos, (1, 0))
        v_len, v_end = _axis_run(members, pos, (0, 1))
        if h_len >= 3 and not h_end and v_len >= 2 and v_end:
            return True
        if v_len >= 3 and not v_end and h_len >= 2 and h_end:
            return True
    return False


def _is_l_shape(members: Set[Position]) -> bool:
    for pos in members:
        h_len, _ = _axis_run(members, pos, (1, 0))
        v_len, _ = _axis_run(members, pos, (0, 1))
        if h_len >= 3 and v_len >= 3:
            return True
    return False


def shape_counts(matches: Iterable[Match]) -> Dict[MatchShape, int]:
    counts: Dict[MatchShape, int] = {}
    for match in matches:
        counts[match.shape] = counts.get(match.shape, 0) + 1
    return counts
