from __future__ import annotations

import logging
import random
from typing import List, Optional

from esper import World

from match3.components.board_config import BoardConfig
from match3.components.board_phase import BoardPhase
from match3.components.cascade_state import CascadeState
from match3.components.grid import GridStore
from match3.components.match import Match
from match3.components.position import Position
from match3.components.trace import (
    BoardReset,
    CascadeTrace,
    Deadlocked,
    Destroyed,
    Fell,
    MatchesFound,
    Refilled,
    Settled,
    Shuffled,
    SwapCommitted,
    SwapRejectReason,
    SwapRejected,
    SwapResult,
)
from match3.events.bus import EVENT_CASCADE_TRACE, EVENT_SWAP_REQUEST, EventBus
from match3.systems.board_access import get_board_config, get_grid, get_or_create_cascade_state
from match3.systems.deadlock import has_any_move
from match3.systems.gravity import compact
from match3.systems.match_detector import find_all_matches, find_matches_at, matched_positions
from match3.systems.scoring import score_matches
from match3.systems.shuffler import shuffle
from match3.systems.spawn import fill_grid, refill_empty_cells
from match3.systems.swap_validator import check_swap, would_match

logger = logging.getLogger(__name__)


class CascadeSystem:
    """Runs a swap request through the whole cascade state machine.

    Swap -> Match -> (Destroy -> Fall -> Refill -> Match)* -> Idle, with a
    deadlock check and shuffles once the board settles. Everything happens
    synchronously inside ``request_swap``; the returned trace is then replayed
    onto the event bus for renderers that prefer subscribing.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self._publishing = False
        self.event_bus.subscribe(EVENT_SWAP_REQUEST, self.on_swap_request)

    @property
    def grid(self) -> GridStore:
        return get_grid(self.world)

    @property
    def config(self) -> BoardConfig:
        return get_board_config(self.world)

    @property
    def state(self) -> CascadeState:
        return get_or_create_cascade_state(self.world)

    @property
    def rng(self) -> random.Random:
        rng = getattr(self.world, "random", None)
        if not isinstance(rng, random.Random):
            raise RuntimeError("World has no seeded random source")
        return rng

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if src is None or dst is None:
            return
        self.request_swap(tuple(src), tuple(dst))

    def request_swap(self, a: Position, b: Position) -> SwapResult:
        state = self.state
        trace = CascadeTrace()
        if self._publishing or not state.phase.quiescent:
            trace.append(SwapRejected(a=a, b=b, reason=SwapRejectReason.BUSY))
            return SwapResult(accepted=False, reason=SwapRejectReason.BUSY, trace=trace)
        resting_phase = state.phase
        try:
            result = self._resolve_swap(a, b, trace, resting_phase)
        except Exception:
            self._set_phase(resting_phase)
            raise
        self._publish(result.trace, accepted=result.accepted, reason=result.reason)
        return result

    def _resolve_swap(self, a: Position, b: Position, trace: CascadeTrace, resting_phase: BoardPhase) -> SwapResult:
        grid = self.grid
        config = self.config
        state = self.state
        self._set_phase(BoardPhase.SWAPPING)
        reason = check_swap(grid, a, b)
        if reason is not None:
            return self._reject(a, b, reason, trace, resting_phase)
        if not would_match(grid, a, b, min_length=config.min_match_length):
            result = self._reject(a, b, SwapRejectReason.NO_MATCH_PRODUCED, trace, resting_phase)
            # A board edited from outside may have lost its last move without the
            # resolver noticing; settle it now instead of leaving the player stuck.
            if resting_phase is BoardPhase.IDLE and not has_any_move(grid, min_length=config.min_match_length):
                self._run_cascade([], trace)
            return result

        grid.swap(a, b)
        state.swaps_accepted += 1
        trace.append(SwapCommitted(a=a, b=b))
        self._set_phase(BoardPhase.MATCHING)
        self._run_cascade(find_all_matches(grid, min_length=config.min_match_length), trace)
        return SwapResult(accepted=True, reason=None, trace=trace)

    def _reject(
        self,
        a: Position,
        b: Position,
        reason: SwapRejectReason,
        trace: CascadeTrace,
        resting_phase: BoardPhase,
    ) -> SwapResult:
        reverted = reason is SwapRejectReason.NO_MATCH_PRODUCED
        trace.append(SwapRejected(a=a, b=b, reason=reason, reverted=reverted))
        self.state.swaps_rejected += 1
        self._set_phase(resting_phase)
        logger.debug("Swap %s <-> %s rejected: %s", a, b, reason.value)
        return SwapResult(accepted=False, reason=reason, trace=trace)

    def settle(self) -> CascadeTrace:
        """Resolve whatever matches or deadlock the board currently holds.

        Used after the board is edited from outside the swap flow.
        """
        trace = CascadeTrace()
        resting_phase = self.state.phase
        if self._publishing or not resting_phase.quiescent:
            return trace
        try:
            self._fill_holes(trace)
            self._set_phase(BoardPhase.MATCHING)
            self._run_cascade(find_all_matches(self.grid, min_length=self.config.min_match_length), trace)
        except Exception:
            self._set_phase(resting_phase)
            raise
        self._publish(trace, accepted=False, reason=None)
        return trace

    def _fill_holes(self, trace: CascadeTrace) -> None:
        """Compact and refill every column that has an empty cell."""
        grid = self.grid
        columns = self._columns_with_holes()
        if not columns:
            return
        self._set_phase(BoardPhase.FALLING)
        trace.append(Fell(moves=tuple(compact(grid, columns))))
        self._set_phase(BoardPhase.REFILLING)
        spawned = refill_empty_cells(grid, self.config.palette, self.rng, columns)
        trace.append(Refilled(new_cells=tuple(spawned)))
        logger.debug("Filled holes in columns %s", columns)

    def _columns_with_holes(self) -> List[int]:
        grid = self.grid
        return [x for x in range(grid.width) if grid.empty_positions_in_column(x)]

    def _run_cascade(self, matches: List[Match], trace: CascadeTrace) -> None:
        grid = self.grid
        config = self.config
        state = self.state
        iterations = 0
        shuffles = 0
        while True:
            while matches:
                if iterations >= config.max_cascade_iterations:
                    logger.warning(
                        "Cascade hit %d iterations; resetting the board", config.max_cascade_iterations
                    )
                    self._reset_board(trace, reason="cascade_limit")
                    matches = []
                    break
                iterations += 1
                matches = self._cascade_step(matches, trace)

            if has_any_move(grid, min_length=config.min_match_length):
                self._finish(trace, BoardPhase.IDLE, moves_available=True)
                return

            shuffles += 1
            self._set_phase(BoardPhase.DEADLOCKED)
            trace.append(Deadlocked(attempt=shuffles))
            if shuffles > config.max_shuffle_attempts:
                logger.warning("No move after %d shuffles; resetting the board", config.max_shuffle_attempts)
                self._reset_board(trace, reason="shuffle_limit")
                playable = has_any_move(grid, min_length=config.min_match_length)
                self._finish(trace, BoardPhase.IDLE if playable else BoardPhase.DEADLOCKED, moves_available=playable)
                return
            self._set_phase(BoardPhase.SHUFFLING)
            summary = shuffle(grid, self.rng, attempt=shuffles)
            state.shuffles += 1
            trace.append(Shuffled(summary=summary))
            logger.info("Board deadlocked; shuffle %d moved %d tokens", shuffles, len(summary.moves))
            self._set_phase(BoardPhase.MATCHING)
            matches = find_all_matches(grid, min_length=config.min_match_length)

    def _cascade_step(self, matches: List[Match], trace: CascadeTrace) -> List[Match]:
        """Destroy, drop and refill one round of matches; return the matches that follow."""
        grid = self.grid
        config = self.config
        state = self.state

        self._set_phase(BoardPhase.DESTROYING)
        state.cascade_level += 1
        positions = matched_positions(matches)
        points = score_matches(matches, config, state.multiplier)
        trace.append(MatchesFound(matches=tuple(matches), cascade_level=state.cascade_level))
        for pos in positions:
            grid.clear(pos)
        state.turn_score += points
        state.score += points
        trace.append(
            Destroyed(
                positions=tuple(positions),
                cascade_level=state.cascade_level,
                points=points,
                multiplier=state.multiplier,
            )
        )
        state.multiplier *= config.cascade_multiplier
        # Holes left by hand edits elsewhere on the board settle along with the matched columns.
        columns = self._columns_with_holes()

        self._set_phase(BoardPhase.FALLING)
        moves = compact(grid, columns)
        trace.append(Fell(moves=tuple(moves)))

        self._set_phase(BoardPhase.REFILLING)
        spawned = refill_empty_cells(grid, config.palette, self.rng, columns)
        trace.append(Refilled(new_cells=tuple(spawned)))
        logger.debug(
            "Cascade level %d cleared %d cells in columns %s for %d points",
            state.cascade_level, len(positions), columns, points,
        )

        self._set_phase(BoardPhase.MATCHING)
        seeds = [pos for x in columns for pos in grid.column_positions(x)]
        return find_matches_at(grid, seeds, min_length=config.min_match_length)

    def _reset_board(self, trace: CascadeTrace, *, reason: str) -> None:
        config = self.config
        new_cells = fill_grid(
            self.grid,
            config.palette,
            self.rng,
            max_attempts=config.max_fill_attempts,
            min_length=config.min_match_length,
        )
        self.state.resets += 1
        trace.append(BoardReset(new_cells=tuple(new_cells), reason=reason))
        logger.info("Board reset (%s)", reason)

    def _finish(self, trace: CascadeTrace, phase: BoardPhase, *, moves_available: bool) -> None:
        state = self.state
        trace.append(
            Settled(
                cascade_level=state.cascade_level,
                turn_score=state.turn_score,
                total_score=state.score,
                moves_available=moves_available,
            )
        )
        state.reset_turn()
        self._set_phase(phase)

    def _set_phase(self, phase: BoardPhase) -> None:
        state = self.state
        if state.phase is not phase:
            logger.debug("Phase %s -> %s", state.phase.name, phase.name)
            state.phase = phase

    def _publish(self, trace: CascadeTrace, *, accepted: bool, reason: Optional[SwapRejectReason]) -> None:
        self._publishing = True
        try:
            for entry in trace:
                self.event_bus.emit(entry.event, **entry.payload())
            self.event_bus.emit(
                EVENT_CASCADE_TRACE, trace=trace, accepted=accepted, reason=reason
            )
        finally:
            self._publishing = False

