"""Public entry points for driving a board.

``create_board`` builds the world and systems for one session; everything
else takes the returned handle. Swap requests come back as a ``SwapResult``
whose trace lists every step in order, ready for a renderer to replay.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, List, Sequence

from esper import World

from match3.components.board_config import BoardConfig
from match3.components.board_phase import BoardPhase
from match3.components.cascade_state import CascadeState
from match3.components.grid import GridSnapshot, GridStore
from match3.components.position import Position
from match3.components.trace import SwapResult
from match3.events.bus import EventBus
from match3.systems.board_access import get_board_config, get_grid, get_or_create_cascade_state
from match3.systems.cascade import CascadeSystem
from match3.systems.spawn import fill_grid
from match3.world import create_world

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BoardHandle:
    world: World
    event_bus: EventBus
    cascade: CascadeSystem

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
    def phase(self) -> BoardPhase:
        return self.state.phase


def create_board(
    width: int,
    height: int,
    palette: Sequence[str],
    seed: Any = None,
    *,
    event_bus: EventBus | None = None,
    fill: bool = True,
    **tuning: Any,
) -> BoardHandle:
    """Create a board session.

    ``tuning`` accepts any other BoardConfig field (``min_match_length``,
    ``max_shuffle_attempts`` and so on). Non-positive dimensions or an empty
    palette raise ``ValueError``. With ``fill`` left on the board is populated
    straight away via ``fill_initial``.
    """
    config = BoardConfig(width=width, height=height, palette=list(palette), **tuning)
    return create_board_from_config(config, seed, event_bus=event_bus, fill=fill)


def create_board_from_config(
    config: BoardConfig,
    seed: Any = None,
    *,
    event_bus: EventBus | None = None,
    fill: bool = True,
) -> BoardHandle:
    event_bus = event_bus or EventBus()
    world = create_world(config, rng=random.Random(seed))
    handle = BoardHandle(world=world, event_bus=event_bus, cascade=CascadeSystem(world, event_bus))
    logger.debug("Created %dx%d board with %d token types", config.width, config.height, len(config.palette))
    if fill:
        fill_initial(handle)
    return handle


def fill_initial(board: BoardHandle) -> List[Position]:
    """Populate every cell with no pre-existing matches, preferring layouts with a move."""
    config = board.config
    rng = getattr(board.world, "random")
    positions = fill_grid(
        board.grid,
        config.palette,
        rng,
        max_attempts=config.max_fill_attempts,
        min_length=config.min_match_length,
    )
    state = board.state
    state.reset_turn()
    state.phase = BoardPhase.IDLE
    return positions


def request_swap(board: BoardHandle, a: Position, b: Position) -> SwapResult:
    return board.cascade.request_swap(tuple(a), tuple(b))


def snapshot(board: BoardHandle) -> GridSnapshot:
    return board.grid.freeze()
