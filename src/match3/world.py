import random

from esper import World

from match3.components.board_config import BoardConfig
from match3.components.cascade_state import CascadeState
from match3.components.grid import GridStore


def create_world(
    config: BoardConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create a world holding one empty board entity.

    The board entity carries the grid, its configuration and the resolver
    state. The seeded random source used for spawning and shuffling hangs
    off the world as ``world.random``.
    """
    config = config or BoardConfig()
    world = World()
    setattr(world, "random", rng or random.Random())
    world.create_entity(
        GridStore(width=config.width, height=config.height),
        config,
        CascadeState(),
    )
    return world
