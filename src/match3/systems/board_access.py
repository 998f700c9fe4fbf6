from esper import World

from match3.components.board_config import BoardConfig
from match3.components.cascade_state import CascadeState
from match3.components.grid import GridStore


def get_grid(world: World) -> GridStore:
    for _, grid in world.get_component(GridStore):
        return grid
    raise RuntimeError("GridStore not found; was the board created?")


def get_board_config(world: World) -> BoardConfig:
    for _, config in world.get_component(BoardConfig):
        return config
    raise RuntimeError("BoardConfig not found; was the board created?")


def get_or_create_cascade_state(world: World) -> CascadeState:
    """Return the shared CascadeState component, creating it if absent."""
    existing = list(world.get_component(CascadeState))
    if existing:
        return existing[0][1]
    world.create_entity(CascadeState())
    return list(world.get_component(CascadeState))[0][1]
