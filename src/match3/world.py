import random

from esper import World

from match3.events.bus import EventBus
from match3.components.board import Board
from match3.components.resolution_state import ResolutionState
from match3.components.score import Score
from match3.components.tile_type_registry import TileTypeRegistry
from match3.components.tile_types import TileTypes
from match3.constants import GRID_COLS, GRID_ROWS, NUM_TYPES


def create_world(
    event_bus: EventBus,
    *,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    num_types: int = NUM_TYPES,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding the board, score, resolution lock and tile palette.

    The board starts empty; ``initialize_board`` fills it. Dimensions and the
    number of tile types are fixed for the lifetime of the world.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(Board(rows=rows, cols=cols))
    world.create_entity(Score())
    world.create_entity(ResolutionState())
    # Single registry entity with the canonical tile types
    world.create_entity(TileTypeRegistry(), TileTypes(count=num_types))
    return world
