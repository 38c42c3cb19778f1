from esper import World

from match3.components.resolution_state import ResolutionState
from match3.components.score import Score


def get_or_create_resolution_state(world: World) -> ResolutionState:
    """Return the shared ResolutionState component, creating it if absent."""
    existing = list(world.get_component(ResolutionState))
    if existing:
        return existing[0][1]
    world.create_entity(ResolutionState())
    return list(world.get_component(ResolutionState))[0][1]


def get_or_create_score(world: World) -> Score:
    existing = list(world.get_component(Score))
    if existing:
        return existing[0][1]
    world.create_entity(Score())
    return list(world.get_component(Score))[0][1]
