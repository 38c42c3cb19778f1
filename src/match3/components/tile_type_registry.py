from dataclasses import dataclass

@dataclass(slots=True)
class TileTypeRegistry:
    """Empty tag component marking the single entity that stores the tile palette.

    The same entity also carries a TileTypes component with the type -> color mapping.
    """
    pass
