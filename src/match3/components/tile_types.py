from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from match3.constants import MIN_TYPES, NUM_TYPES

Color = Tuple[int, int, int]

# One color per tile type; indexes past the palette wrap around.
DEFAULT_PALETTE: List[Color] = [
    (231, 76, 60),    # red
    (46, 204, 113),   # green
    (52, 152, 219),   # blue
    (241, 196, 15),   # yellow
    (155, 89, 182),   # purple
    (230, 126, 34),   # orange
    (26, 188, 156),   # teal
]


@dataclass(slots=True)
class TileTypes:
    """Tile type definitions stored on the registry entity.

    Types are the integers ``1..count``; ``colors`` is only used by renderers.
    """
    count: int = NUM_TYPES
    colors: Dict[int, Color] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.count < MIN_TYPES:
            raise ValueError(f"At least {MIN_TYPES} tile types are required, got {self.count}")
        for tile_type in self.all_types():
            if tile_type not in self.colors:
                self.colors[tile_type] = DEFAULT_PALETTE[(tile_type - 1) % len(DEFAULT_PALETTE)]

    def all_types(self) -> List[int]:
        return list(range(1, self.count + 1))

    def color_for(self, tile_type: int) -> Color:
        return self.colors[tile_type]
