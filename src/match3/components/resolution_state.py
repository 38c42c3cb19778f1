from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(slots=True)
class ResolutionState:
    """Tracks the swap/cascade cycle shared across systems.

    ``busy`` is the processing lock: while set, new swap intents are refused.
    """

    busy: bool = False
    cascade_depth: int = 0
    last_swap: Optional[Tuple[Tuple[int, int], Tuple[int, int]]] = None
    last_outcome: Optional[bool] = None
    swaps_attempted: int = 0
    swaps_matched: int = 0
    reshuffles: int = field(default=0)
