from typing import List, Optional, Tuple

from esper import World

from match3.events.bus import EventBus, EVENT_HINT_REQUEST, EVENT_HINT_OFFER
from match3.systems.board_ops import find_valid_swaps, get_board, predict_swap_creates_match

Position = Tuple[int, int]


class MatchSystem:
    """Answers hint requests by predicting which swaps would create a match."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_HINT_REQUEST, self.on_hint_request)

    def on_hint_request(self, sender, **kwargs):
        self.event_bus.emit(EVENT_HINT_OFFER, swap=self.suggest())

    def creates_match(self, a: Position, b: Position) -> bool:
        return predict_swap_creates_match(get_board(self.world), a, b)

    def valid_swaps(self) -> List[Tuple[Position, Position]]:
        return find_valid_swaps(get_board(self.world))

    def suggest(self) -> Optional[Tuple[Position, Position]]:
        swaps = self.valid_swaps()
        return swaps[0] if swaps else None
