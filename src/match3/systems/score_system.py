from esper import World

from match3.events.bus import EventBus, EVENT_MATCH_CLEARED, EVENT_SCORE_CHANGED
from match3.systems.state_utils import get_or_create_score


class ScoreSystem:
    """Score sink: accumulates the delta reported for every cleared pass."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)

    @property
    def total(self) -> int:
        return get_or_create_score(self.world).total

    def on_match_cleared(self, sender, **kwargs):
        delta = kwargs.get('score_delta', 0)
        if not delta:
            return
        score = get_or_create_score(self.world)
        score.total += delta
        score.last_delta = delta
        self.event_bus.emit(EVENT_SCORE_CHANGED, total=score.total, delta=delta)
