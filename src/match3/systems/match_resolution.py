import logging
from typing import Tuple

from esper import World

from match3.components.resolution_state import ResolutionState
from match3.errors import ResolutionBusyError, SwapContractError
from match3.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID,
                               EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED,
                               EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE, EVENT_BOARD_RESHUFFLED,
                               EVENT_BOARD_INITIALIZED)
from match3.systems.board_ops import (find_valid_swaps, get_board, get_tile_registry, respawn_full_board,
                                      world_rng)
from match3.systems.cascade import CascadeObserver, CascadeStep, ScoreTally, attempt_swap, resolve_cascade
from match3.systems.state_utils import get_or_create_resolution_state

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class _BusCascadeObserver(CascadeObserver):
    """Publishes each cascade pass on the event bus."""

    def __init__(self, event_bus: EventBus, state: ResolutionState):
        self.event_bus = event_bus
        self.state = state
        self.depth = 0

    def on_cleared(self, step: CascadeStep) -> None:
        self.state.cascade_depth = step.depth
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=step.depth, positions=step.cleared)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=step.cleared, groups=step.groups,
                            size=len(step.cleared), depth=step.depth)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=step.cleared, types=step.cleared_types,
                            score_delta=step.score_delta, depth=step.depth)

    def on_refilled(self, step: CascadeStep) -> None:
        fall_payload = [
            {'from': move.source, 'to': move.target, 'tile_type': move.tile_type}
            for move in step.moves
        ]
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=fall_payload, depth=step.depth)
        self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=step.refilled, depth=step.depth)

    def on_complete(self, depth: int) -> None:
        self.depth = depth


class MatchResolutionSystem:
    """Runs swap requests through the cascade resolver while holding the processing lock."""

    def __init__(self, world: World, event_bus: EventBus, *, reshuffle_on_stalemate: bool = True):
        self.world = world
        self.event_bus = event_bus
        self.reshuffle_on_stalemate = reshuffle_on_stalemate
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_BOARD_INITIALIZED, self.on_board_initialized)

    def is_busy(self) -> bool:
        return get_or_create_resolution_state(self.world).busy

    def on_board_initialized(self, sender, **kwargs):
        # Generation forbids matches but does not promise a legal move
        if self.reshuffle_on_stalemate:
            self._reshuffle_if_stalemate()

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            raise SwapContractError(src, dst)
        self.request_swap(tuple(src), tuple(dst))

    def request_swap(self, src: Position, dst: Position) -> bool:
        """Swap, resolve and settle. Returns False when the swap matched nothing and was undone."""
        state = get_or_create_resolution_state(self.world)
        if state.busy:
            raise ResolutionBusyError(f"Swap {src} <-> {dst} requested while a cascade is resolving")
        board = get_board(self.world)
        registry = get_tile_registry(self.world)
        observer = _BusCascadeObserver(self.event_bus, state)
        tally = ScoreTally(observer)
        state.busy = True
        state.cascade_depth = 0
        state.swaps_attempted += 1
        try:
            matched = attempt_swap(board, src, dst, world_rng(self.world),
                                   num_types=registry.count, observer=tally)
        finally:
            state.busy = False
        state.last_swap = (src, dst)
        state.last_outcome = matched
        if not matched:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
            return False
        state.swaps_matched += 1
        logger.debug("swap %s <-> %s settled after %d passes, score +%d", src, dst, observer.depth, tally.total)
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=observer.depth, score=tally.total)
        if self.reshuffle_on_stalemate:
            self._reshuffle_if_stalemate()
        return True

    def settle(self) -> bool:
        """Resolve any runs already on the board without a swap (e.g. after external edits)."""
        state = get_or_create_resolution_state(self.world)
        if state.busy:
            raise ResolutionBusyError("Board settle requested while a cascade is resolving")
        board = get_board(self.world)
        registry = get_tile_registry(self.world)
        observer = _BusCascadeObserver(self.event_bus, state)
        tally = ScoreTally(observer)
        state.busy = True
        state.cascade_depth = 0
        try:
            matched = resolve_cascade(board, world_rng(self.world), num_types=registry.count, observer=tally)
        finally:
            state.busy = False
        if matched:
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=observer.depth, score=tally.total)
            if self.reshuffle_on_stalemate:
                self._reshuffle_if_stalemate()
        return matched

    def _reshuffle_if_stalemate(self) -> bool:
        board = get_board(self.world)
        if find_valid_swaps(board):
            return False
        registry = get_tile_registry(self.world)
        respawn_full_board(board, world_rng(self.world), registry.count)
        state = get_or_create_resolution_state(self.world)
        state.reshuffles += 1
        logger.debug("no valid swaps left, board reshuffled (%d total)", state.reshuffles)
        self.event_bus.emit(EVENT_BOARD_RESHUFFLED, reason='stalemate', cells=board.snapshot())
        return True
