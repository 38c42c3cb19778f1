import logging
from typing import Optional, Tuple

from esper import World

from match3.components.board import Board
from match3.errors import OutOfBoundsError
from match3.events.bus import (
    EventBus,
    EVENT_BOARD_INITIALIZED,
    EVENT_MOUSE_PRESS,
    EVENT_NEW_GAME_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from match3.systems.board_ops import are_adjacent, fill_initial, get_board, get_tile_registry, world_rng
from match3.systems.state_utils import get_or_create_resolution_state, get_or_create_score

logger = logging.getLogger(__name__)

# arcade.MOUSE_BUTTON_RIGHT
MOUSE_BUTTON_RIGHT = 4


def initialize_board(world: World, event_bus: EventBus) -> Board:
    """Fill the board with a match-free layout and reset the score."""
    board = get_board(world)
    registry = get_tile_registry(world)
    fill_initial(board, world_rng(world), registry.count)
    score = get_or_create_score(world)
    score.total = 0
    score.last_delta = 0
    state = get_or_create_resolution_state(world)
    state.cascade_depth = 0
    state.last_swap = None
    state.last_outcome = None
    logger.debug("board initialized %dx%d with %d types", board.rows, board.cols, registry.count)
    event_bus.emit(EVENT_BOARD_INITIALIZED, rows=board.rows, cols=board.cols, cells=board.snapshot())
    event_bus.emit(EVENT_SCORE_CHANGED, total=0, delta=0)
    return board


class BoardSystem:
    """Owns the click selection and turns two adjacent clicks into a swap request."""

    def __init__(self, world: World, event_bus: EventBus, *, initialize: bool = True):
        self.world = world
        self.event_bus = event_bus
        self.selected: Optional[Tuple[int, int]] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self.on_new_game)
        if initialize:
            initialize_board(self.world, self.event_bus)

    @property
    def board(self) -> Board:
        return get_board(self.world)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        pos = (row, col)
        board = self.board
        if not board.in_bounds(pos):
            raise OutOfBoundsError(pos, board.rows, board.cols)
        # Clicks are dropped while a swap is resolving
        if get_or_create_resolution_state(self.world).busy:
            return
        if self.selected is None:
            self._select(pos, 'first')
        elif self.selected == pos:
            self._deselect('same_tile')
        elif are_adjacent(self.selected, pos):
            src = self.selected
            self._deselect('swap')
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=pos)
        else:
            # Not adjacent: the new tile becomes the selection
            self._select(pos, 'not_adjacent')

    def on_mouse_press(self, sender, **kwargs):
        # Right-click always clears the current selection
        if kwargs.get('button') != MOUSE_BUTTON_RIGHT:
            return
        if self.selected is not None:
            self._deselect('right_click')

    def on_new_game(self, sender, **kwargs):
        if get_or_create_resolution_state(self.world).busy:
            return
        if self.selected is not None:
            self._deselect('new_game')
        initialize_board(self.world, self.event_bus)

    def _select(self, pos: Tuple[int, int], reason: str) -> None:
        self.selected = pos
        self.event_bus.emit(EVENT_TILE_SELECTED, row=pos[0], col=pos[1], reason=reason)

    def _deselect(self, reason: str) -> None:
        prev = self.selected
        self.selected = None
        if prev is not None:
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])
