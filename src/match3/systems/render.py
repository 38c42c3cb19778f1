from typing import Optional, Tuple

from esper import World

from match3.events.bus import (EventBus, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED, EVENT_TILE_SWAP_INVALID,
                               EVENT_MATCH_CLEARED, EVENT_CASCADE_COMPLETE, EVENT_HINT_OFFER,
                               EVENT_BOARD_INITIALIZED, EVENT_BOARD_RESHUFFLED)
from match3.constants import EMPTY, HUD_FONT_SIZE, HINT_FONT_SIZE, TILE_PADDING
from match3.systems.board_ops import get_board, get_tile_registry
from match3.systems.state_utils import get_or_create_score
from match3.ui.layout import cell_to_screen, compute_board_geometry

Position = Tuple[int, int]

HINT_IDLE = "Click two adjacent tiles to swap them."
HINT_SELECTED = "Tile selected. Click an adjacent tile to swap."
HINT_NOT_ADJACENT = "Pick an adjacent tile!"
HINT_NO_MATCH = "No match. Swap undone."
HINT_RESHUFFLED = "No moves left. Board reshuffled."
HINT_NO_MOVES = "No moves available."

SELECTION_COLOR = (255, 255, 255)
HINT_COLOR = (255, 215, 0)
BOARD_BACKGROUND = (30, 30, 40)


class RenderSystem:
    """Draws the board, selection, score and status line into the arcade window."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.selected: Optional[Position] = None
        self.hinted: Optional[Tuple[Position, Position]] = None
        self.status = HINT_IDLE
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.event_bus.subscribe(EVENT_TILE_SWAP_INVALID, self.on_swap_invalid)
        self.event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self.on_cascade_complete)
        self.event_bus.subscribe(EVENT_HINT_OFFER, self.on_hint_offer)
        self.event_bus.subscribe(EVENT_BOARD_INITIALIZED, self.on_board_initialized)
        self.event_bus.subscribe(EVENT_BOARD_RESHUFFLED, self.on_board_reshuffled)

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))
        self.status = HINT_NOT_ADJACENT if kwargs.get('reason') == 'not_adjacent' else HINT_SELECTED

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None
        if kwargs.get('reason') != 'swap':
            self.status = HINT_IDLE

    def on_swap_invalid(self, sender, **kwargs):
        self.status = HINT_NO_MATCH

    def on_match_cleared(self, sender, **kwargs):
        self.hinted = None
        self.status = f"{len(kwargs.get('positions', []))} tiles cleared!"

    def on_cascade_complete(self, sender, **kwargs):
        depth = kwargs.get('depth', 0)
        if depth > 1:
            self.status = f"Chain x{depth}! +{kwargs.get('score', 0)}"

    def on_hint_offer(self, sender, **kwargs):
        swap = kwargs.get('swap')
        self.hinted = swap
        if swap is None:
            self.status = HINT_NO_MOVES
        else:
            (ar, ac), (br, bc) = swap
            self.status = f"Try swapping ({ar}, {ac}) with ({br}, {bc})."

    def on_board_initialized(self, sender, **kwargs):
        self.selected = None
        self.hinted = None
        self.status = HINT_IDLE

    def on_board_reshuffled(self, sender, **kwargs):
        self.hinted = None
        self.status = HINT_RESHUFFLED

    def score_text(self) -> str:
        return f"Score: {get_or_create_score(self.world).total}"

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        try:
            arcade.get_window()
        except Exception:
            return
        board = get_board(self.world)
        registry = get_tile_registry(self.world)
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, board.rows, board.cols
        )
        board_right = start_x + board.cols * tile_size
        board_top = start_y + board.rows * tile_size
        arcade.draw_lrbt_rectangle_filled(start_x, board_right, start_y, board_top, BOARD_BACKGROUND)

        hinted_cells = set(self.hinted) if self.hinted else set()
        for row, col in board.positions():
            tile_type = board.cells[row][col]
            left, bottom = cell_to_screen(row, col, board.rows, tile_size, start_x, start_y)
            pad = TILE_PADDING / 2
            if tile_type != EMPTY:
                arcade.draw_lrbt_rectangle_filled(left + pad, left + tile_size - pad, bottom + pad,
                                                  bottom + tile_size - pad, registry.color_for(tile_type))
            if (row, col) == self.selected:
                arcade.draw_lrbt_rectangle_outline(left, left + tile_size, bottom, bottom + tile_size,
                                                   SELECTION_COLOR, 3)
            elif (row, col) in hinted_cells:
                arcade.draw_lrbt_rectangle_outline(left, left + tile_size, bottom, bottom + tile_size,
                                                   HINT_COLOR, 2)

        text_y = board_top + 16
        arcade.draw_text(self.status, start_x, text_y, arcade.color.LIGHT_GRAY, HINT_FONT_SIZE)
        arcade.draw_text(self.score_text(), start_x, text_y + HINT_FONT_SIZE + 16, arcade.color.WHITE, HUD_FONT_SIZE)
