from match3.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from match3.systems.board_ops import get_board
from match3.systems.state_utils import get_or_create_resolution_state
from match3.ui.layout import compute_board_geometry, screen_to_cell

# arcade.MOUSE_BUTTON_LEFT
MOUSE_BUTTON_LEFT = 1


class InputSystem:
    """Translates window mouse presses into board tile clicks."""

    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Right-click and other buttons are handled by BoardSystem directly
        if button != MOUSE_BUTTON_LEFT:
            return
        if get_or_create_resolution_state(self.world).busy:
            return
        board = get_board(self.world)
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, board.rows, board.cols
        )
        cell = screen_to_cell(x, y, board.rows, board.cols, tile_size, start_x, start_y)
        if cell is None:
            return
        self.event_bus.emit(EVENT_TILE_CLICK, row=cell[0], col=cell[1])
