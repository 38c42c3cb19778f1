from match3.constants import (BOTTOM_MARGIN, BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT, GRID_COLS, GRID_ROWS,
                              HUD_HEIGHT)

def compute_board_geometry(window_width: int, window_height: int, rows: int = GRID_ROWS, cols: int = GRID_COLS):
    """Return (tile_size, start_x, start_y) shared by the renderer and the input mapping.

    start_y is the bottom edge of the board; screen y grows upward, so board row 0 is the top row drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_to_screen(row: int, col: int, rows: int, tile_size: int, start_x: float, start_y: float):
    """Bottom-left corner of a cell on screen."""
    x = start_x + col * tile_size
    y = start_y + (rows - 1 - row) * tile_size
    return x, y


def screen_to_cell(x: float, y: float, rows: int, cols: int, tile_size: int, start_x: float, start_y: float):
    """Return (row, col) under the point, or None when outside the board."""
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= start_y + rows * tile_size:
        return None
    col = int((x - start_x) // tile_size)
    row = rows - 1 - int((y - start_y) // tile_size)
    return row, col
