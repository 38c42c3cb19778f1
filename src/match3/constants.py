# ============================================================================
# BOARD
# ============================================================================
GRID_SIZE = 8
GRID_ROWS = GRID_SIZE
GRID_COLS = GRID_SIZE
NUM_TYPES = 5
MIN_TYPES = 3  # fewer types can leave a cell with no legal initial value

# Reserved cell value between a clear and the following refill.
EMPTY = 0

SCORE_PER_TILE = 10

# Attempts made to build a board with no matches and at least one valid swap.
RESPAWN_MAX_ATTEMPTS = 200


# ============================================================================
# WINDOW & LAYOUT
# ============================================================================
WINDOW_WIDTH = 640
WINDOW_HEIGHT = 720
WINDOW_TITLE = "Match Three"
BOTTOM_MARGIN = 20

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.80

# Strip above the board holding score and status text.
HUD_HEIGHT = 90
HUD_FONT_SIZE = 18
HINT_FONT_SIZE = 12
TILE_PADDING = 4
