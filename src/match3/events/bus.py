from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that nobody else references alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: None
EVENT_HINT_REQUEST = "hint_request"                # payload: None
EVENT_HINT_OFFER = "hint_offer"                    # payload: swap=((r,c),(r,c))|None


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_BOARD_INITIALIZED = "board_initialized"      # payload: rows=int, cols=int, cells=tuple[tuple[int,...],...]
EVENT_BOARD_RESHUFFLED = "board_reshuffled"        # payload: reason=str, cells=tuple[tuple[int,...],...]
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col, reason=str
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c)
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], groups=[[(r,c),...]], size=int, depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], types=[(r,c,t),...], score_delta=int, depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[{'from','to','tile_type'}], depth=int
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c,t),...], depth=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, score=int


# ============================================================================
# SCORE
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: total=int, delta=int
