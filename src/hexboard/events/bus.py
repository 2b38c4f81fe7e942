from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems alive even if nobody holds the system.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# RAW WINDOW INPUT
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"        # payload: x, y, button
EVENT_MOUSE_DRAG = "mouse_drag"          # payload: x, y, dx, dy, button
EVENT_MOUSE_RELEASE = "mouse_release"    # payload: x, y, button


# ============================================================================
# TILE GESTURES
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                  # payload: coordinate=HexCoordinate
EVENT_TILE_BLOCK_TOGGLE = "tile_block_toggle"    # payload: coordinate=HexCoordinate
EVENT_TILE_DRAG_START = "tile_drag_start"        # payload: source=HexCoordinate
EVENT_TILE_DRAG_OVER = "tile_drag_over"          # payload: target=HexCoordinate
EVENT_TILE_DROP = "tile_drop"                    # payload: source=HexCoordinate, target=HexCoordinate, payload=Token|None
EVENT_TILE_DRAG_END = "tile_drag_end"            # payload: source=HexCoordinate, success=bool
EVENT_TILE_DRAG_REJECTED = "tile_drag_rejected"  # payload: source=HexCoordinate, reason=str


# ============================================================================
# BOARD STATE
# ============================================================================
EVENT_TILE_CHANGED = "tile_changed"              # payload: coordinate=HexCoordinate, reason=str
EVENT_BOARD_RESET_REQUEST = "board_reset_request"  # payload: None
EVENT_BOARD_RESET = "board_reset"                # payload: tiles=int


# ============================================================================
# SAVE / LOAD
# ============================================================================
EVENT_BOARD_SAVE_REQUEST = "board_save_request"  # payload: version=int|None
EVENT_BOARD_SAVED = "board_saved"                # payload: document=str, records=int
EVENT_BOARD_LOAD_REQUEST = "board_load_request"  # payload: document=str|dict|None
EVENT_BOARD_LOADED = "board_loaded"              # payload: applied=int, skipped=int, version=int
EVENT_BOARD_LOAD_FAILED = "board_load_failed"    # payload: reason=str
