from hexboard.constants import BOARD_RADIUS, HEX_SIZE, HEX_SPACING
from hexboard.utils.hex_grid import SQRT3

BOARD_MAX_WIDTH_PCT = 0.95
BOARD_MAX_HEIGHT_PCT = 0.90

def compute_board_geometry(window_width: int, window_height: int, radius: int = BOARD_RADIUS):
    """Return (hex_size, origin) so the whole hexagon fits the window, centred.

    Shared by rendering and input mapping so clicks land on the tile that was drawn.
    """
    # Flat-topped hexagon of the given radius spans (3r + 2) half-widths across and (2r + 1) rows down.
    span_w = (3 * radius + 2) * HEX_SPACING
    span_h = SQRT3 * (2 * radius + 1) * HEX_SPACING
    size_by_w = window_width * BOARD_MAX_WIDTH_PCT / span_w
    size_by_h = window_height * BOARD_MAX_HEIGHT_PCT / span_h
    hex_size = min(HEX_SIZE * 2, size_by_w, size_by_h)
    if hex_size < 8:
        hex_size = 8
    origin = (window_width / 2, window_height / 2)
    return hex_size, origin
