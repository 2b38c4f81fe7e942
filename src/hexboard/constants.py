BOARD_RADIUS = 3

# Save document schema version written by save_board; loaders accept anything <= this.
SAVE_VERSION = 1

# Blocked terrain pieces turn in sixths of a circle (one hex side per click).
ROTATION_STEP = 60

# Terrain fill colours cycled by clicking a plain tile. Index 0 is the default
# and is transparent so the background map shows through.
TERRAIN_PALETTE = (
    (255, 255, 255, 0),      # clear
    (63, 127, 59, 150),      # forest   #3F7F3B
    (139, 110, 78, 150),     # mud      #8B6E4E
    (70, 130, 200, 150),     # water    #4682C8
    (232, 215, 161, 150),    # sand     #E8D7A1
)
BLOCKED_COLOR = (70, 70, 78, 235)

# Hex layout (flat-topped, pixel units at the reference window size).
HEX_SIZE = 42
HEX_SPACING = 1.08
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Hex Board"

# Drags shorter than this (pixels) are treated as clicks.
DRAG_THRESHOLD = 6.0

# False turns the window into a read-only viewer: no clicks, drags, tray drops, loads or resets.
ALLOW_EDITING = True

# Token artwork lives beside the package; image refs in documents are relative to it.
TOKEN_ASSET_DIR = "assets/tokens"
TOKEN_SIZE_SCALE = 0.9

LOG_LEVEL = "INFO"

# Tokens the window's tray keys (1-4) drop onto the tile under the cursor: (image_ref, label).
TOKEN_PRESETS = (
    ("infantry.png", "Infantry"),
    ("cavalry.png", "Cavalry"),
    ("artillery.png", "Artillery"),
    ("objective.png", "Objective"),
)
