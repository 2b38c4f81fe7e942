from pathlib import Path
from typing import Any, Optional, Tuple

from esper import World

from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.constants import TOKEN_ASSET_DIR
from hexboard.events.bus import EventBus, EVENT_BOARD_RESET, EVENT_BOARD_LOADED
from hexboard.rendering.board_renderer import BoardRenderer
from hexboard.rendering.sprite_cache import SpriteCache
from hexboard.systems import board_ops
from hexboard.ui.layout import compute_board_geometry

class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window, input_system=None):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.input_system = input_system
        asset_dir = Path(__file__).resolve().parents[3] / TOKEN_ASSET_DIR
        self.sprite_cache = SpriteCache(asset_dir)
        self._board_renderer = BoardRenderer(self, self.sprite_cache)
        self._last_tile_layout: dict[HexCoordinate, dict[str, Any]] = {}
        self.event_bus.subscribe(EVENT_BOARD_RESET, self._on_board_replaced)
        self.event_bus.subscribe(EVENT_BOARD_LOADED, self._on_board_replaced)

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        board = board_ops.get_board(self.world)
        hex_size, origin = compute_board_geometry(self.window.width, self.window.height, board.radius)
        views = board_ops.tile_views(self.world)
        self._board_renderer.render(arcade, views, hex_size, origin, headless)

    def hover_coordinate(self) -> Optional[HexCoordinate]:
        if self.input_system is None:
            return None
        return self.input_system.hover

    def drag_position(self) -> Optional[Tuple[float, float]]:
        if self.input_system is None:
            return None
        return self.input_system.drag_position

    def _on_board_replaced(self, sender, **kwargs):
        # Tile entities were recreated; cached token sprites are stale.
        self.sprite_cache.cleanup_token_sprites(set())
