from __future__ import annotations

import math
from typing import TYPE_CHECKING

from hexboard.constants import HEX_SPACING, TOKEN_SIZE_SCALE
from hexboard.utils.hex_grid import hex_corners, hex_to_pixel

if TYPE_CHECKING:
    from hexboard.rendering.sprite_cache import SpriteCache
    from hexboard.systems.render import RenderSystem

OUTLINE_COLOR = (235, 240, 245, 200)
HOVER_COLOR = (255, 255, 255, 255)
TOKEN_FALLBACK_COLOR = (196, 64, 64, 230)
LABEL_COLOR = (20, 20, 24, 255)


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, sprite_cache: "SpriteCache"):
        self._rs = render_system
        self._sprites = sprite_cache

    def render(self, arcade, views, hex_size: float, origin, headless: bool) -> None:
        rs = self._rs
        sprites = self._sprites
        rs._last_tile_layout = {}
        if not headless:
            sprites.cleanup_token_sprites({view.coordinate for view in views if view.token is not None})

        hover = rs.hover_coordinate()
        for view in views:
            center = hex_to_pixel(view.coordinate, hex_size, origin, HEX_SPACING)
            corners = hex_corners(center, hex_size)
            rs._last_tile_layout[view.coordinate] = {"center": center, "size": hex_size, "view": view}
            if headless:
                continue

            if view.display_color[3] > 0:
                arcade.draw_polygon_filled(corners, view.display_color)
            outline = HOVER_COLOR if view.coordinate == hover else OUTLINE_COLOR
            arcade.draw_polygon_outline(corners, outline, 3 if view.coordinate == hover else 1)

            if view.is_blocked:
                self._draw_blocked_marker(arcade, center, hex_size, view.rotation)
            elif view.token is not None:
                self._draw_token(arcade, view.coordinate, view.token, center, hex_size)
            else:
                sprites.remove_token_sprite(view.coordinate)

        if not headless:
            sprites.draw_token_sprites()
            for view in views:
                if view.token is not None and view.token.label:
                    cx, cy = rs._last_tile_layout[view.coordinate]["center"]
                    arcade.draw_text(
                        view.token.label,
                        cx,
                        cy - hex_size * 0.62,
                        LABEL_COLOR,
                        max(8, int(hex_size * 0.22)),
                        anchor_x="center",
                        anchor_y="center",
                    )
            self._draw_drag_ghost(arcade, hex_size)

    def _draw_blocked_marker(self, arcade, center, hex_size: float, rotation: int) -> None:
        # A ridge from the centre to the edge midpoint the piece is turned towards.
        angle = math.radians(90 - rotation)
        reach = hex_size * 0.8
        end = (center[0] + reach * math.cos(angle), center[1] + reach * math.sin(angle))
        arcade.draw_line(center[0], center[1], end[0], end[1], (220, 220, 225, 255), 4)
        arcade.draw_circle_filled(center[0], center[1], hex_size * 0.12, (220, 220, 225, 255))

    def _draw_token(self, arcade, coordinate, token, center, hex_size: float) -> None:
        size = hex_size * TOKEN_SIZE_SCALE * 1.4
        sprite = self._sprites.ensure_token_sprite(arcade, coordinate, token.image_ref)
        if sprite is not None:
            self._sprites.update_sprite_visuals(sprite, center[0], center[1], size, token.rotation)
            return
        arcade.draw_circle_filled(center[0], center[1], size / 2, TOKEN_FALLBACK_COLOR)

    def _draw_drag_ghost(self, arcade, hex_size: float) -> None:
        position = self._rs.drag_position()
        if position is None:
            return
        x, y = position
        arcade.draw_circle_outline(x, y, hex_size * TOKEN_SIZE_SCALE * 0.7, HOVER_COLOR, 2)
