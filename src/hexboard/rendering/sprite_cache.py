from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from hexboard.components.hex_coordinate import HexCoordinate

logger = logging.getLogger(__name__)


class SpriteCache:
    """Caches token textures and the per-tile sprites that display them."""

    def __init__(self, asset_dir: Path):
        self._asset_dir = Path(asset_dir)
        self._texture_cache: dict[tuple[str, int | None], Any] = {}
        self._missing: set[str] = set()
        self._token_sprite_map: dict[HexCoordinate, Any] = {}
        self._token_sprites: Any | None = None

    def resolve(self, image_ref: str) -> Path:
        path = Path(image_ref)
        if path.is_absolute():
            return path
        return self._asset_dir / path

    # ------------------------------------------------------------------
    # Token sprites (one per tile coordinate)
    # ------------------------------------------------------------------
    def cleanup_token_sprites(self, active: set[HexCoordinate]) -> None:
        stale = [coordinate for coordinate in self._token_sprite_map if coordinate not in active]
        for coordinate in stale:
            self.remove_token_sprite(coordinate)

    def ensure_token_sprite(self, arcade_module, coordinate: HexCoordinate, image_ref: str):
        if not image_ref:
            return None
        sprite_list = self._token_sprites
        if sprite_list is None:
            sprite_list = arcade_module.SpriteList()
            self._token_sprites = sprite_list
        sprite = self._token_sprite_map.get(coordinate)
        current_ref = getattr(sprite, "_image_ref", None) if sprite is not None else None
        if sprite is not None and current_ref != image_ref:
            self.remove_token_sprite(coordinate)
            sprite = None
        if sprite is None:
            texture = self.get_texture(arcade_module, image_ref, max_dim=128)
            if texture is None:
                return None
            sprite = arcade_module.Sprite()
            sprite.texture = texture
            sprite._image_ref = image_ref  # type: ignore[attr-defined]
            self._token_sprite_map[coordinate] = sprite
            sprite_list.append(sprite)
        return sprite

    def remove_token_sprite(self, coordinate: HexCoordinate) -> None:
        sprite = self._token_sprite_map.pop(coordinate, None)
        if sprite is not None:
            sprite.remove_from_sprite_lists()

    def draw_token_sprites(self) -> None:
        if self._token_sprites is not None:
            self._token_sprites.draw()

    def update_sprite_visuals(self, sprite, center_x: float, center_y: float, size: float, angle: float) -> None:
        sprite.center_x = center_x
        sprite.center_y = center_y
        texture = sprite.texture
        if texture and texture.width and texture.height:
            sprite.scale = size / max(texture.width, texture.height)
        sprite.angle = angle

    # ------------------------------------------------------------------
    # Textures
    # ------------------------------------------------------------------
    def get_texture(self, arcade_module, image_ref: str, *, max_dim: int | None = None):
        from PIL import Image

        key = (image_ref, max_dim)
        cached = self._texture_cache.get(key)
        if cached is not None:
            return cached
        if image_ref in self._missing:
            return None
        path = self.resolve(image_ref)
        try:
            img = Image.open(path).convert("RGBA")
        except (OSError, ValueError):
            logger.warning("Token image %s could not be loaded from %s", image_ref, path)
            self._missing.add(image_ref)
            return None
        if max_dim is not None and max(img.size) > max_dim:
            w, h = img.size
            scale = max_dim / max(w, h)
            img = img.resize((max(1, int(w * scale)), max(1, int(h * scale))), Image.Resampling.LANCZOS)
        texture = arcade_module.Texture(img, hash=f"token:{image_ref}:{max_dim}")
        self._texture_cache[key] = texture
        return texture
