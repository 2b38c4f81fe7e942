from types import SimpleNamespace

from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.rendering.board_renderer import BoardRenderer
from hexboard.rendering.sprite_cache import SpriteCache
from hexboard.world import create_world


class RecordingArcade:
    """Stands in for the arcade module and records draw calls."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if not name.startswith("draw_"):
            raise AttributeError(name)

        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))

        return record

    def SpriteList(self):
        return SimpleNamespace(append=lambda sprite: None, draw=lambda: None)

    def names(self):
        return [name for name, _, _ in self.calls]


class DummyRenderSystem:
    def __init__(self):
        self._last_tile_layout = {}

    def hover_coordinate(self):
        return None

    def drag_position(self):
        return (10.0, 10.0)


def _render(views, headless=False, asset_dir="/nonexistent"):
    rs = DummyRenderSystem()
    arcade = RecordingArcade()
    renderer = BoardRenderer(rs, SpriteCache(asset_dir))
    renderer.render(arcade, views, 30.0, (400.0, 300.0), headless)
    return rs, arcade


def test_headless_render_builds_layout_without_drawing():
    session = create_world(radius=1)
    rs, arcade = _render(session.board_system.views(), headless=True)
    assert set(rs._last_tile_layout) == {tile.coordinate for tile in session.board_system.all_tiles()}
    assert rs._last_tile_layout[HexCoordinate(0, 0, 0)]["center"] == (400.0, 300.0)
    assert arcade.calls == []


def test_render_draws_terrain_blocked_and_token_fallback():
    session = create_world(radius=1)
    board = session.board_system
    board.find_tile(HexCoordinate(0, 0, 0)).cycle_color()
    board.find_tile(HexCoordinate(1, -1, 0)).set_blocked(True)
    board.find_tile(HexCoordinate(-1, 1, 0)).place_token("missing.png", "Scout")

    _, arcade = _render(board.views())
    names = arcade.names()

    # Default tiles are transparent: one fill for the coloured tile, one for the blocked one.
    assert names.count("draw_polygon_filled") == 2
    assert names.count("draw_polygon_outline") == 7
    assert "draw_line" in names
    # Missing artwork falls back to a disc; the label is drawn as text.
    assert ("draw_text" in names) and any(call[1][0] == "Scout" for call in arcade.calls if call[0] == "draw_text")
    assert "draw_circle_outline" in names
