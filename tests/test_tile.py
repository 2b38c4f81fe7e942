import random

import pytest

from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.components.tile import Tile, TileRecord, Token
from hexboard.constants import BLOCKED_COLOR, ROTATION_STEP, TERRAIN_PALETTE


ORIGIN = HexCoordinate(0, 0, 0)


def _tile() -> Tile:
    return Tile(coordinate=ORIGIN)


def test_default_tile_state():
    tile = _tile()
    assert tile.terrain_color_index == 0
    assert tile.terrain_color == TERRAIN_PALETTE[0]
    assert not tile.blocked
    assert tile.token is None
    assert tile.is_default()
    assert tile.to_record() is None


def test_cycle_color_returns_to_start_after_palette_length_steps():
    tile = _tile()
    tile.cycle_color()
    start = tile.terrain_color_index
    for _ in range(len(TERRAIN_PALETTE)):
        assert tile.cycle_color()
    assert tile.terrain_color_index == start
    assert tile.terrain_color == TERRAIN_PALETTE[start]


def test_cycle_color_with_single_colour_palette_stays_put():
    tile = Tile(coordinate=ORIGIN, palette=((1, 2, 3, 4),))
    assert tile.cycle_color()
    assert tile.terrain_color_index == 0


def test_empty_palette_rejected():
    with pytest.raises(ValueError):
        Tile(coordinate=ORIGIN, palette=())


def test_blocked_tile_with_token_rejected():
    with pytest.raises(ValueError):
        Tile(coordinate=ORIGIN, blocked=True, token=Token("a.png"))


def test_cycle_color_ignored_on_blocked_and_token_tiles():
    blocked = _tile()
    blocked.set_blocked(True)
    assert not blocked.cycle_color()
    assert blocked.terrain_color_index == 0

    with_token = _tile()
    with_token.place_token("knight.png", "Knight")
    assert not with_token.cycle_color()
    assert with_token.terrain_color_index == 0


def test_rotate_blocked_steps_and_wraps():
    tile = _tile()
    assert not tile.rotate_blocked()
    assert tile.rotation == 0

    tile.set_blocked(True)
    for step in range(1, 360 // ROTATION_STEP + 1):
        assert tile.rotate_blocked()
        assert tile.rotation == (step * ROTATION_STEP) % 360
    assert tile.rotation == 0


def test_place_token_overwrites_and_keeps_colour():
    tile = _tile()
    tile.cycle_color()
    tile.place_token("a.png", "A", 0)
    tile.place_token("b.png", "B", 60)
    assert tile.token == Token("b.png", "B", 60)
    assert tile.terrain_color_index == 1
    assert not tile.blocked


def test_place_token_refused_on_blocked_tile_or_without_image():
    tile = _tile()
    tile.set_blocked(True)
    assert not tile.place_token("a.png", "A")
    assert tile.token is None

    plain = _tile()
    assert not plain.place_token("", "No image")
    assert plain.token is None


def test_place_then_clear_restores_previous_state():
    tile = _tile()
    tile.cycle_color()
    tile.cycle_color()
    before = Tile(coordinate=tile.coordinate, terrain_color_index=tile.terrain_color_index)
    tile.place_token("a.png", "A", 120)
    tile.clear_token()
    assert tile == before


def test_clear_token_is_idempotent():
    tile = _tile()
    tile.place_token("a.png", "A")
    assert tile.clear_token()
    once = Tile(coordinate=tile.coordinate, terrain_color_index=tile.terrain_color_index)
    assert not tile.clear_token()
    assert tile == once


def test_blocking_drops_token_and_unblocking_resets_rotation():
    tile = _tile()
    tile.place_token("a.png", "A")
    assert tile.set_blocked(True)
    assert tile.token is None
    tile.rotate_blocked()
    assert not tile.set_blocked(True)
    assert tile.set_blocked(False)
    assert tile.rotation == 0
    assert tile.is_default()


def test_blocked_and_token_never_coexist_under_random_operations():
    rng = random.Random(1234)
    tile = _tile()
    operations = [
        lambda: tile.cycle_color(),
        lambda: tile.rotate_blocked(),
        lambda: tile.place_token("t.png", "T", rng.choice([0, 60, 180])),
        lambda: tile.clear_token(),
        lambda: tile.set_blocked(True),
        lambda: tile.set_blocked(False),
    ]
    for _ in range(500):
        rng.choice(operations)()
        assert not (tile.blocked and tile.token is not None)
        assert 0 <= tile.rotation < 360


def test_blocked_record_only_carries_blocked_fields():
    tile = _tile()
    tile.set_blocked(True)
    tile.rotate_blocked()
    tile.rotate_blocked()
    record = tile.to_record(1)
    assert record.to_dict() == {"q": 0, "r": 0, "s": 0, "blocked": True, "rotation": 120}
    assert record.version == 1


def test_token_record_uses_text_image_and_rotation():
    tile = Tile(coordinate=HexCoordinate(1, -1, 0))
    tile.cycle_color()
    tile.place_token("knight.png", "Knight", 180)
    assert tile.to_record().to_dict() == {
        "q": 1,
        "r": -1,
        "s": 0,
        "color": 1,
        "rotation": 180,
        "text": "Knight",
        "image": "knight.png",
    }


def test_apply_record_restores_state():
    source = Tile(coordinate=ORIGIN)
    source.cycle_color()
    source.set_blocked(True)
    source.rotate_blocked()

    target = _tile()
    target.apply_record(source.to_record(1), 1)
    assert target == source


def test_apply_record_for_other_coordinate_is_an_error():
    record = TileRecord(coordinate=HexCoordinate(1, 0, -1), blocked=True)
    with pytest.raises(ValueError):
        _tile().apply_record(record, 1)


def test_apply_record_skips_invalid_colour_but_keeps_other_fields():
    tile = _tile()
    tile.apply_record(TileRecord(coordinate=ORIGIN, color=99, image="a.png", text="A"), 1)
    assert tile.terrain_color_index == 0
    assert tile.token == Token("a.png", "A", 0)


def test_apply_record_prefers_blocked_over_token():
    tile = _tile()
    tile.apply_record(TileRecord(coordinate=ORIGIN, blocked=True, rotation=60, image="a.png"), 1)
    assert tile.blocked
    assert tile.rotation == 60
    assert tile.token is None


def test_record_from_dict_tolerates_unknown_and_bad_fields():
    record = TileRecord.from_dict(
        {"q": 1, "r": 0, "s": -1, "color": "red", "blocked": True, "elevation": 3},
        2,
    )
    assert record.coordinate == HexCoordinate(1, 0, -1)
    assert record.color is None
    assert record.blocked is True
    assert "elevation" not in record.to_dict()


def test_record_from_dict_derives_missing_s_and_rejects_bad_coordinates():
    assert TileRecord.from_dict({"q": 2, "r": -1}, 1).coordinate == HexCoordinate(2, -1, -1)
    assert TileRecord.from_dict({"q": 1, "r": 1, "s": 1}, 1) is None
    assert TileRecord.from_dict({"r": 1}, 1) is None
    assert TileRecord.from_dict(["not", "a", "dict"], 1) is None


def test_view_reports_render_state():
    tile = _tile()
    tile.place_token("a.png", "A", 240)
    view = tile.view()
    assert view.coordinate == ORIGIN
    assert not view.is_blocked
    assert view.token == Token("a.png", "A", 240)
    assert view.rotation == 240

    tile.set_blocked(True)
    tile.rotate_blocked()
    view = tile.view()
    assert view.is_blocked
    assert view.display_color == BLOCKED_COLOR
    assert view.token is None
    assert view.rotation == ROTATION_STEP
