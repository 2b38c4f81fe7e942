import pytest

from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.utils.hex_grid import hex_to_pixel, hexagon, pixel_to_hex


@pytest.mark.parametrize("radius,expected", [(0, 1), (1, 7), (2, 19), (3, 37)])
def test_hexagon_size_matches_formula(radius, expected):
    coords = list(hexagon(radius))
    assert len(coords) == expected
    assert len(set(coords)) == expected


def test_hexagon_stays_within_radius_and_is_deterministic():
    first = list(hexagon(3))
    assert first == list(hexagon(3))
    assert all(max(abs(c.q), abs(c.r), abs(c.s)) <= 3 for c in first)
    assert first[0] == HexCoordinate(-3, 0, 3)


def test_hexagon_rejects_negative_radius():
    with pytest.raises(ValueError):
        list(hexagon(-1))


def test_coordinate_requires_zero_sum():
    with pytest.raises(ValueError):
        HexCoordinate(1, 1, 1)
    assert HexCoordinate.from_axial(2, -1) == HexCoordinate(2, -1, -1)
    assert HexCoordinate(1, -1, 0).key == "1,-1,0"


def test_pixel_round_trip_hits_every_cell_centre():
    origin = (400.0, 300.0)
    for coordinate in hexagon(3):
        x, y = hex_to_pixel(coordinate, 30, origin, 1.08)
        assert pixel_to_hex(x, y, 30, origin, 1.08) == coordinate
        # A point slightly off centre still maps to the same cell.
        assert pixel_to_hex(x + 5, y - 5, 30, origin, 1.08) == coordinate
