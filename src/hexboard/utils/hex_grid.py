"""Hex grid helpers: region generation and flat-topped pixel layout.

Only what the board and the window need: the hexagon region and
conversions between cube coordinates and screen pixels.
"""
from __future__ import annotations

import math
from typing import Iterator, List, Tuple

from hexboard.components.hex_coordinate import HexCoordinate

Point = Tuple[float, float]

SQRT3 = math.sqrt(3)


def hexagon(radius: int) -> Iterator[HexCoordinate]:
    """Yield every coordinate within ``radius`` steps of the origin.

    Order is q ascending, then r ascending, so the same radius always yields
    the same sequence.
    """
    if radius < 0:
        raise ValueError(f"Radius must be non-negative, received {radius}")
    for q in range(-radius, radius + 1):
        r_min = max(-radius, -q - radius)
        r_max = min(radius, -q + radius)
        for r in range(r_min, r_max + 1):
            yield HexCoordinate(q, r, -q - r)


def hex_to_pixel(coordinate: HexCoordinate, size: float, origin: Point = (0.0, 0.0), spacing: float = 1.0) -> Point:
    step = size * spacing
    x = step * 1.5 * coordinate.q
    y = step * SQRT3 * (coordinate.r + coordinate.q / 2)
    # Screen y grows upwards in the window, so r grows downwards on screen.
    return origin[0] + x, origin[1] - y


def pixel_to_hex(x: float, y: float, size: float, origin: Point = (0.0, 0.0), spacing: float = 1.0) -> HexCoordinate:
    step = size * spacing
    px = (x - origin[0]) / step
    py = -(y - origin[1]) / step
    q = px * 2 / 3
    r = py / SQRT3 - px / 3
    return cube_round(q, r, -q - r)


def cube_round(q: float, r: float, s: float) -> HexCoordinate:
    rq, rr, rs = round(q), round(r), round(s)
    dq, dr, ds = abs(rq - q), abs(rr - r), abs(rs - s)
    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr > ds:
        rr = -rq - rs
    else:
        rs = -rq - rr
    return HexCoordinate(int(rq), int(rr), int(rs))


def hex_corners(center: Point, size: float) -> List[Point]:
    cx, cy = center
    corners: List[Point] = []
    for index in range(6):
        angle = math.radians(60 * index)
        corners.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return corners
