from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.constants import BLOCKED_COLOR, ROTATION_STEP, SAVE_VERSION, TERRAIN_PALETTE

logger = logging.getLogger(__name__)

Color = Tuple[int, ...]

# Record fields understood by each schema version. Versions above the newest
# entry are read with the newest field set; unknown keys are dropped.
RECORD_FIELDS_BY_VERSION: Dict[int, Tuple[str, ...]] = {
    1: ("color", "blocked", "rotation", "text", "image"),
}
COORDINATE_FIELDS = ("q", "r", "s")


def fields_for_version(version: int) -> Tuple[str, ...]:
    known = sorted(RECORD_FIELDS_BY_VERSION)
    if version in RECORD_FIELDS_BY_VERSION:
        return RECORD_FIELDS_BY_VERSION[version]
    if version > known[-1]:
        return RECORD_FIELDS_BY_VERSION[known[-1]]
    return RECORD_FIELDS_BY_VERSION[known[0]]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Token:
    """A game piece sitting on a tile: artwork reference, caption and facing."""

    image_ref: str
    label: str = ""
    rotation: int = 0


@dataclass(frozen=True, slots=True)
class TileView:
    """What the renderer needs to draw one tile."""

    coordinate: HexCoordinate
    is_blocked: bool
    display_color: Color
    token: Optional[Token]
    rotation: int


@dataclass(slots=True)
class TileRecord:
    """Sparse persisted form of a tile: coordinate plus non-default fields only.

    ``rotation`` holds the terrain rotation of a blocked tile or the token
    rotation of a token tile; a tile is never both.
    """

    coordinate: HexCoordinate
    version: int = SAVE_VERSION
    color: Optional[int] = None
    blocked: Optional[bool] = None
    rotation: Optional[int] = None
    text: Optional[str] = None
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "q": self.coordinate.q,
            "r": self.coordinate.r,
            "s": self.coordinate.s,
        }
        for name in fields_for_version(self.version):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], version: int) -> Optional[TileRecord]:
        """Build a record from one ``hexagons`` entry.

        Returns None when the entry has no usable coordinate. Fields with a
        value of the wrong type are dropped with a warning; keys the schema
        version does not define are ignored.
        """
        if not isinstance(data, Mapping):
            logger.warning("Skipping tile record that is not an object: %r", data)
            return None
        q = data.get("q")
        r = data.get("r")
        s = data.get("s", None)
        if not _is_int(q) or not _is_int(r):
            logger.warning("Skipping tile record without integer q/r: %r", data)
            return None
        if s is None:
            s = -q - r
        if not _is_int(s) or q + r + s != 0:
            logger.warning("Skipping tile record with invalid cube coordinate: %r", data)
            return None
        record = cls(coordinate=HexCoordinate(q, r, s), version=version)

        allowed = fields_for_version(version)
        unknown = [key for key in data if key not in allowed and key not in COORDINATE_FIELDS]
        if unknown:
            logger.debug("Ignoring unknown fields %s for %s (version %s)", unknown, record.coordinate, version)

        if "color" in allowed and "color" in data:
            if _is_int(data["color"]):
                record.color = data["color"]
            else:
                logger.warning("Ignoring non-integer color %r at %s", data["color"], record.coordinate)
        if "blocked" in allowed and "blocked" in data:
            if isinstance(data["blocked"], bool):
                record.blocked = data["blocked"]
            else:
                logger.warning("Ignoring non-boolean blocked %r at %s", data["blocked"], record.coordinate)
        if "rotation" in allowed and "rotation" in data:
            if _is_int(data["rotation"]):
                record.rotation = data["rotation"]
            else:
                logger.warning("Ignoring non-integer rotation %r at %s", data["rotation"], record.coordinate)
        for name in ("text", "image"):
            if name in allowed and name in data:
                if isinstance(data[name], str):
                    setattr(record, name, data[name])
                else:
                    logger.warning("Ignoring non-string %s %r at %s", name, data[name], record.coordinate)
        return record


@dataclass(slots=True)
class Tile:
    """One cell of the board.

    A tile is in exactly one of three modes: plain terrain (click cycles the
    colour), blocked terrain (click rotates it) or token-bearing. All state
    changes go through the methods below; each returns True when it changed
    something so callers can emit change events.
    """

    coordinate: HexCoordinate
    terrain_color_index: int = 0
    blocked: bool = False
    rotation: int = 0
    token: Optional[Token] = None
    palette: Tuple[Color, ...] = field(default=TERRAIN_PALETTE, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.palette:
            raise ValueError("Terrain palette must contain at least one colour")
        if self.blocked and self.token is not None:
            raise ValueError(f"Blocked tile at {self.coordinate} cannot hold a token")

    @property
    def terrain_color(self) -> Color:
        return self.palette[self.terrain_color_index]

    @property
    def has_token(self) -> bool:
        return self.token is not None

    def cycle_color(self) -> bool:
        if self.blocked or self.token is not None:
            return False
        self.terrain_color_index = (self.terrain_color_index + 1) % len(self.palette)
        return True

    def rotate_blocked(self) -> bool:
        if not self.blocked:
            return False
        self.rotation = (self.rotation + ROTATION_STEP) % 360
        return True

    def place_token(self, image_ref: str, label: str = "", rotation: int = 0) -> bool:
        if self.blocked or not image_ref:
            return False
        self.token = Token(image_ref=image_ref, label=label or "", rotation=int(rotation) % 360)
        return True

    def clear_token(self) -> bool:
        had_token = self.token is not None
        self.token = None
        return had_token

    def set_blocked(self, blocked: bool) -> bool:
        blocked = bool(blocked)
        if blocked == self.blocked:
            return False
        self.blocked = blocked
        self.rotation = 0
        if blocked:
            self.token = None
        return True

    def is_default(self) -> bool:
        return (
            not self.blocked
            and self.terrain_color_index == 0
            and self.token is None
            and self.rotation == 0
        )

    def to_record(self, version: int = SAVE_VERSION) -> Optional[TileRecord]:
        if self.is_default():
            return None
        record = TileRecord(coordinate=self.coordinate, version=version)
        if self.terrain_color_index != 0:
            record.color = self.terrain_color_index
        if self.blocked:
            record.blocked = True
            if self.rotation:
                record.rotation = self.rotation
        elif self.token is not None:
            record.image = self.token.image_ref
            if self.token.label:
                record.text = self.token.label
            if self.token.rotation:
                record.rotation = self.token.rotation
        return record

    def apply_record(self, record: TileRecord, version: int = SAVE_VERSION) -> None:
        if record.coordinate != self.coordinate:
            raise ValueError(f"Record for {record.coordinate} applied to tile {self.coordinate}")
        allowed = fields_for_version(version)

        if "color" in allowed and record.color is not None:
            if 0 <= record.color < len(self.palette):
                self.terrain_color_index = record.color
            else:
                logger.warning("Ignoring colour index %s outside palette at %s", record.color, self.coordinate)

        if "blocked" in allowed and record.blocked is not None:
            self.set_blocked(record.blocked)

        rotation = record.rotation if "rotation" in allowed else None
        if self.blocked:
            if rotation is not None:
                self.rotation = rotation % 360
            if record.image or record.text:
                logger.warning("Ignoring token on blocked tile %s", self.coordinate)
            return

        image = record.image if "image" in allowed else None
        text = record.text if "text" in allowed else None
        if image:
            self.place_token(image, text or "", rotation or 0)
        elif text:
            logger.warning("Ignoring token without image at %s", self.coordinate)

    def view(self) -> TileView:
        if self.blocked:
            return TileView(self.coordinate, True, BLOCKED_COLOR, None, self.rotation)
        token_rotation = self.token.rotation if self.token is not None else 0
        return TileView(self.coordinate, False, self.terrain_color, self.token, token_rotation)
