from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HexCoordinate:
    """Cube coordinate of a hex cell. Invariant: q + r + s == 0.

    Used as the permanent key of a tile: equality and hashing are by value and
    ``key`` gives a stable string form for render keys and logs.
    """

    q: int
    r: int
    s: int

    def __post_init__(self) -> None:
        if self.q + self.r + self.s != 0:
            raise ValueError(f"Invalid cube coordinate ({self.q}, {self.r}, {self.s}): q + r + s must be 0")

    @classmethod
    def from_axial(cls, q: int, r: int) -> HexCoordinate:
        return cls(q, r, -q - r)

    @property
    def key(self) -> str:
        return f"{self.q},{self.r},{self.s}"

    def __str__(self) -> str:
        return f"({self.q}, {self.r}, {self.s})"
