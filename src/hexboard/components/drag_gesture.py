from dataclasses import dataclass

from hexboard.components.hex_coordinate import HexCoordinate

@dataclass(slots=True)
class DragGesture:
    """Marks that a token drag is in progress.

    Fields:
      source: coordinate of the tile the token was picked up from.
    """
    source: HexCoordinate
