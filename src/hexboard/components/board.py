from dataclasses import dataclass, field
from typing import Dict, List

from hexboard.components.hex_coordinate import HexCoordinate

@dataclass(slots=True)
class Board:
    """Singleton component describing the hexagonal board region.

    tile_entities keeps generation order so rendering and saving iterate the
    same way every time; index maps each coordinate to its tile entity.
    """
    radius: int
    tile_entities: List[int] = field(default_factory=list)
    index: Dict[HexCoordinate, int] = field(default_factory=dict)
