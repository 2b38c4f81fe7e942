import logging
from typing import List

from esper import World

from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.components.tile import Tile, TileView
from hexboard.constants import BOARD_RADIUS
from hexboard.events.bus import EventBus, EVENT_BOARD_RESET_REQUEST, EVENT_BOARD_RESET
from hexboard.systems import board_ops

logger = logging.getLogger(__name__)

class BoardSystem:
    """Owns the board entity: initial layout, lookups and reset."""

    def __init__(self, world: World, event_bus: EventBus, radius: int = BOARD_RADIUS):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = board_ops.create_default_board(self.world, radius)
        self.event_bus.subscribe(EVENT_BOARD_RESET_REQUEST, self.on_reset_request)

    @property
    def radius(self) -> int:
        return board_ops.get_board(self.world).radius

    def find_tile(self, coordinate: HexCoordinate) -> Tile:
        return board_ops.find_tile(self.world, coordinate)

    def all_tiles(self) -> List[Tile]:
        return board_ops.all_tiles(self.world)

    def views(self) -> List[TileView]:
        return board_ops.tile_views(self.world)

    def reset(self) -> None:
        board = board_ops.reset_board(self.world)
        logger.info("Board reset to defaults (%s tiles)", len(board.tile_entities))
        self.event_bus.emit(EVENT_BOARD_RESET, tiles=len(board.tile_entities))

    def on_reset_request(self, sender, **kwargs):
        self.reset()
