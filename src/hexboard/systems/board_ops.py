from __future__ import annotations

import logging
from typing import List

from esper import World

from hexboard.components.board import Board
from hexboard.components.drag_gesture import DragGesture
from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.components.tile import Tile, TileView
from hexboard.errors import TileNotFoundError
from hexboard.utils.hex_grid import hexagon

logger = logging.getLogger(__name__)


def get_board_entity(world: World) -> int:
    for entity, _ in world.get_component(Board):
        return entity
    raise RuntimeError("Board not found")


def get_board(world: World) -> Board:
    return world.component_for_entity(get_board_entity(world), Board)


def create_default_board(world: World, radius: int) -> int:
    """Create the board entity and one default tile entity per hexagon cell."""
    if radius < 0:
        raise ValueError(f"Radius must be non-negative, received {radius}")
    board = Board(radius=radius)
    board_entity = world.create_entity(board)
    _populate(world, board)
    logger.debug("Created board with radius %s (%s tiles)", radius, len(board.tile_entities))
    return board_entity


def _populate(world: World, board: Board) -> None:
    board.tile_entities = []
    board.index = {}
    for coordinate in hexagon(board.radius):
        entity = world.create_entity(Tile(coordinate=coordinate))
        board.tile_entities.append(entity)
        board.index[coordinate] = entity


def find_tile_entity(world: World, coordinate: HexCoordinate) -> int:
    board = get_board(world)
    try:
        return board.index[coordinate]
    except KeyError:
        raise TileNotFoundError(coordinate) from None


def find_tile(world: World, coordinate: HexCoordinate) -> Tile:
    return world.component_for_entity(find_tile_entity(world, coordinate), Tile)


def has_tile(world: World, coordinate: HexCoordinate) -> bool:
    return coordinate in get_board(world).index


def all_tiles(world: World) -> List[Tile]:
    board = get_board(world)
    return [world.component_for_entity(entity, Tile) for entity in board.tile_entities]


def tile_views(world: World) -> List[TileView]:
    return [tile.view() for tile in all_tiles(world)]


def clear_drag_gestures(world: World) -> None:
    for entity, _ in list(world.get_component(DragGesture)):
        world.delete_entity(entity, immediate=True)


def reset_board(world: World) -> Board:
    """Replace every tile with a fresh default one for the same region."""
    board = get_board(world)
    for entity in board.tile_entities:
        world.delete_entity(entity, immediate=True)
    _populate(world, board)
    clear_drag_gestures(world)
    return board
