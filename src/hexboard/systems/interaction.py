import logging
from typing import Optional

from esper import World

from hexboard.components.drag_gesture import DragGesture
from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.components.tile import Tile, Token
from hexboard.errors import TileNotFoundError
from hexboard.events.bus import (
    EventBus,
    EVENT_TILE_CLICK,
    EVENT_TILE_BLOCK_TOGGLE,
    EVENT_TILE_DRAG_START,
    EVENT_TILE_DRAG_OVER,
    EVENT_TILE_DROP,
    EVENT_TILE_DRAG_END,
    EVENT_TILE_DRAG_REJECTED,
    EVENT_TILE_CHANGED,
)
from hexboard.systems import board_ops

logger = logging.getLogger(__name__)

class InteractionSystem:
    """Applies click and drag-and-drop gestures to board tiles.

    A drag is split in two steps: drop places a copy of the token on the
    target, drag-end clears the source once the host confirms the gesture
    succeeded. Dropping back onto the source therefore removes the token.

    Gestures that make no sense (unknown tiles, missing payload, clicks while a
    drag is open) are ignored rather than raised; UI input is racy.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self._on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_BLOCK_TOGGLE, self._on_block_toggle)
        self.event_bus.subscribe(EVENT_TILE_DRAG_START, self._on_drag_start)
        self.event_bus.subscribe(EVENT_TILE_DRAG_OVER, self._on_drag_over)
        self.event_bus.subscribe(EVENT_TILE_DROP, self._on_drop)
        self.event_bus.subscribe(EVENT_TILE_DRAG_END, self._on_drag_end)

    # Gesture handlers ---------------------------------------------------

    def on_click(self, coordinate: HexCoordinate) -> bool:
        if self.drag_in_progress():
            logger.debug("Ignoring click on %s while a drag is in progress", coordinate)
            return False
        tile = self._tile(coordinate)
        if tile is None:
            return False
        if tile.blocked:
            changed = tile.rotate_blocked()
            reason = "rotate"
        else:
            changed = tile.cycle_color()
            reason = "color"
        if changed:
            self._changed(coordinate, reason)
        return changed

    def on_toggle_blocked(self, coordinate: HexCoordinate) -> bool:
        if self.drag_in_progress():
            return False
        tile = self._tile(coordinate)
        if tile is None:
            return False
        changed = tile.set_blocked(not tile.blocked)
        if changed:
            self._changed(coordinate, "blocked" if tile.blocked else "unblocked")
        return changed

    def on_drag_start(self, source: HexCoordinate) -> bool:
        tile = self._tile(source)
        if tile is None or tile.token is None:
            logger.debug("Rejecting drag from %s: no token", source)
            self.event_bus.emit(EVENT_TILE_DRAG_REJECTED, source=source, reason="no_token")
            return False
        board_ops.clear_drag_gestures(self.world)
        self.world.create_entity(DragGesture(source=source))
        logger.debug("Drag started from %s carrying %s", source, tile.token)
        return True

    def on_drag_over(self, target: HexCoordinate) -> bool:
        # Any tile accepts a drop, the source included.
        return True

    def on_drop(self, source: Optional[HexCoordinate], target: HexCoordinate, payload: Optional[Token]) -> bool:
        if payload is None:
            logger.debug("Ignoring drop on %s without payload", target)
            return False
        tile = self._tile(target)
        if tile is None:
            return False
        if not tile.place_token(payload.image_ref, payload.label, payload.rotation):
            logger.debug("Drop on %s refused (blocked=%s)", target, tile.blocked)
            return False
        logger.debug("Dropped %s from %s onto %s", payload, source, target)
        self._changed(target, "token_placed")
        return True

    def on_drag_end(self, source: HexCoordinate, success: bool) -> bool:
        board_ops.clear_drag_gestures(self.world)
        if not success:
            logger.debug("Drag from %s aborted", source)
            return False
        tile = self._tile(source)
        if tile is None:
            return False
        if tile.clear_token():
            self._changed(source, "token_cleared")
        return True

    def drag_in_progress(self) -> bool:
        return any(True for _ in self.world.get_component(DragGesture))

    # Event bus adapters -------------------------------------------------

    def _on_tile_click(self, sender, **kwargs):
        coordinate = kwargs.get('coordinate')
        if coordinate is None:
            return
        self.on_click(coordinate)

    def _on_block_toggle(self, sender, **kwargs):
        coordinate = kwargs.get('coordinate')
        if coordinate is None:
            return
        self.on_toggle_blocked(coordinate)

    def _on_drag_start(self, sender, **kwargs):
        source = kwargs.get('source')
        if source is None:
            return
        self.on_drag_start(source)

    def _on_drag_over(self, sender, **kwargs):
        target = kwargs.get('target')
        if target is None:
            return
        self.on_drag_over(target)

    def _on_drop(self, sender, **kwargs):
        # source is None for tokens dragged in from outside the board (the token tray).
        target = kwargs.get('target')
        if target is None:
            return
        self.on_drop(kwargs.get('source'), target, kwargs.get('payload'))

    def _on_drag_end(self, sender, **kwargs):
        source = kwargs.get('source')
        if source is None:
            return
        self.on_drag_end(source, bool(kwargs.get('success', False)))

    # Helpers ------------------------------------------------------------

    def _tile(self, coordinate: HexCoordinate) -> Optional[Tile]:
        try:
            return board_ops.find_tile(self.world, coordinate)
        except TileNotFoundError:
            logger.debug("Ignoring gesture on %s outside the board", coordinate)
            return None

    def _changed(self, coordinate: HexCoordinate, reason: str) -> None:
        self.event_bus.emit(EVENT_TILE_CHANGED, coordinate=coordinate, reason=reason)
