import logging
import math
from typing import Optional, Tuple

from esper import World

from hexboard.components.drag_gesture import DragGesture
from hexboard.components.hex_coordinate import HexCoordinate
from hexboard.components.tile import Token
from hexboard.constants import ALLOW_EDITING, DRAG_THRESHOLD, HEX_SPACING
from hexboard.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_DRAG,
    EVENT_MOUSE_RELEASE,
    EVENT_TILE_CLICK,
    EVENT_TILE_BLOCK_TOGGLE,
    EVENT_TILE_DRAG_START,
    EVENT_TILE_DRAG_OVER,
    EVENT_TILE_DROP,
    EVENT_TILE_DRAG_END,
)
from hexboard.systems import board_ops
from hexboard.ui.layout import compute_board_geometry
from hexboard.utils.hex_grid import pixel_to_hex

# Arcade button ids.
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4

logger = logging.getLogger(__name__)

class InputSystem:
    """Turns raw window mouse events into tile gestures.

    Left press and release on the same tile is a click, right click toggles
    the blocked flag, and a left drag that starts on a token tile becomes a
    drag-and-drop gesture. Drag-end success is whether the drop was accepted.

    With ``allow_editing`` off the board is a read-only viewer and presses
    are ignored, so no tile gestures are emitted.
    """

    def __init__(self, event_bus: EventBus, window, world: World, allow_editing: bool = ALLOW_EDITING):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.allow_editing = allow_editing
        self._press: Optional[Tuple[float, float, int, Optional[HexCoordinate]]] = None
        self.dragging = False
        self.drag_position: Optional[Tuple[float, float]] = None
        self.hover: Optional[HexCoordinate] = None
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_DRAG, self.on_mouse_drag)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE, self.on_mouse_release)

    def coordinate_at(self, x: float, y: float) -> Optional[HexCoordinate]:
        radius = board_ops.get_board(self.world).radius
        hex_size, origin = compute_board_geometry(self.window.width, self.window.height, radius)
        coordinate = pixel_to_hex(x, y, hex_size, origin, HEX_SPACING)
        if not board_ops.has_tile(self.world, coordinate):
            return None
        return coordinate

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None or not self.allow_editing:
            return
        self._press = (x, y, button, self.coordinate_at(x, y))
        self.dragging = False
        self.drag_position = None

    def on_mouse_drag(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None or self._press is None:
            return
        px, py, button, source = self._press
        if button != MOUSE_BUTTON_LEFT or source is None:
            return
        if not self.dragging:
            if math.hypot(x - px, y - py) < DRAG_THRESHOLD:
                return
            self.event_bus.emit(EVENT_TILE_DRAG_START, source=source)
            if not self._drag_accepted(source):
                # Rejected: nothing was picked up, forget the press entirely.
                self._press = None
                return
            self.dragging = True
        self.drag_position = (x, y)
        target = self.coordinate_at(x, y)
        if target is not None and target != self.hover:
            self.event_bus.emit(EVENT_TILE_DRAG_OVER, target=target)
        self.hover = target

    def on_mouse_release(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        press = self._press
        self._press = None
        self.hover = None
        self.drag_position = None
        if press is None:
            self.dragging = False
            return
        _, _, button, source = press
        target = None if x is None or y is None else self.coordinate_at(x, y)
        if self.dragging:
            self.dragging = False
            self._finish_drag(source, target)
            return
        if source is None or target != source:
            return
        if button == MOUSE_BUTTON_LEFT:
            self.event_bus.emit(EVENT_TILE_CLICK, coordinate=target)
        elif button == MOUSE_BUTTON_RIGHT:
            self.event_bus.emit(EVENT_TILE_BLOCK_TOGGLE, coordinate=target)

    def _finish_drag(self, source: HexCoordinate, target: Optional[HexCoordinate]) -> None:
        success = False
        if target is not None:
            payload = self._token_at(source)
            self.event_bus.emit(EVENT_TILE_DROP, source=source, target=target, payload=payload)
            success = payload is not None and self._token_at(target) == payload
        logger.debug("Drag %s -> %s finished (success=%s)", source, target, success)
        self.event_bus.emit(EVENT_TILE_DRAG_END, source=source, success=success)

    def _drag_accepted(self, source: HexCoordinate) -> bool:
        return any(gesture.source == source for _, gesture in self.world.get_component(DragGesture))

    def _token_at(self, coordinate: HexCoordinate) -> Optional[Token]:
        if not board_ops.has_tile(self.world, coordinate):
            return None
        return board_ops.find_tile(self.world, coordinate).token
