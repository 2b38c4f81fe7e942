"""Entry point for the hex board editor.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color, key

from hexboard.components.tile import Token
from hexboard.constants import ALLOW_EDITING, LOG_LEVEL, TOKEN_PRESETS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from hexboard.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_DRAG,
    EVENT_MOUSE_RELEASE,
    EVENT_TILE_DROP,
    EVENT_BOARD_SAVE_REQUEST,
    EVENT_BOARD_LOAD_REQUEST,
    EVENT_BOARD_RESET_REQUEST,
)
from hexboard.systems.input import InputSystem
from hexboard.systems.render import RenderSystem
from hexboard.world import create_world

TRAY_KEYS = (key.KEY_1, key.KEY_2, key.KEY_3, key.KEY_4)

class HexBoardWindow(Window):
    def __init__(self, allow_editing: bool = ALLOW_EDITING):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.event_bus = EventBus()
        self.session = create_world(self.event_bus)
        self.world = self.session.world
        self.input_system = InputSystem(self.event_bus, self, self.world, allow_editing=allow_editing)
        self.render_system = RenderSystem(self.world, self.event_bus, self, self.input_system)
        self._mouse = (0.0, 0.0)
        set_background_color(color.DARK_SLATE_GRAY)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        self._mouse = (x, y)
        self.event_bus.emit(EVENT_MOUSE_DRAG, x=x, y=y, dx=dx, dy=dy, button=buttons)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=button)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self._mouse = (x, y)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.S:
            self.event_bus.emit(EVENT_BOARD_SAVE_REQUEST)
        elif not self.input_system.allow_editing:
            return
        elif symbol == key.L:
            self.event_bus.emit(EVENT_BOARD_LOAD_REQUEST)
        elif symbol == key.R:
            self.event_bus.emit(EVENT_BOARD_RESET_REQUEST)
        elif symbol in TRAY_KEYS:
            image_ref, label = TOKEN_PRESETS[TRAY_KEYS.index(symbol)]
            target = self.input_system.coordinate_at(*self._mouse)
            if target is not None:
                self.event_bus.emit(EVENT_TILE_DROP, source=None, target=target, payload=Token(image_ref, label))

def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    window = HexBoardWindow()
    run()

if __name__ == "__main__":
    main()
