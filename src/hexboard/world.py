from dataclasses import dataclass

from esper import World

from hexboard.constants import BOARD_RADIUS
from hexboard.events.bus import EventBus
from hexboard.systems.board import BoardSystem
from hexboard.systems.interaction import InteractionSystem
from hexboard.systems.persistence_system import BoardPersistenceSystem


@dataclass
class BoardSession:
    """The world and the core systems that operate on one board."""
    world: World
    event_bus: EventBus
    board_system: BoardSystem
    interaction_system: InteractionSystem
    persistence_system: BoardPersistenceSystem


def create_world(event_bus: EventBus | None = None, radius: int = BOARD_RADIUS) -> BoardSession:
    event_bus = event_bus or EventBus()
    world = World()
    board_system = BoardSystem(world, event_bus, radius=radius)
    interaction_system = InteractionSystem(world, event_bus)
    persistence_system = BoardPersistenceSystem(world, event_bus)
    return BoardSession(
        world=world,
        event_bus=event_bus,
        board_system=board_system,
        interaction_system=interaction_system,
        persistence_system=persistence_system,
    )
