from esper import World

from flowgame.components.game_state import GameMode, GameState
from flowgame.events.bus import EventBus


def create_world(event_bus: EventBus, initial_mode: GameMode = GameMode.PLAYING) -> World:
    world = World()
    setattr(world, "event_bus", event_bus)

    # Register the global game state resource.
    world.create_entity(GameState(mode=initial_mode))
    return world
