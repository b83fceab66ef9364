from __future__ import annotations

from esper import World

from flowgame.components.game_state import GameMode, GameState
from flowgame.events.bus import EVENT_GAME_MODE_CHANGED, EventBus


def get_game_state(world: World) -> GameState:
    """Return the shared GameState component, creating it if absent."""
    for _, state in world.get_component(GameState):
        return state
    state = GameState()
    world.create_entity(state)
    return state


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> None:
    """Update the session mode and emit a change event when it differs."""
    state = get_game_state(world)
    previous_mode = state.mode
    if previous_mode == mode:
        return
    state.mode = mode
    event_bus.emit(
        EVENT_GAME_MODE_CHANGED,
        previous_mode=previous_mode,
        new_mode=mode,
    )
