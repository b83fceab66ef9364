from typing import Callable, Dict, Optional

from flowgame.commands import Command, Direction, Move, Quit, Reset, ToggleGrab
from flowgame.constants import (
    KEY_A, KEY_D, KEY_DOWN, KEY_ESCAPE, KEY_LEFT, KEY_Q, KEY_R, KEY_RIGHT,
    KEY_S, KEY_SPACE, KEY_UP, KEY_W,
)
from flowgame.events.bus import EventBus, EVENT_COMMAND_REQUEST, EVENT_KEY_PRESS

DEFAULT_KEY_BINDINGS: Dict[int, Callable[[], Command]] = {
    KEY_UP: lambda: Move(Direction.UP),
    KEY_W: lambda: Move(Direction.UP),
    KEY_DOWN: lambda: Move(Direction.DOWN),
    KEY_S: lambda: Move(Direction.DOWN),
    KEY_LEFT: lambda: Move(Direction.LEFT),
    KEY_A: lambda: Move(Direction.LEFT),
    KEY_RIGHT: lambda: Move(Direction.RIGHT),
    KEY_D: lambda: Move(Direction.RIGHT),
    KEY_SPACE: ToggleGrab,
    KEY_R: Reset,
    KEY_Q: Quit,
    KEY_ESCAPE: Quit,
}


class InputSystem:
    """Translates raw key presses into abstract commands on the event bus."""

    def __init__(self, event_bus: EventBus, bindings: Optional[Dict[int, Callable[[], Command]]] = None):
        self.event_bus = event_bus
        self.bindings = dict(DEFAULT_KEY_BINDINGS if bindings is None else bindings)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        self.handle_key_press(int(symbol), kwargs.get('modifiers', 0))

    def handle_key_press(self, symbol: int, modifiers: int = 0) -> Optional[Command]:
        factory = self.bindings.get(symbol)
        if factory is None:
            return None
        command = factory()
        self.event_bus.emit(EVENT_COMMAND_REQUEST, command=command)
        return command
