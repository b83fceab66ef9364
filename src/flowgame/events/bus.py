from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & COMMANDS
# ============================================================================
EVENT_KEY_PRESS = "key_press"                  # payload: symbol=int, modifiers=int
EVENT_COMMAND_REQUEST = "command_request"      # payload: command=Command
EVENT_COMMAND_APPLIED = "command_applied"      # payload: command=Command, result=CommandResult
EVENT_COMMAND_REJECTED = "command_rejected"    # payload: command=Command, outcome=Outcome


# ============================================================================
# CURSOR & GRAB
# ============================================================================
EVENT_CURSOR_MOVED = "cursor_moved"            # payload: previous=(x,y), position=(x,y)
EVENT_GRAB_STARTED = "grab_started"            # payload: color=Color, position=(x,y)
EVENT_GRAB_RELEASED = "grab_released"          # payload: color=Color, reason=str


# ============================================================================
# BOARD & FLOWS
# ============================================================================
EVENT_FLOW_STARTED = "flow_started"                            # payload: color=Color, anchor=SourceSlot
EVENT_BOARD_CHANGED = "board_changed"                          # payload: reason=str, color=Color, positions=list[(x,y)]
EVENT_FLOW_CLEARED = "flow_cleared"                            # payload: color=Color, positions=list[(x,y)], cause=Color
EVENT_FLOW_COMPLETION_CHANGED = "flow_completion_changed"      # payload: color=Color, complete=bool
EVENT_SOURCE_ENTERED = "source_entered"                        # payload: color=Color, source_color=Color, slot=SourceSlot


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"  # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_GAME_WON = "game_won"                    # payload: moves=int
EVENT_GAME_RESET = "game_reset"                # payload: reason=str
