"""Line-oriented terminal front end.

Each input line is read as a sequence of keys: ``w a s d`` move, a space
toggles the grab, ``r`` resets and ``q`` quits.  The board is redrawn with
the text renderer after every line.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, TextIO

from flowgame.commands import Command, Direction, Move, Quit, Reset, ToggleGrab
from flowgame.components.game_state import GameMode
from flowgame.events.bus import EVENT_COMMAND_REQUEST
from flowgame.rendering.text_renderer import render_text
from flowgame.session import GameSession

logger = logging.getLogger(__name__)

TEXT_BINDINGS: Dict[str, Callable[[], Command]] = {
    'w': lambda: Move(Direction.UP),
    's': lambda: Move(Direction.DOWN),
    'a': lambda: Move(Direction.LEFT),
    'd': lambda: Move(Direction.RIGHT),
    ' ': ToggleGrab,
    'r': Reset,
    'q': Quit,
}


def draw(session: GameSession, out: TextIO) -> None:
    out.write(render_text(session.snapshot(), show_cursor=True) + "\n\n")


def run_terminal(session: GameSession, lines: Iterable[str], out: TextIO) -> None:
    """Feed key lines to ``session`` over its event bus until quit or end of input."""
    draw(session, out)
    for line in lines:
        for key in line.rstrip("\r\n").lower():
            factory = TEXT_BINDINGS.get(key)
            if factory is None:
                logger.debug("Ignoring key %r", key)
                continue
            session.event_bus.emit(EVENT_COMMAND_REQUEST, command=factory())
            if session.mode == GameMode.QUIT:
                return
        draw(session, out)
