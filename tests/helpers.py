from __future__ import annotations

from typing import Iterable

from esper import World

from flowgame.commands import Command, Direction, Move, ToggleGrab
from flowgame.components.cell import CellKind
from flowgame.events.bus import EventBus
from flowgame.level.definition import parse_level
from flowgame.results import CommandResult
from flowgame.session import GameSession
from flowgame.systems.board import BoardSystem
from flowgame.world import create_world

UP = Move(Direction.UP)
DOWN = Move(Direction.DOWN)
LEFT = Move(Direction.LEFT)
RIGHT = Move(Direction.RIGHT)
GRAB = ToggleGrab()

# 6x6 board: Red sources at (0,0)/(0,5), Orange sources at (1,0)/(5,0).
COLUMN_LEVEL = "6 6\n0 0 0 5\n1 0 5 0\n"


def make_board(text: str, bus: EventBus | None = None) -> tuple[World, EventBus, BoardSystem]:
    bus = bus or EventBus()
    world = create_world(bus)
    board = BoardSystem(world, bus, parse_level(text))
    return world, bus, board


def make_session(text: str, cursor=None, bus: EventBus | None = None) -> GameSession:
    return GameSession(parse_level(text), event_bus=bus, cursor_start=cursor)


def play(session: GameSession, commands: Iterable[Command]) -> list[CommandResult]:
    return [session.apply(command) for command in commands]


def record(bus: EventBus, name: str) -> list[dict]:
    """Subscribe to ``name`` and collect every payload emitted."""
    captured: list[dict] = []
    bus.subscribe(name, lambda sender, **payload: captured.append(payload))
    return captured


def path_cells(board: BoardSystem) -> set:
    return {coord for coord, content in board.cells().items() if content.kind is CellKind.PATH}
