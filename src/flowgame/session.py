"""Game session: owns the board and cursor and applies commands one at a time."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from flowgame.commands import Command, Move, Quit, Reset, ToggleGrab
from flowgame.components.cell import CellContent
from flowgame.components.color import Color
from flowgame.components.cursor import GrabState
from flowgame.components.game_state import GameMode
from flowgame.events.bus import (
    EventBus,
    EVENT_COMMAND_APPLIED,
    EVENT_COMMAND_REJECTED,
    EVENT_COMMAND_REQUEST,
    EVENT_GAME_RESET,
    EVENT_GAME_WON,
)
from flowgame.level.definition import LevelDefinition
from flowgame.results import BoardChange, CommandResult, Outcome
from flowgame.systems.board import BoardSystem
from flowgame.systems.cursor import CursorSystem
from flowgame.utils.game_state import get_game_state, set_game_mode
from flowgame.world import create_world

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class BoardSnapshot:
    """Render-facing view of the session after a command."""
    width: int
    height: int
    cells: Dict[Coordinate, CellContent]
    cursor: Coordinate
    grab: GrabState
    completion: Dict[Color, bool]
    won: bool
    mode: GameMode
    moves: int

    def content_at(self, coord: Coordinate) -> CellContent:
        return self.cells[coord]


class GameSession:
    """Applies Move / ToggleGrab / Quit / Reset commands and tracks the win.

    The session is strictly sequential: ``apply`` returns only after the
    board, cursor, completion and win status have all settled.
    """

    def __init__(
        self,
        level: LevelDefinition,
        *,
        event_bus: EventBus | None = None,
        cursor_start: Optional[Coordinate] = None,
    ) -> None:
        self.level = level
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.event_bus)
        self.board = BoardSystem(self.world, self.event_bus, level)
        self.cursor = CursorSystem(self.world, self.event_bus, self.board, start=cursor_start)
        self.event_bus.subscribe(EVENT_COMMAND_REQUEST, self.on_command_request)
        self._won = False
        self._update_win()
        logger.info("Session started on %dx%d level with %d colors", level.width, level.height, len(level.sources))

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    @property
    def moves(self) -> int:
        return get_game_state(self.world).moves

    @property
    def won(self) -> bool:
        return self._won

    @property
    def accepting_gameplay(self) -> bool:
        return self.mode == GameMode.PLAYING

    @property
    def grab(self) -> GrabState:
        return self.cursor.grab

    @property
    def cursor_position(self) -> Coordinate:
        return self.cursor.position

    def is_complete(self, color: Color) -> bool:
        return self.board.is_complete(color)

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            width=self.board.width,
            height=self.board.height,
            cells=self.board.cells(),
            cursor=self.cursor.position,
            grab=self.cursor.grab,
            completion=self.board.completion(),
            won=self._won,
            mode=self.mode,
            moves=self.moves,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def on_command_request(self, sender, **kwargs):
        command = kwargs.get("command")
        if command is None:
            return
        self.apply(command)

    def apply(self, command: Command) -> CommandResult:
        if isinstance(command, Reset):
            return self._finish(command, self._reset(), None)
        if isinstance(command, Quit):
            if self.mode == GameMode.QUIT:
                return self._finish(command, Outcome.SESSION_OVER, None)
            set_game_mode(self.world, self.event_bus, GameMode.QUIT)
            logger.info("Session quit after %d moves", self.moves)
            return self._finish(command, Outcome.QUIT, None)

        if not self.accepting_gameplay:
            return self._finish(command, Outcome.SESSION_OVER, None)

        if isinstance(command, Move):
            outcome, change = self.cursor.move(command.direction)
        elif isinstance(command, ToggleGrab):
            outcome, change = self.cursor.toggle_grab()
        else:
            raise ValueError(f"Unknown command {command!r}")

        if outcome.accepted:
            get_game_state(self.world).moves += 1
            if change is not None and change.affected_colors:
                self._update_win()
        return self._finish(command, outcome, change)

    def _reset(self) -> Outcome:
        self.board.reset()
        self.cursor.reset()
        state = get_game_state(self.world)
        state.moves = 0
        self._won = False
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self._update_win()
        logger.info("Session reset")
        self.event_bus.emit(EVENT_GAME_RESET, reason="command")
        return Outcome.RESET

    def _update_win(self) -> None:
        won = self.board.all_complete()
        if won == self._won:
            return
        self._won = won
        if won:
            set_game_mode(self.world, self.event_bus, GameMode.WON)
            logger.info("Puzzle solved in %d moves", self.moves)
            self.event_bus.emit(EVENT_GAME_WON, moves=self.moves)

    def _finish(self, command: Command, outcome: Outcome, change: Optional[BoardChange]) -> CommandResult:
        result = CommandResult(
            command=command,
            outcome=outcome,
            cursor=self.cursor.position,
            grab=self.cursor.grab,
            change=change,
            won=self._won,
        )
        if result.accepted:
            logger.debug("%r -> %s", command, outcome.value)
            self.event_bus.emit(EVENT_COMMAND_APPLIED, command=command, result=result)
        else:
            logger.debug("%r rejected: %s", command, outcome.value)
            self.event_bus.emit(EVENT_COMMAND_REJECTED, command=command, outcome=outcome)
        return result
