from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from esper import World

from flowgame.commands import Direction
from flowgame.components.cell import CellKind
from flowgame.components.color import Color
from flowgame.components.cursor import Cursor, GrabState
from flowgame.components.source import SourceSlot
from flowgame.events.bus import (
    EventBus,
    EVENT_CURSOR_MOVED,
    EVENT_GRAB_RELEASED,
    EVENT_GRAB_STARTED,
)
from flowgame.results import BoardChange, Outcome
from flowgame.systems.board import BoardSystem
from flowgame.utils.grid import is_adjacent

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class CursorSystem:
    """Cursor and grab state machine.

    While Idle the cursor wanders over Empty and Path cells.  ToggleGrab picks
    up exactly one flow next to the cursor; from then on every Move is handed
    to ``BoardSystem.extend`` and the cursor rides the flow's head.
    """

    def __init__(self, world: World, event_bus: EventBus, board: BoardSystem, start: Optional[Coordinate] = None):
        self.world = world
        self.event_bus = event_bus
        self.board = board
        self._start = start
        self.cursor_entity = self.world.create_entity(Cursor(position=self._initial_position()))

    def _initial_position(self) -> Coordinate:
        if self._start is not None:
            if not self.board.in_bounds(self._start) or not self.board.content_at(self._start).steppable:
                raise ValueError(f"Cursor cannot start on {self._start}")
            return self._start
        for coord in self.board.level.coordinates():
            if self.board.content_at(coord).steppable:
                return coord
        raise ValueError("Level has no cell the cursor can stand on")

    def reset(self) -> None:
        cursor = self.cursor
        cursor.position = self._initial_position()
        cursor.grab = GrabState.idle()

    @property
    def cursor(self) -> Cursor:
        return self.world.component_for_entity(self.cursor_entity, Cursor)

    @property
    def position(self) -> Coordinate:
        return self.cursor.position

    @property
    def grab(self) -> GrabState:
        return self.cursor.grab

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def toggle_grab(self) -> Tuple[Outcome, Optional[BoardChange]]:
        cursor = self.cursor
        if cursor.grab.is_grabbing:
            self._release(reason="toggle")
            return Outcome.RELEASED, None

        candidates = self._grab_candidates(cursor.position)
        if not candidates:
            return Outcome.NOTHING_TO_GRAB, None
        if len(candidates) > 1:
            return Outcome.AMBIGUOUS_GRAB, None

        color, slot = next(iter(candidates.items()))
        change: Optional[BoardChange] = None
        flow = self.board.flow(color)
        if slot is not None:
            change = self.board.start_flow(color, slot)
            change.merge(self.board.extend(color, cursor.position))
        elif flow.head != cursor.position:
            change = self.board.extend(color, cursor.position)
        cursor.grab = GrabState.grabbing(color)
        logger.debug("Grabbed %s at %s", color.value, cursor.position)
        self.event_bus.emit(EVENT_GRAB_STARTED, color=color, position=cursor.position)
        return Outcome.GRABBED, change

    def move(self, direction: Direction) -> Tuple[Outcome, Optional[BoardChange]]:
        cursor = self.cursor
        target = direction.step(cursor.position)
        if not self.board.in_bounds(target):
            return Outcome.OUT_OF_BOUNDS, None

        color = cursor.grab.color
        if color is None:
            if not self.board.content_at(target).steppable:
                return Outcome.BLOCKED, None
            self._move_to(target)
            return Outcome.MOVED, None

        change = self.board.extend(color, target)
        if not change.accepted:
            return change.outcome, change
        if change.outcome is Outcome.ENTERED_SOURCE:
            self._release(reason="entered_source")
        else:
            self._move_to(target)
            if change.outcome is Outcome.SELF_DELETED:
                self._release(reason="self_crossing")
        return change.outcome, change

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _grab_candidates(self, position: Coordinate) -> Dict[Color, Optional[SourceSlot]]:
        """Colors grabbable from ``position``.

        Maps each color to the source slot that would become its anchor, or
        None when the color already has a path to resume.  A cursor resting
        on a flow's head grabs that flow outright.  When the cursor touches
        both sources of an empty flow the color counts once, anchored at
        slot A.  A non-empty flow is skipped while the cursor sits on its
        own path, since extending there would delete it.
        """
        content = self.board.content_at(position)
        if content.kind is CellKind.PATH and content.color is not None:
            if self.board.flow(content.color).head == position:
                return {content.color: None}

        candidates: Dict[Color, Optional[SourceSlot]] = {}
        for color in self.board.colors:
            flow = self.board.flow(color)
            if flow.is_empty:
                for slot, coord in self.board.sources(color).slots():
                    if is_adjacent(position, coord):
                        candidates[color] = slot
                        break
            elif flow.head is not None and is_adjacent(position, flow.head) and position not in flow.path:
                candidates[color] = None
        return candidates

    def _move_to(self, target: Coordinate) -> None:
        cursor = self.cursor
        previous = cursor.position
        cursor.position = target
        self.event_bus.emit(EVENT_CURSOR_MOVED, previous=previous, position=target)

    def _release(self, *, reason: str) -> None:
        cursor = self.cursor
        color = cursor.grab.color
        cursor.grab = GrabState.idle()
        logger.debug("Released %s (%s)", color.value if color else None, reason)
        self.event_bus.emit(EVENT_GRAB_RELEASED, color=color, reason=reason)
