from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from esper import World

from flowgame.components.board import Board
from flowgame.components.board_position import BoardPosition
from flowgame.components.cell import Cell, CellContent, CellKind
from flowgame.components.color import Color
from flowgame.components.flow import Flow
from flowgame.components.source import SourcePair, SourceSlot
from flowgame.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_FLOW_CLEARED,
    EVENT_FLOW_COMPLETION_CHANGED,
    EVENT_FLOW_STARTED,
    EVENT_SOURCE_ENTERED,
)
from flowgame.level.definition import LevelDefinition
from flowgame.results import BoardChange, Outcome
from flowgame.utils.grid import in_bounds, is_adjacent

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class BoardSystem:
    """Owns every cell and every flow path and enforces the drawing rules.

    One entity per cell carries ``BoardPosition`` + ``Cell``; one entity per
    color carries ``Flow`` + ``SourcePair``.  Every public mutation returns a
    ``BoardChange`` and emits bus events for each cell-level transition.
    """

    def __init__(self, world: World, event_bus: EventBus, level: LevelDefinition):
        self.world = world
        self.event_bus = event_bus
        self.level = level
        self.board_entity = self.world.create_entity(Board(width=level.width, height=level.height))
        self._cell_entities: Dict[Coordinate, int] = {}
        self._flow_entities: Dict[Color, int] = {}
        self._complete: Dict[Color, bool] = {}
        self._init_board()

    def _init_board(self):
        for coord in self.level.coordinates():
            ent = self.world.create_entity(
                BoardPosition(x=coord[0], y=coord[1]),
                Cell(content=self.level.content_at(coord)),
            )
            self._cell_entities[coord] = ent
        for color, pair in self.level.sources.items():
            self._flow_entities[color] = self.world.create_entity(Flow(color=color), pair)
            self._complete[color] = False

    def reset(self) -> None:
        """Restore the initial level state; all flows become empty."""
        for coord, ent in self._cell_entities.items():
            self.world.component_for_entity(ent, Cell).content = self.level.content_at(coord)
        for color in self._flow_entities:
            flow = self.flow(color)
            flow.path.clear()
            flow.anchor = None
            self._complete[color] = False

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.level.width

    @property
    def height(self) -> int:
        return self.level.height

    @property
    def colors(self) -> List[Color]:
        return list(self._flow_entities.keys())

    def in_bounds(self, coord: Coordinate) -> bool:
        return in_bounds(coord, self.width, self.height)

    def content_at(self, coord: Coordinate) -> CellContent:
        ent = self._cell_entities.get(coord)
        if ent is None:
            raise KeyError(f"Cell {coord} is outside the board")
        return self.world.component_for_entity(ent, Cell).content

    def cells(self) -> Dict[Coordinate, CellContent]:
        return {coord: self.content_at(coord) for coord in self._cell_entities}

    def flow(self, color: Color) -> Flow:
        ent = self._flow_entities.get(color)
        if ent is None:
            raise KeyError(f"Color {color.value} has no sources on this board")
        return self.world.component_for_entity(ent, Flow)

    def sources(self, color: Color) -> SourcePair:
        ent = self._flow_entities.get(color)
        if ent is None:
            raise KeyError(f"Color {color.value} has no sources on this board")
        return self.world.component_for_entity(ent, SourcePair)

    def is_complete(self, color: Color) -> bool:
        return self._complete[color]

    def completion(self) -> Dict[Color, bool]:
        return dict(self._complete)

    def all_complete(self) -> bool:
        return all(self._complete.values())

    @staticmethod
    def is_adjacent(a: Coordinate, b: Coordinate) -> bool:
        return is_adjacent(a, b)

    def origin_for(self, color: Color) -> Optional[Coordinate]:
        """Cell the next extension must touch: the head, or the anchor source for an empty path."""
        flow = self.flow(color)
        if flow.path:
            return flow.head
        if flow.anchor is None:
            return None
        return self.sources(color).coord(flow.anchor)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def start_flow(self, color: Color, slot: SourceSlot) -> BoardChange:
        flow = self.flow(color)
        if flow.path:
            raise ValueError(f"Flow {color.value} is already drawn; delete or retract it first")
        flow.anchor = slot
        logger.debug("Flow %s anchored at source %s", color.value, slot.value)
        self.event_bus.emit(EVENT_FLOW_STARTED, color=color, anchor=slot)
        return BoardChange(Outcome.STARTED, color=color)

    def extend(self, color: Color, target: Coordinate) -> BoardChange:
        flow = self.flow(color)
        if not self.in_bounds(target):
            return BoardChange(Outcome.OUT_OF_BOUNDS, color=color)
        origin = self.origin_for(color)
        if origin is None or not is_adjacent(origin, target):
            return BoardChange(Outcome.NOT_ADJACENT, color=color)

        content = self.content_at(target)
        if content.kind is CellKind.WALL:
            return BoardChange(Outcome.BLOCKED, color=color)

        if content.kind is CellKind.SOURCE:
            change = BoardChange(Outcome.ENTERED_SOURCE, color=color)
            self._refresh_completion([color], change)
            logger.debug("Flow %s entered source %s/%s", color.value, content.color.value, content.slot.value)
            self.event_bus.emit(
                EVENT_SOURCE_ENTERED,
                color=color,
                source_color=content.color,
                slot=content.slot,
            )
            return change

        if content.kind is CellKind.PATH and content.color is color:
            if target == flow.predecessor:
                return self.retract(color)
            change = self.delete_flow(color)
            change.outcome = Outcome.SELF_DELETED
            logger.debug("Flow %s crossed itself at %s and was deleted", color.value, target)
            return change

        change = BoardChange(Outcome.EXTENDED, color=color)
        if content.kind is CellKind.PATH:
            cleared = self._clear_path(content.color, cause=color)
            change.changed.extend(cleared)
            change.cleared.append(content.color)
        self._set_content(target, CellContent.path(color))
        flow.path.append(target)
        change.changed.append(target)
        self._refresh_completion(change.affected_colors, change)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="extend", color=color, positions=list(change.changed))
        return change

    def retract(self, color: Color) -> BoardChange:
        flow = self.flow(color)
        if not flow.path:
            return BoardChange(Outcome.NOTHING_TO_RETRACT, color=color)
        removed = flow.path.pop()
        self._set_content(removed, CellContent.empty())
        change = BoardChange(Outcome.RETRACTED, color=color, changed=[removed])
        self._refresh_completion([color], change)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="retract", color=color, positions=[removed])
        return change

    def delete_flow(self, color: Color) -> BoardChange:
        """Clear the whole path of ``color`` and forget its anchor."""
        cleared = self._clear_path(color, cause=color)
        change = BoardChange(Outcome.DELETED, color=color, changed=cleared, cleared=[color])
        self._refresh_completion([color], change)
        return change

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _set_content(self, coord: Coordinate, content: CellContent) -> None:
        self.world.component_for_entity(self._cell_entities[coord], Cell).content = content

    def _clear_path(self, color: Color, *, cause: Color) -> List[Coordinate]:
        flow = self.flow(color)
        positions = list(flow.path)
        for coord in positions:
            self._set_content(coord, CellContent.empty())
        flow.path.clear()
        flow.anchor = None
        if positions:
            self.event_bus.emit(EVENT_FLOW_CLEARED, color=color, positions=positions, cause=cause)
        return positions

    def _compute_complete(self, color: Color) -> bool:
        flow = self.flow(color)
        if not flow.path or flow.anchor is None:
            return False
        target = self.sources(color).coord(flow.anchor.other)
        return any(is_adjacent(cell, target) for cell in flow.path)

    def _refresh_completion(self, colors: Iterable[Color], change: BoardChange) -> None:
        for color in colors:
            now = self._compute_complete(color)
            if now == self._complete[color]:
                continue
            self._complete[color] = now
            change.completion[color] = now
            logger.debug("Flow %s completion -> %s", color.value, now)
            self.event_bus.emit(EVENT_FLOW_COMPLETION_CHANGED, color=color, complete=now)
