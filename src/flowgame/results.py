"""Outcome records returned by board operations and session commands."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from flowgame.components.color import Color
from flowgame.components.cursor import GrabState

if TYPE_CHECKING:
    from flowgame.commands import Command

Coordinate = Tuple[int, int]


class Outcome(Enum):
    # Accepted transitions
    STARTED = "started"
    EXTENDED = "extended"
    RETRACTED = "retracted"
    DELETED = "deleted"
    SELF_DELETED = "self_deleted"
    ENTERED_SOURCE = "entered_source"
    MOVED = "moved"
    GRABBED = "grabbed"
    RELEASED = "released"
    QUIT = "quit"
    RESET = "reset"
    # Rejected (no state change)
    BLOCKED = "blocked"
    OUT_OF_BOUNDS = "out_of_bounds"
    NOT_ADJACENT = "not_adjacent"
    NOTHING_TO_RETRACT = "nothing_to_retract"
    NOTHING_TO_GRAB = "nothing_to_grab"
    AMBIGUOUS_GRAB = "ambiguous_grab"
    SESSION_OVER = "session_over"

    @property
    def accepted(self) -> bool:
        return self not in _REJECTED


_REJECTED = frozenset({
    Outcome.BLOCKED,
    Outcome.OUT_OF_BOUNDS,
    Outcome.NOT_ADJACENT,
    Outcome.NOTHING_TO_RETRACT,
    Outcome.NOTHING_TO_GRAB,
    Outcome.AMBIGUOUS_GRAB,
    Outcome.SESSION_OVER,
})


@dataclass(slots=True)
class BoardChange:
    """What a single board operation did.

    changed: cells whose content changed, in the order they changed.
    cleared: colors whose whole path was removed by this operation.
    completion: completion deltas, color -> new completion value.
    """
    outcome: Outcome
    color: Optional[Color] = None
    changed: List[Coordinate] = field(default_factory=list)
    cleared: List[Color] = field(default_factory=list)
    completion: Dict[Color, bool] = field(default_factory=dict)

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted

    @property
    def releases_grab(self) -> bool:
        return self.outcome in (Outcome.SELF_DELETED, Outcome.ENTERED_SOURCE)

    @property
    def affected_colors(self) -> List[Color]:
        colors: List[Color] = []
        if self.color is not None:
            colors.append(self.color)
        for color in list(self.cleared) + list(self.completion):
            if color not in colors:
                colors.append(color)
        return colors

    def merge(self, other: BoardChange) -> BoardChange:
        """Fold a follow-up change into this one; the later outcome wins."""
        self.outcome = other.outcome
        self.changed.extend(other.changed)
        for color in other.cleared:
            if color not in self.cleared:
                self.cleared.append(color)
        self.completion.update(other.completion)
        return self


@dataclass(slots=True)
class CommandResult:
    command: Command
    outcome: Outcome
    cursor: Coordinate
    grab: GrabState
    change: Optional[BoardChange] = None
    won: bool = False

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted
