from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from flowgame.components.color import Color

Coordinate = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class GrabState:
    """Either Idle (color is None) or Grabbing(color)."""
    color: Optional[Color] = None

    @classmethod
    def idle(cls) -> GrabState:
        return cls()

    @classmethod
    def grabbing(cls, color: Color) -> GrabState:
        return cls(color)

    @property
    def is_idle(self) -> bool:
        return self.color is None

    @property
    def is_grabbing(self) -> bool:
        return self.color is not None


@dataclass(slots=True)
class Cursor:
    """Cursor position plus the grab state it carries.

    The position always refers to an Empty or Path cell.
    """
    position: Coordinate
    grab: GrabState = GrabState()
