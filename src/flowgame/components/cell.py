from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from flowgame.components.color import Color
from flowgame.components.source import SourceSlot


class CellKind(Enum):
    EMPTY = auto()
    WALL = auto()
    SOURCE = auto()
    PATH = auto()


@dataclass(frozen=True, slots=True)
class CellContent:
    """Tagged value describing what occupies a grid cell.

    ``color`` is set for SOURCE and PATH cells, ``slot`` only for SOURCE cells.
    Use the constructors below rather than building instances by hand.
    """
    kind: CellKind
    color: Optional[Color] = None
    slot: Optional[SourceSlot] = None

    @classmethod
    def empty(cls) -> CellContent:
        return EMPTY

    @classmethod
    def wall(cls) -> CellContent:
        return WALL

    @classmethod
    def source(cls, color: Color, slot: SourceSlot) -> CellContent:
        return cls(CellKind.SOURCE, color, slot)

    @classmethod
    def path(cls, color: Color) -> CellContent:
        return cls(CellKind.PATH, color)

    @property
    def steppable(self) -> bool:
        """True for cells the cursor may rest on."""
        return self.kind in (CellKind.EMPTY, CellKind.PATH)


EMPTY = CellContent(CellKind.EMPTY)
WALL = CellContent(CellKind.WALL)


@dataclass(slots=True)
class Cell:
    """Per-cell component; ``content`` is replaced wholesale by BoardSystem."""
    content: CellContent = EMPTY
