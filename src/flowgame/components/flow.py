from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from flowgame.components.color import Color
from flowgame.components.source import SourceSlot

Coordinate = Tuple[int, int]


@dataclass(slots=True)
class Flow:
    """A color's drawn path.

    Fields:
      color: the flow's color.
      anchor: source slot the path was started from; None until started.
      path: cells ordered anchor -> head. path[-1] is always the head.
    """
    color: Color
    anchor: Optional[SourceSlot] = None
    path: List[Coordinate] = field(default_factory=list)

    @property
    def head(self) -> Optional[Coordinate]:
        return self.path[-1] if self.path else None

    @property
    def predecessor(self) -> Optional[Coordinate]:
        """Cell immediately behind the head, if any."""
        return self.path[-2] if len(self.path) >= 2 else None

    @property
    def is_empty(self) -> bool:
        return not self.path
