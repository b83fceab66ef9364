from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Coordinate = Tuple[int, int]


class SourceSlot(Enum):
    """Positional label of one of a color's two source cells."""
    A = "A"
    B = "B"

    @property
    def other(self) -> "SourceSlot":
        return SourceSlot.B if self is SourceSlot.A else SourceSlot.A


@dataclass(frozen=True, slots=True)
class SourcePair:
    """The two fixed source cells of a color."""
    a: Coordinate
    b: Coordinate

    def coord(self, slot: SourceSlot) -> Coordinate:
        return self.a if slot is SourceSlot.A else self.b

    def slot_at(self, coord: Coordinate) -> Optional[SourceSlot]:
        if coord == self.a:
            return SourceSlot.A
        if coord == self.b:
            return SourceSlot.B
        return None

    def slots(self) -> tuple[tuple[SourceSlot, Coordinate], ...]:
        return ((SourceSlot.A, self.a), (SourceSlot.B, self.b))
