"""Abstract input commands consumed by the cursor controller and session."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

Coordinate = Tuple[int, int]


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    def step(self, coord: Coordinate) -> Coordinate:
        dx, dy = self.value
        return (coord[0] + dx, coord[1] + dy)


@dataclass(frozen=True, slots=True)
class Move:
    direction: Direction


@dataclass(frozen=True, slots=True)
class ToggleGrab:
    pass


@dataclass(frozen=True, slots=True)
class Quit:
    pass


@dataclass(frozen=True, slots=True)
class Reset:
    pass


Command = Union[Move, ToggleGrab, Quit, Reset]
