from __future__ import annotations

from typing import Tuple

Coordinate = Tuple[int, int]


def is_adjacent(a: Coordinate, b: Coordinate) -> bool:
    """True when a and b share an edge (4-neighbourhood)."""
    ax, ay = a
    bx, by = b
    return (abs(ax - bx) == 1 and ay == by) or (abs(ay - by) == 1 and ax == bx)


def in_bounds(coord: Coordinate, width: int, height: int) -> bool:
    x, y = coord
    return 0 <= x < width and 0 <= y < height
