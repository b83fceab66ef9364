"""
Level text parser and validator.

Level files are plain text, one record per line::

    5 5            <- header: width height
    0 0 4 4        <- source pair: x1 y1 x2 y2 (one new color per line)
    2 2            <- wall: x y

Blank lines separate sections and are ignored; ``#`` starts a comment.
Colors are assigned to source pairs in the order they are encountered,
following ``Color`` declaration order.  Coordinates are ``x y`` (column,
row); files written for the legacy row-major dialect can be read with
``order=CoordinateOrder.YX``.  The header is ``width height`` in both.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from flowgame.components.cell import CellContent
from flowgame.components.color import Color
from flowgame.components.source import SourcePair
from flowgame.constants import MAX_COLORS
from flowgame.utils.grid import in_bounds

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class CoordinateOrder(Enum):
    XY = "xy"
    YX = "yx"


class LevelErrorKind(Enum):
    EMPTY = "empty"
    BAD_HEADER = "bad_header"
    BAD_DIMENSIONS = "bad_dimensions"
    BAD_TOKEN = "bad_token"
    BAD_ARITY = "bad_arity"
    TOO_MANY_COLORS = "too_many_colors"
    OUT_OF_BOUNDS = "out_of_bounds"
    DUPLICATE_SOURCE = "duplicate_source"
    CELL_TAKEN = "cell_taken"
    NO_FREE_CELL = "no_free_cell"


class LevelFormatError(ValueError):
    """Raised for any level text that cannot be turned into a valid board."""

    def __init__(self, kind: LevelErrorKind, message: str, *, line_no: int | None = None, line: str | None = None):
        self.kind = kind
        self.line_no = line_no
        self.line = line
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class LevelDefinition:
    """Immutable, validated level description."""
    width: int
    height: int
    walls: FrozenSet[Coordinate] = frozenset()
    sources: Mapping[Color, SourcePair] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def colors(self) -> List[Color]:
        return list(self.sources.keys())

    def in_bounds(self, coord: Coordinate) -> bool:
        return in_bounds(coord, self.width, self.height)

    def content_at(self, coord: Coordinate) -> CellContent:
        """Initial content of a cell before any flow is drawn."""
        if coord in self.walls:
            return CellContent.wall()
        for color, pair in self.sources.items():
            slot = pair.slot_at(coord)
            if slot is not None:
                return CellContent.source(color, slot)
        return CellContent.empty()

    def coordinates(self):
        """All coordinates in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)


def _strip(raw: str) -> str:
    return raw.split("#", 1)[0].strip()


def _parse_ints(text: str, line_no: int, raw: str) -> List[int]:
    values: List[int] = []
    for token in text.split():
        try:
            values.append(int(token))
        except ValueError:
            raise LevelFormatError(
                LevelErrorKind.BAD_TOKEN,
                f"expected an integer, got {token!r}",
                line_no=line_no,
                line=raw,
            ) from None
    return values


def parse_level(text: str, *, order: CoordinateOrder = CoordinateOrder.XY) -> LevelDefinition:
    """Parse level text into a LevelDefinition or raise LevelFormatError."""
    lines = [(idx, raw, _strip(raw)) for idx, raw in enumerate(text.splitlines(), start=1)]
    records = [(idx, raw, body) for idx, raw, body in lines if body]
    if not records:
        raise LevelFormatError(LevelErrorKind.EMPTY, "level is empty")

    header_no, header_raw, header = records[0]
    dims = _parse_ints(header, header_no, header_raw)
    if len(dims) != 2:
        raise LevelFormatError(
            LevelErrorKind.BAD_HEADER,
            f"header must be 'width height', got {len(dims)} values",
            line_no=header_no,
            line=header_raw,
        )
    width, height = dims
    if width <= 0 or height <= 0:
        raise LevelFormatError(
            LevelErrorKind.BAD_DIMENSIONS,
            f"dimensions must be positive, got {width}x{height}",
            line_no=header_no,
            line=header_raw,
        )

    assigned: Dict[Coordinate, str] = {}
    walls: set[Coordinate] = set()
    sources: Dict[Color, SourcePair] = {}

    def coord_of(a: int, b: int, line_no: int, raw: str) -> Coordinate:
        coord = (a, b) if order is CoordinateOrder.XY else (b, a)
        if not in_bounds(coord, width, height):
            raise LevelFormatError(
                LevelErrorKind.OUT_OF_BOUNDS,
                f"cell {coord} is outside the {width}x{height} board",
                line_no=line_no,
                line=raw,
            )
        return coord

    def claim(coord: Coordinate, what: str, line_no: int, raw: str) -> None:
        previous = assigned.get(coord)
        if previous is not None:
            raise LevelFormatError(
                LevelErrorKind.CELL_TAKEN,
                f"cell {coord} is already a {previous}",
                line_no=line_no,
                line=raw,
            )
        assigned[coord] = what

    for line_no, raw, body in records[1:]:
        values = _parse_ints(body, line_no, raw)
        if len(values) == 4:
            if len(sources) >= MAX_COLORS:
                raise LevelFormatError(
                    LevelErrorKind.TOO_MANY_COLORS,
                    f"at most {MAX_COLORS} source pairs are supported",
                    line_no=line_no,
                    line=raw,
                )
            first = coord_of(values[0], values[1], line_no, raw)
            second = coord_of(values[2], values[3], line_no, raw)
            if first == second:
                raise LevelFormatError(
                    LevelErrorKind.DUPLICATE_SOURCE,
                    f"both sources of a pair are at {first}",
                    line_no=line_no,
                    line=raw,
                )
            claim(first, "source", line_no, raw)
            claim(second, "source", line_no, raw)
            color = Color.for_index(len(sources))
            sources[color] = SourcePair(first, second)
        elif len(values) == 2:
            wall = coord_of(values[0], values[1], line_no, raw)
            claim(wall, "wall", line_no, raw)
            walls.add(wall)
        else:
            raise LevelFormatError(
                LevelErrorKind.BAD_ARITY,
                f"expected 2 (wall) or 4 (source pair) integers, got {len(values)}",
                line_no=line_no,
                line=raw,
            )

    if len(assigned) == width * height:
        raise LevelFormatError(
            LevelErrorKind.NO_FREE_CELL,
            "every cell is a source or a wall; the cursor has nowhere to stand",
        )

    level = LevelDefinition(
        width=width,
        height=height,
        walls=frozenset(walls),
        sources=MappingProxyType(dict(sources)),
    )
    logger.debug(
        "Parsed %dx%d level with %d colors and %d walls",
        width, height, len(sources), len(walls),
    )
    return level


def level_from_pairs(
    width: int,
    height: int,
    pairs: List[Tuple[Coordinate, Coordinate]],
    walls: Optional[List[Coordinate]] = None,
) -> LevelDefinition:
    """Build a level from Python values, applying the same validation as parse_level."""
    lines = [f"{width} {height}"]
    lines.extend(f"{a[0]} {a[1]} {b[0]} {b[1]}" for a, b in pairs)
    lines.extend(f"{x} {y}" for x, y in walls or [])
    return parse_level("\n".join(lines))
