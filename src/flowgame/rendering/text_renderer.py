"""
Plain-text board rendering.

Glyphs:
  '.'  empty cell          '#'  wall
  'R'  source (uppercase color letter; Pink is 'K', Gray 'A')
  'r'  path cell (lowercase of the same letter)
  The cursor cell is wrapped in brackets in ``render_text(..., show_cursor=True)``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from flowgame.components.cell import CellContent, CellKind
from flowgame.components.color import Color

if TYPE_CHECKING:
    from flowgame.session import BoardSnapshot

COLOR_LETTERS = {
    Color.RED: "r",
    Color.ORANGE: "o",
    Color.BLUE: "b",
    Color.PINK: "k",
    Color.YELLOW: "y",
    Color.GREEN: "g",
    Color.PURPLE: "p",
    Color.GRAY: "a",
}


def glyph_for(content: CellContent) -> str:
    if content.kind is CellKind.EMPTY:
        return "."
    if content.kind is CellKind.WALL:
        return "#"
    letter = COLOR_LETTERS[content.color]
    return letter.upper() if content.kind is CellKind.SOURCE else letter


def render_rows(snapshot: BoardSnapshot) -> list[str]:
    rows = []
    for y in range(snapshot.height):
        rows.append("".join(glyph_for(snapshot.content_at((x, y))) for x in range(snapshot.width)))
    return rows


def render_text(snapshot: BoardSnapshot, *, show_cursor: bool = False) -> str:
    if not show_cursor:
        return "\n".join(render_rows(snapshot))
    lines = []
    cx, cy = snapshot.cursor
    for y in range(snapshot.height):
        parts = []
        for x in range(snapshot.width):
            glyph = glyph_for(snapshot.content_at((x, y)))
            parts.append(f"[{glyph}]" if (x, y) == (cx, cy) else f" {glyph} ")
        lines.append("".join(parts))
    status = "SOLVED" if snapshot.won else ("grabbing " + snapshot.grab.color.value if snapshot.grab.color else "idle")
    lines.append(f"moves: {snapshot.moves}  {status}")
    return "\n".join(lines)
