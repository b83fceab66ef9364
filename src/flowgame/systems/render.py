from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional, Tuple

from flowgame.components.cell import CellKind
from flowgame.constants import (
    CURSOR_COLOR, EMPTY_CELL_COLOR, GRID_LINE_COLOR, PALETTE, PATH_WIDTH_PCT,
    SOURCE_RADIUS_PCT, WALL_COLOR,
)
from flowgame.events.bus import EventBus, EVENT_GAME_WON, EVENT_GAME_RESET
from flowgame.ui.layout import cell_center, compute_board_geometry

if TYPE_CHECKING:
    from flowgame.session import BoardSnapshot, GameSession

Coordinate = Tuple[int, int]


class RenderSystem:
    def __init__(self, session: GameSession, event_bus: EventBus, window):
        self.session = session
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_GAME_WON, self.on_game_won)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)
        self.banner: Optional[str] = None
        # Cell centres from the last process() call, keyed by board coordinate.
        self._last_layout: Dict[Coordinate, Tuple[float, float]] = {}

    def on_game_won(self, sender, **kwargs):
        moves = kwargs.get('moves', 0)
        self.banner = f"Solved in {moves} moves"

    def on_game_reset(self, sender, **kwargs):
        self.banner = None

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True

        snapshot = self.session.snapshot()
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, snapshot.width, snapshot.height,
        )
        self._last_layout = {
            coord: cell_center(coord[0], coord[1], snapshot.height, tile_size, start_x, start_y)
            for coord in snapshot.cells
        }
        if headless:
            return
        self._draw_cells(arcade, snapshot, tile_size)
        self._draw_paths(arcade, snapshot, tile_size)
        self._draw_sources(arcade, snapshot, tile_size)
        self._draw_cursor(arcade, snapshot, tile_size)
        self._draw_status(arcade, snapshot)

    def _draw_cells(self, arcade, snapshot: BoardSnapshot, tile_size: int) -> None:
        half = tile_size / 2
        for coord, (cx, cy) in self._last_layout.items():
            content = snapshot.content_at(coord)
            fill = WALL_COLOR if content.kind is CellKind.WALL else EMPTY_CELL_COLOR
            arcade.draw_lrbt_rectangle_filled(cx - half, cx + half, cy - half, cy + half, fill)
            arcade.draw_lrbt_rectangle_outline(cx - half, cx + half, cy - half, cy + half, GRID_LINE_COLOR, 1)

    def _draw_paths(self, arcade, snapshot: BoardSnapshot, tile_size: int) -> None:
        line_width = max(2, int(tile_size * PATH_WIDTH_PCT))
        for color, flow_cells in self._flow_segments(snapshot).items():
            rgb = PALETTE[color]
            for (ax, ay), (bx, by) in zip(flow_cells, flow_cells[1:]):
                arcade.draw_line(ax, ay, bx, by, rgb, line_width)
            for cx, cy in flow_cells:
                arcade.draw_circle_filled(cx, cy, line_width / 2, rgb)

    def _flow_segments(self, snapshot: BoardSnapshot):
        # Anchor source centre followed by every path cell centre, per color.
        segments = {}
        board = self.session.board
        for color in board.colors:
            flow = board.flow(color)
            if not flow.path or flow.anchor is None:
                continue
            anchor = board.sources(color).coord(flow.anchor)
            segments[color] = [self._last_layout[anchor]] + [self._last_layout[c] for c in flow.path]
        return segments

    def _draw_sources(self, arcade, snapshot: BoardSnapshot, tile_size: int) -> None:
        radius = tile_size * SOURCE_RADIUS_PCT
        for coord, (cx, cy) in self._last_layout.items():
            content = snapshot.content_at(coord)
            if content.kind is not CellKind.SOURCE or content.color is None:
                continue
            arcade.draw_circle_filled(cx, cy, radius, PALETTE[content.color])

    def _draw_cursor(self, arcade, snapshot: BoardSnapshot, tile_size: int) -> None:
        cx, cy = self._last_layout[snapshot.cursor]
        half = tile_size / 2 - 2
        border = 4 if snapshot.grab.is_grabbing else 2
        outline = PALETTE[snapshot.grab.color] if snapshot.grab.color is not None else CURSOR_COLOR
        arcade.draw_lrbt_rectangle_outline(cx - half, cx + half, cy - half, cy + half, outline, border)

    def _draw_status(self, arcade, snapshot: BoardSnapshot) -> None:
        done = sum(1 for complete in snapshot.completion.values() if complete)
        text = f"Flows {done}/{len(snapshot.completion)}   Moves {snapshot.moves}"
        if self.banner:
            text = f"{self.banner}   (R to replay, Q to quit)"
        arcade.draw_text(text, self.window.width / 2, self.window.height - 30, arcade.color.WHITE, 16, anchor_x="center")
