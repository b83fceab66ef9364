from flowgame.constants import (
    BOARD_MAX_HEIGHT_PCT, BOARD_MAX_WIDTH_PCT, BOTTOM_MARGIN, MIN_TILE_SIZE, TOP_MARGIN,
)


def compute_board_geometry(window_width: int, window_height: int, cols: int, rows: int):
    """Return (tile_size, start_x, start_y) for a board of ``cols`` x ``rows`` cells.

    start_x/start_y are the bottom-left corner of the board in window coordinates.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - TOP_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    total_width = cols * tile_size
    total_height = rows * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN + (window_height - BOTTOM_MARGIN - TOP_MARGIN - total_height) / 2
    return tile_size, start_x, start_y


def cell_center(x: int, y: int, rows: int, tile_size: int, start_x: float, start_y: float):
    """Window-space centre of board cell (x, y); board row 0 is drawn at the top."""
    center_x = start_x + x * tile_size + tile_size / 2
    center_y = start_y + (rows - 1 - y) * tile_size + tile_size / 2
    return center_x, center_y
