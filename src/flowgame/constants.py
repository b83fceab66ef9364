from flowgame.components.color import Color

# Palette size is fixed; a level may define at most one source pair per color.
MAX_COLORS = len(Color)

BOTTOM_MARGIN = 20
TOP_MARGIN = 48

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Flow"

# Board maximum footprint relative to window (percentage of window width/height).
# The render/layout code will size the board so it does not exceed either percentage.
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.85
MIN_TILE_SIZE = 12

# Fraction of a tile covered by a drawn path segment.
PATH_WIDTH_PCT = 0.36
SOURCE_RADIUS_PCT = 0.38

PALETTE = {
    Color.RED:    (214, 48, 49),
    Color.ORANGE: (230, 126, 34),
    Color.BLUE:   (52, 101, 214),
    Color.PINK:   (232, 93, 180),
    Color.YELLOW: (241, 196, 15),
    Color.GREEN:  (46, 160, 67),
    Color.PURPLE: (142, 68, 173),
    Color.GRAY:   (128, 128, 128),
}
EMPTY_CELL_COLOR = (28, 28, 36)
WALL_COLOR = (90, 90, 100)
GRID_LINE_COLOR = (60, 60, 72)
CURSOR_COLOR = (240, 240, 240)
BACKGROUND_COLOR = (0, 0, 0)

# Raw pyglet key codes (arcade.key.*); kept as ints so input handling does not import arcade.
KEY_UP = 65362
KEY_DOWN = 65364
KEY_LEFT = 65361
KEY_RIGHT = 65363
KEY_W = 119
KEY_A = 97
KEY_S = 115
KEY_D = 100
KEY_SPACE = 32
KEY_R = 114
KEY_Q = 113
KEY_ESCAPE = 65307
