"""Game state resource describing the session's current mode."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level session modes; only PLAYING accepts gameplay commands."""
    PLAYING = auto()
    WON = auto()
    QUIT = auto()


@dataclass
class GameState:
    """Singleton component storing the session mode and accepted move count."""
    mode: GameMode = GameMode.PLAYING
    moves: int = 0
