from enum import Enum


class Color(Enum):
    """Fixed flow palette.

    Declaration order is the order in which a level's source pairs are
    assigned colors.
    """
    RED = "red"
    ORANGE = "orange"
    BLUE = "blue"
    PINK = "pink"
    YELLOW = "yellow"
    GREEN = "green"
    PURPLE = "purple"
    GRAY = "gray"

    @classmethod
    def for_index(cls, index: int) -> "Color":
        return list(cls)[index]
