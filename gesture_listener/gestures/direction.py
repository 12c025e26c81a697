"""
Direction classification for swipe vectors.

Directions are laid out as a 3x3 grid, matching a numeric keypad read
top to bottom:

    1 2 3      left_up    up    right_up
    4 5 6      left       none  right
    7 8 9      left_down  down  right_down
"""

import math
from enum import IntEnum

from ..config.settings import GestureConfig


class Direction(IntEnum):
    """Swipe direction codes."""
    LEFT_UP = 1
    UP = 2
    RIGHT_UP = 3
    LEFT = 4
    NONE = 5
    RIGHT = 6
    LEFT_DOWN = 7
    DOWN = 8
    RIGHT_DOWN = 9

    @property
    def key(self) -> str:
        """Name used for the direction in the config file."""
        return self.name.lower()

    @property
    def is_diagonal(self) -> bool:
        return self in (Direction.LEFT_UP, Direction.RIGHT_UP,
                        Direction.LEFT_DOWN, Direction.RIGHT_DOWN)

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


# Every direction that can be bound to a command
SWIPE_DIRECTIONS = tuple(d for d in Direction if d is not Direction.NONE)


def classify_direction(dx: float, dy: float,
                       oblique_ratio: float = GestureConfig.OBLIQUE_RATIO) -> Direction:
    """
    Classify a motion vector into one of the eight compass directions.

    The dominant axis picks the primary direction; the minor axis adds a
    diagonal component when its ratio to the dominant axis exceeds
    ``oblique_ratio``. Screen coordinates are used, so negative dy is up.

    Args:
        dx: Horizontal motion
        dy: Vertical motion

    Returns:
        The direction, or Direction.NONE for a zero vector
    """
    if dx == 0 and dy == 0:
        return Direction.NONE

    code = Direction.NONE.value
    if abs(dx) > abs(dy):
        code += -1 if dx < 0 else 1
        if abs(dy) / abs(dx) > oblique_ratio:
            code += -3 if dy < 0 else 3
    else:
        code += -3 if dy < 0 else 3
        if abs(dx) / abs(dy) > oblique_ratio:
            code += -1 if dx < 0 else 1

    return Direction(code)


def swipe_length(dx: float, dy: float) -> float:
    """Length of a swipe vector."""
    return math.sqrt(dx * dx + dy * dy)
