"""
Utilities package for contact geometry and gesture logging.
"""

from .gesture_utils import (
    Point,
    GeometryUtils
)
from .logger import GestureLogger

__all__ = [
    'Point',
    'GeometryUtils',
    'GestureLogger'
]
