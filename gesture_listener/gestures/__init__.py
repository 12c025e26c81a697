"""
Gesture recognition state machines.

The swipe, pinch and touch state machines live in their own modules;
this package only re-exports the direction classifier they share.
"""

from .direction import Direction, SWIPE_DIRECTIONS, classify_direction, swipe_length

__all__ = [
    'Direction',
    'SWIPE_DIRECTIONS',
    'classify_direction',
    'swipe_length'
]
