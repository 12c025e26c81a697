"""
Swipe state machine for touchpad swipe gestures.
"""

import logging
from dataclasses import dataclass

from ..config.commands import DispatchResult, GestureFamily
from ..config.settings import GestureConfig, Settings
from .direction import Direction, classify_direction

logger = logging.getLogger(__name__)


@dataclass
class SwipeEvent:
    """State of one swipe gesture."""
    fingers: int = 0
    dx: float = 0.0
    dy: float = 0.0
    step: int = 0
    executed: bool = False


class SwipeStateMachine:
    """
    Accumulates swipe motion between begin and end.

    A swipe fires as soon as the accumulated motion passes the threshold
    for either axis. Unless one-shot is configured, the swipe can fire
    again within the same gesture, each time needing proportionally more
    motion. With trigger-on-release, a swipe that never reached the
    threshold fires when the fingers are lifted.
    """

    def __init__(self, resolver, settings: Settings):
        self.resolver = resolver
        self.settings = settings
        self.event = SwipeEvent()

    def reset(self):
        self.event = SwipeEvent()

    def begin(self, fingers: int):
        """Start a new swipe."""
        self.event = SwipeEvent(fingers=fingers)

    def thresholds(self):
        """Current (x, y) thresholds in 1000 dpi units."""
        step = max(self.event.step, 1)
        threshold = self.settings.gesture_swipe_threshold
        return (threshold * GestureConfig.SWIPE_X_THRESHOLD * step,
                threshold * GestureConfig.SWIPE_Y_THRESHOLD * step)

    def update(self, dx: float, dy: float):
        """Add motion to the swipe and fire if a threshold was passed."""
        if self.settings.gesture_swipe_one_shot and self.event.executed:
            return

        threshold_x, threshold_y = self.thresholds()
        self.event.dx += dx
        self.event.dy += dy
        if abs(self.event.dx) > threshold_x or abs(self.event.dy) > threshold_y:
            self._trigger()
            self.event.dx = 0.0
            self.event.dy = 0.0
            self.event.executed = True
            self.event.step += 1

    def end(self):
        """Finish the swipe, firing on release if configured."""
        try:
            if not self.event.executed and self.settings.gesture_swipe_trigger_on_release:
                self._trigger()
        finally:
            self.reset()

    def _trigger(self) -> DispatchResult:
        direction = classify_direction(self.event.dx, self.event.dy)
        logger.debug(f"Swipe type {direction.key}")
        if direction is Direction.NONE:
            return DispatchResult.NO_COMMAND_BOUND
        return self.resolver.resolve_and_run(self.event.fingers, GestureFamily.GESTURE, direction)
