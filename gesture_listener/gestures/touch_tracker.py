"""
Touch slot tracking for touchscreen swipes.

Each finger on a touchscreen is reported on its own slot. A touch swipe is
only accepted when all fingers went down and came up close together in
time, every finger moved, and every finger moved in the same direction.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..config.commands import DispatchResult, GestureFamily
from ..config.settings import GestureConfig, Settings
from .direction import Direction, classify_direction, swipe_length

logger = logging.getLogger(__name__)


@dataclass
class TouchGestureEvent:
    """State of one touch gesture, from first finger down to last finger up."""
    fingers: int = 0
    down_slots: List[Tuple[int, float]] = field(default_factory=list)
    up_slots: List[Tuple[int, float]] = field(default_factory=list)
    prev_xy: Dict[int, Tuple[float, float]] = field(default_factory=dict)
    delta_xy: Dict[int, Tuple[float, float]] = field(default_factory=dict)
    clean: bool = True

    @property
    def is_complete(self) -> bool:
        return len(self.up_slots) == len(self.down_slots)


class TouchSlotTracker:
    """Tracks per-slot touch state and resolves touch swipes on the last lift."""

    def __init__(self, resolver, settings: Settings,
                 device_size: Tuple[float, float] = (0.0, 0.0),
                 sync_threshold: float = GestureConfig.MULTITOUCH_SYNC_THRESHOLD):
        self.resolver = resolver
        self.settings = settings
        self.width, self.height = device_size
        self.sync_threshold = sync_threshold
        self.event = TouchGestureEvent()

    def reset(self):
        """Drop all accumulated touch state."""
        self.event = TouchGestureEvent()

    def _check_sync(self, slots: List[Tuple[int, float]]):
        """
        Update the finger count from a list of (slot, time) pairs.

        A finger that arrives or leaves more than the sync threshold after
        the previous one is not counted and makes the gesture unclean.
        """
        if len(slots) > 1:
            gap = slots[-1][1] - slots[-2][1]
            if gap > self.sync_threshold:
                logger.debug(f"Slot {slots[-1][0]} out of sync by {gap:.0f}ms")
                self.event.clean = False
                return
        self.event.fingers = len(slots)

    def touch_down(self, slot: int, time_ms: float):
        """Handle a finger touching down."""
        self.event.down_slots.append((slot, time_ms))
        self._check_sync(self.event.down_slots)

    def touch_motion(self, slot: int, x: float, y: float):
        """Accumulate motion for a slot from its absolute position."""
        if slot not in self.event.delta_xy:
            self.event.delta_xy[slot] = (0.0, 0.0)
            self.event.prev_xy[slot] = (x, y)
            return

        prev_x, prev_y = self.event.prev_xy[slot]
        dx, dy = self.event.delta_xy[slot]
        self.event.delta_xy[slot] = (dx + x - prev_x, dy + y - prev_y)
        self.event.prev_xy[slot] = (x, y)
        logger.debug(f"Slot {slot} dx: {self.event.delta_xy[slot][0]}, dy: {self.event.delta_xy[slot][1]}")

    def touch_up(self, slot: int, time_ms: float):
        """Handle a finger lifting; resolves the gesture once all fingers are up."""
        down = [s for s, _ in self.event.down_slots]
        up = [s for s, _ in self.event.up_slots]
        if down.count(slot) <= up.count(slot):
            logger.debug(f"Ignoring lift of slot {slot} that never touched down")
            return

        self.event.up_slots.append((slot, time_ms))
        self._check_sync(self.event.up_slots)

        if self.event.is_complete:
            try:
                self._resolve()
            finally:
                logger.debug(
                    f"fingers: {self.event.fingers}, down slots: {len(self.event.down_slots)}, "
                    f"up slots: {len(self.event.up_slots)}, motion slots: {len(self.event.delta_xy)}")
                self.reset()
                logger.debug("Touch gesture finished")

    def long_swipe_threshold(self, direction: Direction) -> float:
        """Minimum single-finger swipe length for a direction, in device units."""
        percentage = self.settings.touch_longswipe_screen_percentage
        if direction.is_diagonal:
            dimension = math.hypot(self.width, self.height)
        elif direction.is_vertical:
            dimension = self.height
        else:
            dimension = self.width
        return dimension * percentage / 100

    def _above_threshold(self, direction: Direction, length: float) -> bool:
        if self.settings.touch_longswipe_screen_percentage <= 0:
            return True
        required = self.long_swipe_threshold(direction)
        logger.debug(
            f"percentage {self.settings.touch_longswipe_screen_percentage}, "
            f"required length {required}, actual length {length}")
        return length > required

    def _resolve(self) -> DispatchResult:
        """Validate the finished gesture and dispatch it."""
        event = self.event
        swipes: List[Direction] = []

        for slot, (dx, dy) in event.delta_xy.items():
            direction = classify_direction(dx, dy)
            length = swipe_length(dx, dy)

            if event.fingers == 1 and not self._above_threshold(direction, length):
                logger.debug("Swipe not above threshold")
                break

            logger.debug(f"slot: {slot}, swipe-type: {direction.key}, length: {length}")
            if swipes and direction != swipes[-1]:
                break
            swipes.append(direction)

        if not event.clean:
            logger.info("Fingers not synchronized, discarding touch gesture")
        elif len(event.down_slots) != event.fingers:
            logger.info("Down slots do not match number of fingers")
        elif len(event.down_slots) != len(event.delta_xy):
            logger.info("Down slots do not match motion slots")
        elif len(swipes) != event.fingers:
            logger.info(f"Number of valid swipes {len(swipes)} do not match number of fingers {event.fingers}")
        elif swipes[-1] is Direction.NONE:
            logger.info("Touch gesture did not move")
        else:
            return self.resolver.resolve_and_run(event.fingers, GestureFamily.TOUCH, swipes[-1])

        return DispatchResult.NO_COMMAND_BOUND
