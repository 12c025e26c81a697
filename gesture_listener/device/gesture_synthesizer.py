"""
Touchpad gesture synthesis.

Touchpads report raw contacts only. This module turns the contacts of
each frame into swipe and pinch begin/update/end events: three or more
fingers swipe, two fingers pinch and rotate.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..core.events import InputEvent
from ..utils.gesture_utils import GeometryUtils, Point

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
SWIPE_DPI = 1000


class GestureSynthesizer:
    """Builds swipe and pinch events from touchpad contacts."""

    SWIPE_MIN_FINGERS = 3
    PINCH_FINGERS = 2

    def __init__(self, resolution: Tuple[float, float] = (0.0, 0.0)):
        res_x, res_y = resolution
        # Device units per mm -> 1000 dpi units
        self.x_factor = SWIPE_DPI / MM_PER_INCH / res_x if res_x > 0 else 1.0
        self.y_factor = SWIPE_DPI / MM_PER_INCH / res_y if res_y > 0 else 1.0

        self.mode: Optional[str] = None
        self.fingers = 0
        self.last_centroid = Point(0, 0)
        self.initial_spread = 0.0
        self.last_angle = 0.0
        self.last_scale = 1.0

    def update(self, contacts: Dict[int, Point]) -> List[InputEvent]:
        """
        Process the contacts of one frame.

        Args:
            contacts: Active contacts keyed by slot

        Returns:
            The gesture events for this frame
        """
        count = len(contacts)
        if count != self.fingers:
            events = self.reset()
            self.fingers = count
            events.extend(self._begin(contacts))
            return events

        if self.mode == 'swipe':
            return self._update_swipe(contacts)
        if self.mode == 'pinch':
            return self._update_pinch(contacts)
        return []

    def reset(self) -> List[InputEvent]:
        """End the running gesture, if any."""
        events = []
        if self.mode == 'swipe':
            events.append(InputEvent.swipe_end(self.fingers))
        elif self.mode == 'pinch':
            events.append(InputEvent.pinch_end(self.fingers))
        if self.mode:
            logger.debug(f"{self.mode} ended with {self.fingers} finger(s)")
        self.mode = None
        self.fingers = 0
        return events

    def _begin(self, contacts: Dict[int, Point]) -> List[InputEvent]:
        points = self._ordered(contacts)
        if len(points) >= self.SWIPE_MIN_FINGERS:
            self.mode = 'swipe'
            self.last_centroid = GeometryUtils.calculate_centroid(points)
            logger.debug(f"swipe began with {len(points)} finger(s)")
            return [InputEvent.swipe_begin(len(points))]

        if len(points) == self.PINCH_FINGERS:
            self.mode = 'pinch'
            self.initial_spread = GeometryUtils.calculate_spread(points)
            self.last_angle = GeometryUtils.calculate_angle(points[0], points[1])
            self.last_scale = 1.0
            logger.debug("pinch began")
            return [InputEvent.pinch_begin(len(points))]

        return []

    def _update_swipe(self, contacts: Dict[int, Point]) -> List[InputEvent]:
        centroid = GeometryUtils.calculate_centroid(self._ordered(contacts))
        dx = (centroid.x - self.last_centroid.x) * self.x_factor
        dy = (centroid.y - self.last_centroid.y) * self.y_factor
        self.last_centroid = centroid
        if dx == 0 and dy == 0:
            return []
        return [InputEvent.swipe_update(self.fingers, dx, dy)]

    def _update_pinch(self, contacts: Dict[int, Point]) -> List[InputEvent]:
        points = self._ordered(contacts)
        spread = GeometryUtils.calculate_spread(points)
        scale = spread / self.initial_spread if self.initial_spread > 0 else 1.0
        angle = GeometryUtils.calculate_angle(points[0], points[1])
        angle_delta = GeometryUtils.wrap_angle(angle - self.last_angle)
        self.last_angle = angle

        if scale == self.last_scale and angle_delta == 0:
            return []
        self.last_scale = scale
        return [InputEvent.pinch_update(self.fingers, scale, angle_delta)]

    @staticmethod
    def _ordered(contacts: Dict[int, Point]) -> List[Point]:
        return [contacts[slot] for slot in sorted(contacts)]
