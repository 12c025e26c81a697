"""
Routes input events to the gesture state machines.
"""

import logging
from typing import Callable, Dict, Tuple

from ..config.commands import GestureFamily
from ..config.settings import Settings
from ..gestures.pinch import PinchRotateStateMachine
from ..gestures.swipe import SwipeStateMachine
from ..gestures.touch_tracker import TouchSlotTracker
from .events import EventType, InputEvent, SwitchState, SwitchType

logger = logging.getLogger(__name__)

BOTH = 'BOTH'


class GestureDispatcher:
    """
    Top level event switch.

    Only events of the active family reach the state machines: swipe
    events need the GESTURE family, touch events the TOUCH family, and
    ``BOTH`` lets everything through. Pinch events are never filtered.
    The family comes from ``settings.interact_type`` when set, otherwise
    from the device capability, and a tablet mode switch changes it at
    runtime.
    """

    def __init__(self, resolver, settings: Settings, family: str = '',
                 device_size: Tuple[float, float] = (0.0, 0.0)):
        self.resolver = resolver
        self.settings = settings
        self.override = settings.interact_type == BOTH
        self.family = settings.interact_type or family

        self.swipe = SwipeStateMachine(resolver, settings)
        self.pinch = PinchRotateStateMachine(resolver, settings)
        self.touch = TouchSlotTracker(resolver, settings, device_size)

        self._routes: Dict[EventType, Tuple[str, Callable[[InputEvent], None]]] = {
            EventType.GESTURE_SWIPE_BEGIN: (GestureFamily.GESTURE.value, lambda e: self.swipe.begin(e.fingers)),
            EventType.GESTURE_SWIPE_UPDATE: (GestureFamily.GESTURE.value, lambda e: self.swipe.update(e.dx, e.dy)),
            EventType.GESTURE_SWIPE_END: (GestureFamily.GESTURE.value, lambda e: self.swipe.end()),
            EventType.GESTURE_PINCH_BEGIN: ('', lambda e: self.pinch.begin(e.fingers)),
            EventType.GESTURE_PINCH_UPDATE: ('', lambda e: self.pinch.update(e.scale, e.angle_delta)),
            EventType.GESTURE_PINCH_END: ('', lambda e: self.pinch.end()),
            EventType.TOUCH_DOWN: (GestureFamily.TOUCH.value, lambda e: self.touch.touch_down(e.slot, e.time)),
            EventType.TOUCH_UP: (GestureFamily.TOUCH.value, lambda e: self.touch.touch_up(e.slot, e.time)),
            EventType.TOUCH_MOTION: (GestureFamily.TOUCH.value, lambda e: self.touch.touch_motion(e.slot, e.x, e.y)),
            EventType.SWITCH_TOGGLE: ('', self._handle_switch),
        }

        logger.debug(f"Using '{self.family}' events")

    def accepts(self, family: str) -> bool:
        """Check an event family against the active one."""
        if not family or self.family == BOTH:
            return True
        return self.family == family

    def handle(self, event: InputEvent):
        """Route one event."""
        route = self._routes.get(event.type)
        if route is None:
            return
        family, handler = route
        if not self.accepts(family):
            return
        handler(event)

    def handle_batch(self, events):
        """Route a batch of events in order."""
        for event in events:
            self.handle(event)

    def _handle_switch(self, event: InputEvent):
        logger.debug(f"Switch: {event.switch}, state: {event.switch_state}")
        if event.switch != SwitchType.TABLET_MODE or event.switch_state is None:
            return

        if event.switch_state == SwitchState.LAPTOP:
            logger.debug("Laptop switch")
            family = GestureFamily.GESTURE.value
        else:
            logger.debug("Tablet switch")
            family = GestureFamily.TOUCH.value

        if not self.override and family != self.family:
            self.family = family
            # Gestures in flight lose their remaining events to the new gate
            self.swipe.reset()
            self.touch.reset()
        self.resolver.run_switch_command(event.switch_state)
