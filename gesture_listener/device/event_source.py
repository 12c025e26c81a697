"""
Decoding of raw evdev frames into engine input events.
"""

import logging
from typing import Dict, List, Tuple

from evdev import ecodes

from ..core.events import InputEvent, SwitchState, SwitchType
from ..utils.gesture_utils import Point
from .device_manager import GESTURE, TOUCH
from .gesture_synthesizer import GestureSynthesizer

logger = logging.getLogger(__name__)


class EvdevEventSource:
    """
    Turns multitouch protocol B frames into InputEvents.

    Touchscreen contacts become touch down/motion/up events; touchpad
    contacts are handed to a GestureSynthesizer. Tablet mode switch
    events are passed through for any device.
    """

    def __init__(self, family: str, resolution: Tuple[float, float] = (0.0, 0.0)):
        self.family = family
        self.synthesizer = GestureSynthesizer(resolution) if family == GESTURE else None

        self.current_slot = 0
        self.slot_data: Dict[int, Dict[str, float]] = {}
        # The kernel only reports axis changes, so positions outlive contacts
        self.last_position: Dict[int, Dict[str, float]] = {}
        self._placed: List[int] = []
        self._lifted: List[int] = []
        self._moved: List[int] = []

    def process_batch(self, event_batch) -> List[InputEvent]:
        """Process the events of one SYN_REPORT frame."""
        events = []
        for ev in event_batch:
            if ev.type == ecodes.EV_ABS:
                self._handle_abs_event(ev)
            elif ev.type == ecodes.EV_SW and ev.code == ecodes.SW_TABLET_MODE:
                state = SwitchState.TABLET if ev.value else SwitchState.LAPTOP
                events.append(InputEvent.switch_toggle(SwitchType.TABLET_MODE, state))

        if event_batch:
            time_ms = event_batch[-1].timestamp() * 1000
            events.extend(self._frame_events(time_ms))
        return events

    def _handle_abs_event(self, ev):
        """Handle absolute coordinate events."""
        slot = self.current_slot
        if ev.code == ecodes.ABS_MT_SLOT:
            self.current_slot = ev.value
        elif ev.code == ecodes.ABS_MT_TRACKING_ID:
            if ev.value == -1:
                if slot in self.slot_data:
                    self._lifted.append(slot)
            else:
                self.slot_data[slot] = dict(self.last_position.get(slot, {'x': 0.0, 'y': 0.0}))
                self._placed.append(slot)
        elif ev.code in (ecodes.ABS_MT_POSITION_X, ecodes.ABS_MT_POSITION_Y):
            axis = 'x' if ev.code == ecodes.ABS_MT_POSITION_X else 'y'
            self.last_position.setdefault(slot, {'x': 0.0, 'y': 0.0})[axis] = float(ev.value)
            if slot in self.slot_data:
                self.slot_data[slot][axis] = float(ev.value)
                if slot not in self._moved:
                    self._moved.append(slot)

    def _frame_events(self, time_ms: float) -> List[InputEvent]:
        placed, moved, lifted = self._placed, self._moved, self._lifted
        self._placed, self._moved, self._lifted = [], [], []

        events = []
        if self.family == TOUCH:
            for slot in placed:
                data = self.slot_data[slot]
                events.append(InputEvent.touch_down(slot, time_ms, data['x'], data['y']))
            # The position at touch down seeds the motion tracking
            for slot in placed + [s for s in moved if s not in placed]:
                if slot in lifted:
                    continue
                data = self.slot_data[slot]
                events.append(InputEvent.touch_motion(slot, time_ms, data['x'], data['y']))
            for slot in lifted:
                events.append(InputEvent.touch_up(slot, time_ms))

        for slot in lifted:
            self.slot_data.pop(slot, None)

        if self.synthesizer is not None:
            contacts = {slot: Point(data['x'], data['y']) for slot, data in self.slot_data.items()}
            events.extend(self.synthesizer.update(contacts))
        return events

    def reset(self) -> List[InputEvent]:
        """Forget all contacts, e.g. after dropped events."""
        logger.debug("Resetting contact state")
        self.slot_data.clear()
        self._placed, self._moved, self._lifted = [], [], []
        if self.synthesizer is not None:
            return self.synthesizer.reset()
        return []
