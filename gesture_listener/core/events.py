"""
Typed hardware events consumed by the gesture dispatcher.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class EventType(Enum):
    """Input events the engine understands."""
    GESTURE_SWIPE_BEGIN = 'gesture_swipe_begin'
    GESTURE_SWIPE_UPDATE = 'gesture_swipe_update'
    GESTURE_SWIPE_END = 'gesture_swipe_end'
    GESTURE_PINCH_BEGIN = 'gesture_pinch_begin'
    GESTURE_PINCH_UPDATE = 'gesture_pinch_update'
    GESTURE_PINCH_END = 'gesture_pinch_end'
    TOUCH_DOWN = 'touch_down'
    TOUCH_UP = 'touch_up'
    TOUCH_MOTION = 'touch_motion'
    SWITCH_TOGGLE = 'switch_toggle'


class SwitchType(IntEnum):
    LID = 1
    TABLET_MODE = 2


class SwitchState(IntEnum):
    """Tablet mode switch positions."""
    LAPTOP = 0
    TABLET = 1


@dataclass
class InputEvent:
    """
    One hardware event.

    Only the fields relevant to ``type`` are set: finger counts and deltas
    for swipes, scale and angle delta for pinches, slot, time (ms) and
    absolute position for touches, switch and state for toggles.
    """
    type: EventType
    fingers: int = 0
    dx: float = 0.0
    dy: float = 0.0
    scale: float = 1.0
    angle_delta: float = 0.0
    slot: int = 0
    time: float = 0.0
    x: float = 0.0
    y: float = 0.0
    switch: Optional[SwitchType] = None
    switch_state: Optional[SwitchState] = None

    @classmethod
    def swipe_begin(cls, fingers: int) -> 'InputEvent':
        return cls(EventType.GESTURE_SWIPE_BEGIN, fingers=fingers)

    @classmethod
    def swipe_update(cls, fingers: int, dx: float, dy: float) -> 'InputEvent':
        return cls(EventType.GESTURE_SWIPE_UPDATE, fingers=fingers, dx=dx, dy=dy)

    @classmethod
    def swipe_end(cls, fingers: int) -> 'InputEvent':
        return cls(EventType.GESTURE_SWIPE_END, fingers=fingers)

    @classmethod
    def pinch_begin(cls, fingers: int) -> 'InputEvent':
        return cls(EventType.GESTURE_PINCH_BEGIN, fingers=fingers)

    @classmethod
    def pinch_update(cls, fingers: int, scale: float, angle_delta: float) -> 'InputEvent':
        return cls(EventType.GESTURE_PINCH_UPDATE, fingers=fingers,
                   scale=scale, angle_delta=angle_delta)

    @classmethod
    def pinch_end(cls, fingers: int) -> 'InputEvent':
        return cls(EventType.GESTURE_PINCH_END, fingers=fingers)

    @classmethod
    def touch_down(cls, slot: int, time: float, x: float = 0.0, y: float = 0.0) -> 'InputEvent':
        return cls(EventType.TOUCH_DOWN, slot=slot, time=time, x=x, y=y)

    @classmethod
    def touch_up(cls, slot: int, time: float) -> 'InputEvent':
        return cls(EventType.TOUCH_UP, slot=slot, time=time)

    @classmethod
    def touch_motion(cls, slot: int, time: float, x: float, y: float) -> 'InputEvent':
        return cls(EventType.TOUCH_MOTION, slot=slot, time=time, x=x, y=y)

    @classmethod
    def switch_toggle(cls, switch: SwitchType, state: SwitchState) -> 'InputEvent':
        return cls(EventType.SWITCH_TOGGLE, switch=switch, switch_state=state)
