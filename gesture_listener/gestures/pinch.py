"""
Pinch and rotate state machine.

Scale and angle are tracked together for the whole pinch gesture. Each
axis first tries a one-shot command; when nothing is bound for the
one-shot action the gesture falls through into continuous mode, where
commands fire every time the scale or angle passes the next step of the
threshold ladder.
"""

import logging
from dataclasses import dataclass

from ..config.commands import DispatchResult, GestureFamily, PinchAction
from ..config.settings import GestureConfig, Settings

logger = logging.getLogger(__name__)


@dataclass
class PinchRotateEvent:
    """State of one pinch gesture."""
    fingers: int = 0
    scale: float = GestureConfig.DEFAULT_SCALE
    angle: float = 0.0
    step: int = 0
    executed: bool = False
    continuous: bool = False
    rotating: bool = False


def inc_step(step: int) -> int:
    """Advance a step counter, skipping zero."""
    step += 1
    return 1 if step == 0 else step


def dec_step(step: int) -> int:
    """Move a step counter back, skipping zero."""
    step -= 1
    return -1 if step == 0 else step


class PinchRotateStateMachine:
    """Classifies pinch updates into pinch in/out and rotate left/right."""

    def __init__(self, resolver, settings: Settings):
        self.resolver = resolver
        self.settings = settings
        self.event = PinchRotateEvent()

    def reset(self):
        self.event = PinchRotateEvent()

    def begin(self, fingers: int):
        """Start a new pinch gesture."""
        self.event = PinchRotateEvent(fingers=fingers)

    def end(self):
        """Pinch end needs no handling; the next begin resets the state."""

    def update(self, new_scale: float, angle_delta: float):
        """
        Handle a pinch update.

        Args:
            new_scale: Scale relative to the finger spread at pinch begin
            angle_delta: Rotation since the previous update, in degrees
        """
        event = self.event
        if event.executed:
            return

        new_angle = event.angle + angle_delta
        if not event.continuous:
            self._one_shot_pinch(new_scale)
            # A pinch that fired in this update wins over rotation
            if not (event.executed or event.continuous):
                self._one_shot_rotate(new_angle)
        elif event.rotating:
            self._continuous_rotate(new_angle)
        else:
            self._continuous_pinch(new_scale)

        event.scale = new_scale
        event.angle = new_angle

    def _dispatch(self, family: GestureFamily, action: PinchAction) -> DispatchResult:
        logger.debug(f"fingers: {self.event.fingers}, type: {family.value}, gesture: {action.name}")
        return self.resolver.resolve_and_run(self.event.fingers, family, action)

    def _ladder_step(self) -> int:
        return self.event.step if self.event.step != 0 else 1

    def _one_shot_pinch(self, new_scale: float):
        threshold = self.settings.pinch_threshold
        if new_scale > self.event.scale:
            logger.debug("Scale up")
            if new_scale > 1 + threshold:
                self._one_shot(PinchAction.PINCH_OUT, up=True, value=new_scale)
        elif new_scale < self.event.scale:
            logger.debug(f"Scale down {new_scale} < 1 - {threshold}")
            if new_scale < 1 - threshold:
                self._one_shot(PinchAction.PINCH_IN, up=False, value=new_scale)

    def _one_shot_rotate(self, new_angle: float):
        threshold = self.settings.rotate_threshold
        logger.debug(f"angle: {self.event.angle} new_angle: {new_angle}")
        if new_angle > self.event.angle:
            if new_angle > threshold:
                self._one_shot(PinchAction.ROTATE_RIGHT, up=True, value=new_angle)
        elif new_angle < self.event.angle:
            if new_angle < -threshold:
                self._one_shot(PinchAction.ROTATE_LEFT, up=False, value=new_angle)

    def _one_shot(self, action: PinchAction, up: bool, value: float):
        """Fire a one-shot action, escalating to continuous mode if it is unbound."""
        if self._dispatch(GestureFamily.ONESHOT, action) == DispatchResult.DISPATCHED:
            self.event.executed = True
            return

        self.event.step = inc_step(self.event.step) if up else dec_step(self.event.step)
        rotating = action in (PinchAction.ROTATE_LEFT, PinchAction.ROTATE_RIGHT)
        if rotating:
            self._continuous_rotate(value)
        else:
            self._continuous_pinch(value)
        self.event.continuous = True
        self.event.rotating = rotating

    def _continuous_pinch(self, new_scale: float):
        trigger = 1 + self.settings.pinch_threshold * self._ladder_step()
        logger.debug(f"scale: {new_scale} gesture_scale: {self.event.scale} trigger: {trigger}")
        if new_scale > self.event.scale:
            if new_scale >= trigger:
                self._continuous(PinchAction.PINCH_OUT, up=True)
        elif new_scale < self.event.scale:
            if new_scale <= trigger:
                self._continuous(PinchAction.PINCH_IN, up=False)

    def _continuous_rotate(self, new_angle: float):
        trigger = self.settings.rotate_threshold * self._ladder_step()
        logger.debug(f"angle: {new_angle} gesture_angle: {self.event.angle} trigger: {trigger}")
        if new_angle > self.event.angle:
            if new_angle >= trigger:
                self._continuous(PinchAction.ROTATE_RIGHT, up=True)
        elif new_angle < self.event.angle:
            if new_angle <= trigger:
                self._continuous(PinchAction.ROTATE_LEFT, up=False)

    def _continuous(self, action: PinchAction, up: bool):
        """Fire one continuous step; an unbound command ends the gesture."""
        if self._dispatch(GestureFamily.CONTINUOUS, action) == DispatchResult.DISPATCHED:
            self.event.step = inc_step(self.event.step) if up else dec_step(self.event.step)
        else:
            self.event.executed = True
