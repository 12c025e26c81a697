"""
Device management for touchpad and touchscreen discovery.
"""

import evdev
from evdev import InputDevice, ecodes
import logging
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

GESTURE = 'GESTURE'
TOUCH = 'TOUCH'
BOTH = 'BOTH'


@dataclass
class TouchDevice:
    """A multitouch device and the event family it produces."""
    device: InputDevice
    family: str
    width: float
    height: float
    resolution_x: float = 0.0
    resolution_y: float = 0.0

    @property
    def size(self):
        return self.width, self.height

    @property
    def resolution(self):
        return self.resolution_x, self.resolution_y


class DeviceManager:
    """Finds the multitouch devices and the tablet mode switch."""

    def __init__(self):
        self.devices: List[TouchDevice] = []
        self.switch_device: Optional[InputDevice] = None

    def find_devices(self, interact_type: str = '') -> List[TouchDevice]:
        """
        Find the devices to listen on.

        Touchpads produce GESTURE events and touchscreens TOUCH events.
        Without an interact type a touchpad is preferred; ``BOTH`` opens
        one of each.
        """
        touchpads = []
        touchscreens = []
        for path in evdev.list_devices():
            try:
                device = evdev.InputDevice(path)
            except OSError as e:
                logger.debug(f"Cannot open {path}: {e}")
                continue

            caps = device.capabilities()
            logger.debug(f"Testing capabilities for device {device.name}")
            used = False

            if ecodes.SW_TABLET_MODE in caps.get(ecodes.EV_SW, []) and self.switch_device is None:
                self.switch_device = device
                used = True

            touch = self._touch_device(device, caps)
            if touch:
                (touchscreens if touch.family == TOUCH else touchpads).append(touch)
                used = True

            if not used:
                device.close()

        if interact_type == TOUCH:
            wanted = touchscreens[:1]
        elif interact_type == GESTURE:
            wanted = touchpads[:1]
        elif interact_type == BOTH:
            wanted = touchpads[:1] + touchscreens[:1]
        else:
            wanted = (touchpads or touchscreens)[:1]

        for touch in touchpads + touchscreens:
            if touch not in wanted and touch.device is not self.switch_device:
                touch.device.close()

        self.devices = wanted
        if not self.devices:
            logger.error("Gesture/Touch device not found")
        for touch in self.devices:
            logger.info(f"Found {touch.family.lower()} device: {touch.device.name}")
            logger.info(f"Size: {touch.width:.0f}x{touch.height:.0f}")
        if self.switch_device:
            logger.info(f"Found tablet mode switch: {self.switch_device.name}")
        return self.devices

    @staticmethod
    def _touch_device(device: InputDevice, caps) -> Optional[TouchDevice]:
        """Describe a device if it supports the multitouch slot protocol."""
        abs_info = {code: info for code, info in caps.get(ecodes.EV_ABS, [])}
        if ecodes.ABS_MT_SLOT not in abs_info:
            return None

        family = TOUCH if ecodes.INPUT_PROP_DIRECT in device.input_props() else GESTURE
        x_info = abs_info.get(ecodes.ABS_MT_POSITION_X)
        y_info = abs_info.get(ecodes.ABS_MT_POSITION_Y)
        if x_info is None or y_info is None:
            return None

        return TouchDevice(
            device=device,
            family=family,
            width=x_info.max - x_info.min + 1,
            height=y_info.max - y_info.min + 1,
            resolution_x=x_info.resolution,
            resolution_y=y_info.resolution,
        )

    def get_family(self) -> str:
        """The event family of the opened devices."""
        families = {touch.family for touch in self.devices}
        if len(families) > 1:
            return BOTH
        return families.pop() if families else ''

    def get_touch_size(self):
        """Size of the touchscreen, or of the first device."""
        for touch in self.devices:
            if touch.family == TOUCH:
                return touch.size
        return self.devices[0].size if self.devices else (0.0, 0.0)

    def close(self):
        for touch in self.devices:
            touch.device.close()
        if self.switch_device and all(t.device is not self.switch_device for t in self.devices):
            self.switch_device.close()
        self.devices = []
        self.switch_device = None
