"""
Main gesture listener that coordinates device management and gesture dispatch.
"""

import logging
import select
from typing import Dict, List, Optional

from evdev import ecodes

from ..config.settings import Settings
from ..device.device_manager import DeviceManager
from ..device.event_source import EvdevEventSource
from .dispatcher import GestureDispatcher

logger = logging.getLogger(__name__)


class GestureListener:
    """
    Reads input devices and feeds their events to the gesture dispatcher.

    Everything runs on the calling thread: ``run`` blocks until a device
    is readable, drains and dispatches every pending frame, then blocks
    again.
    """

    def __init__(self, settings: Settings, resolver,
                 device_manager: Optional[DeviceManager] = None):
        self.settings = settings
        self.resolver = resolver
        self.device_manager = device_manager or DeviceManager()
        self.dispatcher: Optional[GestureDispatcher] = None

        self.running = False
        self._sources: Dict[int, EvdevEventSource] = {}
        self._batches: Dict[int, List] = {}
        self._dropping: Dict[int, bool] = {}

    def start(self) -> bool:
        """Open the devices and build the dispatcher."""
        devices = self.device_manager.find_devices(self.settings.interact_type)
        if not devices:
            print("❌ No touchpad or touchscreen found")
            return False

        self.dispatcher = GestureDispatcher(
            self.resolver,
            self.settings,
            family=self.device_manager.get_family(),
            device_size=self.device_manager.get_touch_size(),
        )

        for touch in devices:
            self._sources[touch.device.fd] = EvdevEventSource(touch.family, touch.resolution)
        switch = self.device_manager.switch_device
        if switch is not None and switch.fd not in self._sources:
            self._sources[switch.fd] = EvdevEventSource('', (0.0, 0.0))

        self._print_startup_info()
        self.running = True
        return True

    def stop(self):
        """Stop the listener and close the devices."""
        self.running = False
        self.device_manager.close()
        self._sources.clear()
        self._batches.clear()

    def _print_startup_info(self):
        for touch in self.device_manager.devices:
            print(f"✅ Found: {touch.device.name} ({touch.family})")
            print(f"📺 Size: {touch.width:.0f}x{touch.height:.0f}")
        print(f"🎯 Using '{self.dispatcher.family}' events")
        print(f"📏 Swipe threshold: {self.settings.gesture_swipe_threshold}")
        print(f"📏 Pinch threshold: {self.settings.pinch_threshold}")
        print(f"📏 Rotate threshold: {self.settings.rotate_threshold}°")
        print(f"📏 Long swipe: {self.settings.touch_longswipe_screen_percentage}% of the screen")
        print("🎯 Ready!")

    def _input_devices(self):
        devices = [touch.device for touch in self.device_manager.devices]
        switch = self.device_manager.switch_device
        if switch is not None and switch not in devices:
            devices.append(switch)
        return devices

    def run(self):
        """Main event processing loop."""
        devices = self._input_devices()
        try:
            while self.running and devices:
                readable, _, _ = select.select(devices, [], [])
                for device in readable:
                    self._drain(device)
        except OSError as e:
            logger.error(f"Error in event loop: {e}")
        finally:
            self.running = False

    def _drain(self, device):
        """Read every pending event of a device, dispatching complete frames."""
        fd = device.fd
        batch = self._batches.setdefault(fd, [])
        try:
            for event in device.read():
                if event.type != ecodes.EV_SYN:
                    batch.append(event)
                    continue

                if event.code == ecodes.SYN_DROPPED:
                    logger.warning(f"Events dropped on {device.name}")
                    batch.clear()
                    self._dropping[fd] = True
                elif event.code == ecodes.SYN_REPORT:
                    if self._dropping.pop(fd, False):
                        batch.clear()
                        self._resync(fd)
                        continue
                    batch.append(event)
                    self._process_event_batch(fd, batch)
                    batch.clear()
        except BlockingIOError:
            pass

    def _process_event_batch(self, fd: int, event_batch):
        """Process a batch of events."""
        events = self._sources[fd].process_batch(event_batch)
        self.dispatcher.handle_batch(events)

    def _resync(self, fd: int):
        """Recover from dropped events by ending every gesture in progress."""
        self.dispatcher.handle_batch(self._sources[fd].reset())
        self.dispatcher.touch.reset()
