"""Tests for multitouch device discovery."""

import pytest

evdev = pytest.importorskip("evdev")
ecodes = evdev.ecodes

from gesture_listener.device import device_manager  # noqa: E402
from gesture_listener.device.device_manager import BOTH, GESTURE, TOUCH, DeviceManager  # noqa: E402


class FakeDevice:

    def __init__(self, path, name, abs_caps=None, props=(), switch=False):
        self.path = path
        self.name = name
        self.fd = hash(path) & 0xffff
        self.closed = False
        self._caps = {}
        if abs_caps:
            self._caps[ecodes.EV_ABS] = abs_caps
        if switch:
            self._caps[ecodes.EV_SW] = [ecodes.SW_TABLET_MODE]
        self._props = list(props)

    def capabilities(self):
        return self._caps

    def input_props(self):
        return self._props

    def close(self):
        self.closed = True


def multitouch_caps(width, height, resolution=0):
    return [
        (ecodes.ABS_MT_SLOT, evdev.AbsInfo(0, 0, 9, 0, 0, 0)),
        (ecodes.ABS_MT_POSITION_X, evdev.AbsInfo(0, 0, width - 1, 0, 0, resolution)),
        (ecodes.ABS_MT_POSITION_Y, evdev.AbsInfo(0, 0, height - 1, 0, 0, resolution)),
    ]


@pytest.fixture
def fake_devices(monkeypatch):
    devices = {
        '/dev/input/event0': FakeDevice('/dev/input/event0', 'Keyboard'),
        '/dev/input/event1': FakeDevice('/dev/input/event1', 'Touchpad', multitouch_caps(3000, 2000, 30)),
        '/dev/input/event2': FakeDevice('/dev/input/event2', 'Touchscreen', multitouch_caps(1920, 1080),
                                        props=[ecodes.INPUT_PROP_DIRECT]),
        '/dev/input/event3': FakeDevice('/dev/input/event3', 'Tablet mode switch', switch=True),
    }
    monkeypatch.setattr(device_manager.evdev, 'list_devices', lambda: list(devices))
    monkeypatch.setattr(device_manager.evdev, 'InputDevice', lambda path: devices[path])
    return devices


def test_prefers_touchpad(fake_devices):
    manager = DeviceManager()
    [touch] = manager.find_devices()
    assert touch.device.name == 'Touchpad'
    assert touch.family == GESTURE
    assert touch.size == (3000, 2000)
    assert touch.resolution == (30, 30)
    assert manager.get_family() == GESTURE
    assert manager.switch_device is fake_devices['/dev/input/event3']
    assert fake_devices['/dev/input/event0'].closed
    assert fake_devices['/dev/input/event2'].closed


def test_touchscreen(fake_devices):
    manager = DeviceManager()
    [touch] = manager.find_devices(TOUCH)
    assert touch.family == TOUCH
    assert manager.get_touch_size() == (1920, 1080)
    assert fake_devices['/dev/input/event1'].closed


def test_both(fake_devices):
    manager = DeviceManager()
    devices = manager.find_devices(BOTH)
    assert [d.family for d in devices] == [GESTURE, TOUCH]
    assert manager.get_family() == BOTH
    assert manager.get_touch_size() == (1920, 1080)

    manager.close()
    assert all(device.closed for device in fake_devices.values())
    assert manager.devices == []


def test_nothing_found(monkeypatch):
    monkeypatch.setattr(device_manager.evdev, 'list_devices', lambda: [])
    manager = DeviceManager()
    assert manager.find_devices() == []
    assert manager.get_family() == ''
    assert manager.get_touch_size() == (0.0, 0.0)
