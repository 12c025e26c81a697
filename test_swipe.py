"""Tests for the touchpad swipe state machine."""

from gesture_listener.config.commands import GestureFamily
from gesture_listener.config.settings import Settings
from gesture_listener.gestures.direction import Direction
from gesture_listener.gestures.swipe import SwipeEvent, SwipeStateMachine

from conftest import RecordingResolver


def make_machine(**overrides):
    resolver = RecordingResolver(bind_all=True)
    return SwipeStateMachine(resolver, Settings(**overrides)), resolver


class TestThresholds:

    def test_default_thresholds(self):
        machine, _ = make_machine()
        assert machine.thresholds() == (500, 250)

    def test_thresholds_scale_with_step(self):
        machine, _ = make_machine(gesture_swipe_threshold=1.0)
        machine.event.step = 3
        assert machine.thresholds() == (3000, 1500)

    def test_horizontal_trigger(self):
        machine, resolver = make_machine()
        machine.begin(3)
        machine.update(300, 0)
        assert resolver.calls == []
        machine.update(300, 0)
        assert resolver.calls == [(3, GestureFamily.GESTURE, Direction.RIGHT)]
        assert machine.event.executed
        assert machine.event.step == 1
        assert (machine.event.dx, machine.event.dy) == (0, 0)

    def test_vertical_trigger_uses_smaller_threshold(self):
        machine, resolver = make_machine()
        machine.begin(4)
        machine.update(0, -300)
        assert resolver.calls == [(4, GestureFamily.GESTURE, Direction.UP)]

    def test_diagonal_trigger(self):
        machine, resolver = make_machine()
        machine.begin(3)
        machine.update(-400, 260)
        assert resolver.calls == [(3, GestureFamily.GESTURE, Direction.LEFT_DOWN)]


class TestRepeat:

    def test_one_shot_fires_once(self):
        machine, resolver = make_machine()
        machine.begin(3)
        machine.update(600, 0)
        machine.update(5000, 0)
        machine.update(-5000, 0)
        machine.end()
        assert resolver.calls == [(3, GestureFamily.GESTURE, Direction.RIGHT)]

    def test_continuous_refires_with_larger_threshold(self):
        machine, resolver = make_machine(gesture_swipe_one_shot=False)
        machine.begin(3)
        machine.update(600, 0)
        machine.update(600, 0)
        assert machine.event.step == 2
        assert machine.thresholds() == (1000, 500)

        machine.update(900, 0)
        assert len(resolver.calls) == 2
        machine.update(200, 0)
        assert resolver.calls == [(3, GestureFamily.GESTURE, Direction.RIGHT)] * 3
        assert machine.event.step == 3


class TestRelease:

    def test_trigger_on_release(self):
        machine, resolver = make_machine()
        machine.begin(3)
        machine.update(100, -10)
        machine.end()
        assert resolver.calls == [(3, GestureFamily.GESTURE, Direction.RIGHT)]

    def test_no_release_trigger_when_disabled(self):
        machine, resolver = make_machine(gesture_swipe_trigger_on_release=False)
        machine.begin(3)
        machine.update(100, -10)
        machine.end()
        assert resolver.calls == []

    def test_no_release_trigger_after_execution(self):
        machine, resolver = make_machine(gesture_swipe_one_shot=False)
        machine.begin(3)
        machine.update(0, 300)
        machine.update(0, 100)
        machine.end()
        assert resolver.calls == [(3, GestureFamily.GESTURE, Direction.DOWN)]

    def test_release_without_motion_fires_nothing(self):
        machine, resolver = make_machine()
        machine.begin(3)
        machine.end()
        assert resolver.calls == []


def test_end_resets_state():
    machine, resolver = make_machine()
    machine.begin(3)
    machine.update(600, 100)
    machine.end()
    assert machine.event == SwipeEvent()

    machine.begin(4)
    assert machine.event == SwipeEvent(fingers=4)
    machine.update(0, 200)
    machine.end()
    assert resolver.calls[-1] == (4, GestureFamily.GESTURE, Direction.DOWN)
