"""Tests for touchscreen slot tracking."""

from gesture_listener.config.commands import GestureFamily
from gesture_listener.config.settings import Settings
from gesture_listener.gestures.direction import Direction
from gesture_listener.gestures.touch_tracker import TouchGestureEvent, TouchSlotTracker

from conftest import RecordingResolver

SIZE = (1000.0, 500.0)


def make_tracker(percentage=70.0, resolver=None):
    settings = Settings(touch_longswipe_screen_percentage=percentage)
    resolver = resolver or RecordingResolver(bind_all=True)
    return TouchSlotTracker(resolver, settings, SIZE), resolver


def swipe(tracker, slot, start, end, steps=4):
    """Feed motion for one slot from start to end."""
    (x0, y0), (x1, y1) = start, end
    for i in range(steps + 1):
        tracker.touch_motion(slot, x0 + (x1 - x0) * i / steps, y0 + (y1 - y0) * i / steps)


def assert_empty(tracker):
    event = tracker.event
    assert event == TouchGestureEvent()
    assert not event.down_slots and not event.up_slots
    assert not event.delta_xy and not event.prev_xy


def test_two_finger_synchronized_swipe():
    tracker, resolver = make_tracker()
    tracker.touch_down(0, 1000)
    tracker.touch_down(1, 1050)
    assert tracker.event.fingers == 2
    assert tracker.event.clean

    swipe(tracker, 0, (100, 100), (300, 110))
    swipe(tracker, 1, (100, 200), (300, 205))
    tracker.touch_up(0, 1400)
    assert resolver.calls == []
    tracker.touch_up(1, 1420)

    assert resolver.calls == [(2, GestureFamily.TOUCH, Direction.RIGHT)]
    assert_empty(tracker)


def test_late_finger_makes_gesture_unclean():
    tracker, resolver = make_tracker()
    tracker.touch_down(0, 1000)
    tracker.touch_down(1, 1150)
    assert not tracker.event.clean
    assert tracker.event.fingers == 1

    swipe(tracker, 0, (100, 100), (300, 100))
    swipe(tracker, 1, (100, 200), (300, 200))
    tracker.touch_up(0, 1400)
    tracker.touch_up(1, 1410)

    assert resolver.calls == []
    assert_empty(tracker)


def test_late_lift_makes_gesture_unclean():
    tracker, resolver = make_tracker()
    tracker.touch_down(0, 1000)
    tracker.touch_down(1, 1010)
    swipe(tracker, 0, (100, 100), (100, 300))
    swipe(tracker, 1, (200, 100), (200, 300))
    tracker.touch_up(0, 1400)
    tracker.touch_up(1, 1600)

    assert resolver.calls == []
    assert_empty(tracker)


def test_sync_threshold_is_inclusive():
    tracker, resolver = make_tracker()
    tracker.touch_down(0, 1000)
    tracker.touch_down(1, 1100)
    swipe(tracker, 0, (100, 300), (100, 100))
    swipe(tracker, 1, (200, 300), (200, 100))
    tracker.touch_up(0, 1500)
    tracker.touch_up(1, 1600)

    assert resolver.calls == [(2, GestureFamily.TOUCH, Direction.UP)]


def test_disagreeing_directions_are_discarded():
    tracker, resolver = make_tracker()
    tracker.touch_down(0, 1000)
    tracker.touch_down(1, 1010)
    swipe(tracker, 0, (100, 100), (300, 100))
    swipe(tracker, 1, (300, 200), (100, 200))
    tracker.touch_up(0, 1400)
    tracker.touch_up(1, 1410)

    assert resolver.calls == []
    assert_empty(tracker)


def test_finger_without_motion_is_discarded():
    tracker, resolver = make_tracker()
    tracker.touch_down(0, 1000)
    tracker.touch_down(1, 1010)
    swipe(tracker, 0, (100, 100), (300, 100))
    tracker.touch_up(0, 1400)
    tracker.touch_up(1, 1410)

    assert resolver.calls == []
    assert_empty(tracker)


def test_single_finger_short_swipe_is_discarded():
    tracker, resolver = make_tracker()
    tracker.touch_down(0, 1000)
    swipe(tracker, 0, (100, 100), (200, 100))
    tracker.touch_up(0, 1200)

    assert resolver.calls == []
    assert_empty(tracker)


def test_single_finger_long_swipes():
    tracker, resolver = make_tracker()

    # 70% of the width
    tracker.touch_down(0, 1000)
    swipe(tracker, 0, (100, 100), (900, 100))
    tracker.touch_up(0, 1200)

    # 70% of the height
    tracker.touch_down(0, 2000)
    swipe(tracker, 0, (500, 50), (500, 450))
    tracker.touch_up(0, 2200)

    # 70% of the diagonal
    tracker.touch_down(0, 3000)
    swipe(tracker, 0, (0, 0), (700, 450))
    tracker.touch_up(0, 3200)

    assert resolver.calls == [
        (1, GestureFamily.TOUCH, Direction.RIGHT),
        (1, GestureFamily.TOUCH, Direction.DOWN),
        (1, GestureFamily.TOUCH, Direction.RIGHT_DOWN),
    ]


def test_long_swipe_thresholds():
    tracker, _ = make_tracker(percentage=50)
    assert tracker.long_swipe_threshold(Direction.LEFT) == 500
    assert tracker.long_swipe_threshold(Direction.UP) == 250
    assert round(tracker.long_swipe_threshold(Direction.LEFT_UP), 1) == 559.0


def test_zero_percentage_disables_long_swipe_gate():
    tracker, resolver = make_tracker(percentage=0)
    tracker.touch_down(0, 1000)
    swipe(tracker, 0, (100, 100), (110, 100))
    tracker.touch_up(0, 1100)

    assert resolver.calls == [(1, GestureFamily.TOUCH, Direction.RIGHT)]


def test_multi_finger_swipes_are_not_length_gated():
    tracker, resolver = make_tracker()
    tracker.touch_down(0, 1000)
    tracker.touch_down(1, 1020)
    tracker.touch_down(2, 1040)
    for slot in range(3):
        swipe(tracker, slot, (100 * slot, 300), (100 * slot, 280))
    for slot in range(3):
        tracker.touch_up(slot, 1300 + slot * 10)

    assert resolver.calls == [(3, GestureFamily.TOUCH, Direction.UP)]


def test_tap_is_discarded():
    tracker, resolver = make_tracker(percentage=0)
    tracker.touch_down(0, 1000)
    tracker.touch_motion(0, 100, 100)
    tracker.touch_up(0, 1050)

    assert resolver.calls == []
    assert_empty(tracker)


def test_motion_accumulates_deltas():
    tracker, _ = make_tracker()
    tracker.touch_down(3, 1000)
    tracker.touch_motion(3, 10, 20)
    assert tracker.event.delta_xy[3] == (0.0, 0.0)
    assert tracker.event.prev_xy[3] == (10, 20)

    tracker.touch_motion(3, 15, 18)
    tracker.touch_motion(3, 30, 10)
    assert tracker.event.delta_xy[3] == (20, -10)
    assert tracker.event.prev_xy[3] == (30, 10)


def test_lift_of_unknown_slot_is_ignored():
    tracker, resolver = make_tracker(percentage=0)
    tracker.touch_up(7, 900)
    assert tracker.event.up_slots == []

    tracker.touch_down(0, 1000)
    swipe(tracker, 0, (100, 100), (100, 50))
    tracker.touch_up(0, 1100)
    assert resolver.calls == [(1, GestureFamily.TOUCH, Direction.UP)]


def test_failed_gesture_does_not_leak_into_next():
    tracker, resolver = make_tracker(percentage=0)
    tracker.touch_down(0, 1000)
    tracker.touch_down(1, 1500)
    swipe(tracker, 0, (100, 100), (300, 100))
    swipe(tracker, 1, (100, 200), (300, 200))
    tracker.touch_up(0, 1600)
    tracker.touch_up(1, 1610)
    assert resolver.calls == []

    tracker.touch_down(4, 2000)
    swipe(tracker, 4, (300, 100), (100, 100))
    tracker.touch_up(4, 2100)
    assert resolver.calls == [(1, GestureFamily.TOUCH, Direction.LEFT)]
    assert_empty(tracker)
