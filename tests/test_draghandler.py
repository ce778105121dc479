import pytest

from chartcore.axis import Rect, ValueAxis
from chartcore.draghandler import AxisDragHandler, Mode, MouseButton, TouchPhase
from chartcore.logaxis import LogValueAxis


def _no_text(_text):
    return (0.0, 0.0)


@pytest.fixture
def axis():
    a = ValueAxis(measure_text=_no_text)
    a.set_size(400, 300)
    return a


@pytest.fixture
def handler(axis):
    return AxisDragHandler(axis)


def _inside(axis, fx, fy):
    area = axis.plot_area
    return (area.x + area.width * fx, area.y + area.height * fy)


def test_press_inside_sets_state(axis, handler):
    events = []
    handler.pressed.connect(lambda p, b: events.append((p, b)))
    point = _inside(axis, 0.5, 0.5)
    handler.mouse_press(point, MouseButton.LEFT)
    assert handler.is_pressed
    assert handler.press_position == point
    assert handler.move_position == point
    assert handler.button == MouseButton.LEFT
    assert events == [(point, MouseButton.LEFT)]


def test_press_outside_is_ignored(axis, handler):
    handler.mouse_press((-50.0, -50.0), MouseButton.LEFT)
    assert not handler.is_pressed


def test_disabled_handler_ignores_press(axis, handler):
    handler.enable = False
    handler.mouse_press(_inside(axis, 0.5, 0.5), MouseButton.LEFT)
    assert not handler.is_pressed


def test_left_drag_pans_domain(axis, handler):
    moves = []
    handler.moved.connect(lambda p, b: moves.append(p))
    start = _inside(axis, 0.3, 0.5)
    end = (start[0] + 50, start[1])
    handler.mouse_press(start, MouseButton.LEFT)
    handler.mouse_move(end)
    d = axis.domain
    assert d.is_moved
    assert d.min_x < 1.0
    assert d.max_x - d.min_x == pytest.approx(9.0)
    assert (d.min_y, d.max_y) == (1.0, 10.0)
    assert handler.move_position == end
    assert moves == [end]


def test_small_move_does_not_pan(axis, handler):
    start = _inside(axis, 0.3, 0.5)
    handler.mouse_press(start, MouseButton.LEFT)
    handler.mouse_move((start[0] + 2, start[1] + 1))
    assert not axis.domain.is_moved
    assert handler.move_position == start


def test_release_at_press_point_clicks(axis, handler):
    clicks = []
    releases = []
    handler.clicked.connect(lambda p, b: clicks.append(p))
    handler.released.connect(lambda: releases.append(True))
    point = _inside(axis, 0.5, 0.5)
    handler.mouse_press(point, MouseButton.LEFT)
    handler.mouse_release(point, MouseButton.LEFT)
    assert clicks == [point]
    assert releases == [True]
    assert not handler.is_pressed
    assert handler.button == MouseButton.NO_BUTTON


def test_right_drag_zooms_into_rectangle(axis, handler):
    start = _inside(axis, 0.25, 0.25)
    end = _inside(axis, 0.75, 0.75)
    handler.mouse_press(start, MouseButton.RIGHT)
    handler.mouse_move(end)
    handler.mouse_release(end, MouseButton.RIGHT)
    d = axis.domain
    assert d.is_zoomed
    assert 1.0 < d.min_x < d.max_x < 10.0
    assert 1.0 < d.min_y < d.max_y < 10.0
    assert d.min_x == pytest.approx(3.25)


def test_zoom_with_reversed_rectangle_matches_forward(axis):
    first = ValueAxis(measure_text=_no_text)
    first.set_size(400, 300)
    AxisDragHandler(first).zoom(Rect(100, 50, 100, 100))
    AxisDragHandler(axis).zoom(Rect(200, 150, -100, -100))
    assert axis.domain.min_x == pytest.approx(first.domain.min_x)
    assert axis.domain.max_y == pytest.approx(first.domain.max_y)


def test_tiny_zoom_is_ignored(axis, handler):
    handler.zoom(Rect(10, 10, 0.5, 0.5))
    assert not axis.domain.is_zoomed
    assert (axis.domain.min_x, axis.domain.max_x) == (1.0, 10.0)


def test_wheel_zooms_in_and_out(axis, handler):
    handler.wheel(120)
    assert axis.domain.max_x - axis.domain.min_x < 9.0
    narrowed = axis.domain.max_x - axis.domain.min_x
    handler.wheel(-120)
    assert axis.domain.max_x - axis.domain.min_x > narrowed


def test_wheel_ignored_on_log_axis():
    log_axis = LogValueAxis(measure_text=_no_text)
    log_axis.set_size(400, 300)
    h = AxisDragHandler(log_axis)
    h.wheel(120)
    assert (log_axis.domain.min_x, log_axis.domain.max_x) == (1.0, 10.0)
    assert not log_axis.domain.is_zoomed


def test_inaction_mode_disables_target(axis, handler):
    changes = []
    handler.mode_changed.connect(lambda: changes.append(True))
    handler.mode = Mode.INACTION
    assert axis.enabled is False
    handler.mode = Mode.MARKER
    assert axis.enabled is True
    assert len(changes) == 2


def test_marker_mode_does_not_pan(axis, handler):
    handler.mode = Mode.MARKER
    start = _inside(axis, 0.3, 0.5)
    handler.mouse_press(start, MouseButton.LEFT)
    handler.mouse_move((start[0] + 60, start[1]))
    assert not axis.domain.is_moved


def test_set_values_resets_transform(axis, handler):
    handler.wheel(120)
    handler.set_values(0, 100, -5, 5)
    d = axis.domain
    assert not d.is_zoomed
    assert (d.min_x, d.max_x, d.min_y, d.max_y) == (0, 100, -5, 5)


def test_touch_single_finger_press_and_release(axis, handler):
    point = _inside(axis, 0.5, 0.5)
    handler.touch(TouchPhase.BEGIN, [point])
    assert handler.is_pressed
    handler.touch(TouchPhase.END, [point])
    assert not handler.is_pressed


def test_touch_horizontal_pinch_scales_x(axis, handler):
    handler.touch(TouchPhase.UPDATE, [(100.0, 100.0), (200.0, 100.0)])
    handler.touch(TouchPhase.UPDATE, [(50.0, 100.0), (250.0, 100.0)])
    d = axis.domain
    assert d.scale_x == pytest.approx(2.0)
    assert d.scale_y == 1.0
    assert d.min_x > 1.0
    assert (d.min_y, d.max_y) == (1.0, 10.0)


def test_handler_without_target_does_nothing():
    h = AxisDragHandler()
    h.wheel(120)
    h.mouse_press((10.0, 10.0), MouseButton.LEFT)
    assert h.target is None
    assert not h.is_pressed