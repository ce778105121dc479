import math

import pytest

from chartcore.axis import Rect, ValueAxis
from chartcore.domain import XYDomain
from chartcore.logaxis import LogValueAxis
from chartcore.series import LineSeries, SeriesType, line_vertices, log_line_vertices


def test_set_samples_fits_domain():
    s = LineSeries()
    s.set_samples([(3, -2), (-1, 7), (5, 4)])
    assert (s.min_x, s.max_x, s.min_y, s.max_y) == (-1, 5, -2, 7)
    assert s.size == 3
    assert s.samples == [(3, -2), (-1, 7), (5, 4)]


def test_empty_samples_give_unit_range():
    s = LineSeries()
    s.set_samples([(2, 3), (4, 5)])
    s.set_samples([])
    assert (s.min_x, s.max_x, s.min_y, s.max_y) == (1, 1, 1, 1)
    assert s.size == 0


def test_append_samples_extends_range():
    s = LineSeries()
    s.set_samples([(0, 0), (1, 1)])
    s.append_samples([(5, -3)])
    assert s.size == 3
    assert s.samples[-1] == (5, -3)
    assert (s.max_x, s.min_y) == (5, -3)


def test_clear_restores_default_range():
    s = LineSeries()
    s.set_samples([(20, 30), (40, 50)])
    s.clear()
    assert s.samples == []
    assert (s.min_x, s.max_x, s.min_y, s.max_y) == (1, 10, 1, 10)


def test_samples_changed_and_range_signals():
    s = LineSeries()
    events = []
    s.samples_changed.connect(lambda: events.append("samples"))
    s.range_horizontal_changed.connect(lambda: events.append("h"))
    s.range_vertical_changed.connect(lambda: events.append("v"))
    s.set_samples([(0, 0), (2, 3)])
    assert events == ["h", "v", "samples"]


def test_defaults_and_property_signals():
    s = LineSeries()
    assert s.series_type == SeriesType.LINE
    assert s.color == "#24ACFF"
    assert s.line_width == 2
    seen = []
    s.color_changed.connect(lambda: seen.append("color"))
    s.line_width_changed.connect(lambda: seen.append("width"))
    s.color = "red"
    s.color = "red"
    s.line_width = 3
    assert seen == ["color", "width"]


def test_label_signal_only_on_change():
    s = LineSeries()
    seen = []
    s.label_changed.connect(lambda: seen.append(s.label))
    s.label = "temp"
    s.label = "temp"
    assert seen == ["temp"]


def test_line_vertices_corners_and_midpoint():
    d = XYDomain()
    d.set_range(0, 10, 0, 10)
    bounds = Rect(5, 7, 100, 50)
    v = line_vertices(bounds, d, [(0, 0), (10, 10), (5, 5)])
    assert v[0] == pytest.approx((bounds.x, bounds.bottom))
    assert v[1] == pytest.approx((bounds.right, bounds.y))
    assert v[2] == pytest.approx((bounds.x + bounds.width / 2, bounds.y + bounds.height / 2))


def test_line_vertices_empty():
    assert line_vertices(Rect(0, 0, 10, 10), XYDomain(), []) == []


def test_log_line_vertices_decade_midpoint():
    d = XYDomain()
    d.set_range(1, 100, 1, 100)
    bounds = Rect(0, 0, 200, 80)
    v = log_line_vertices(bounds, d, [(1, 1), (10, 10), (100, 100)], 10)
    assert v[0] == pytest.approx((0, bounds.height))
    assert v[1] == pytest.approx((bounds.width / 2, bounds.height / 2))
    assert v[2] == pytest.approx((bounds.width, 0))


def test_log_line_vertices_negative_is_nan():
    d = XYDomain()
    d.set_range(1, 100, 1, 100)
    vertices = log_line_vertices(Rect(0, 0, 10, 10), d, [(-1, 10)], 10)
    assert len(vertices) == 1
    assert math.isnan(vertices[0][0])


def test_set_axis_follows_plot_area():
    axis = ValueAxis()
    axis.set_size(400, 300)
    s = LineSeries()
    s.set_axis(axis)
    area = axis.plot_area
    assert (s.x, s.y, s.width, s.height) == (area.x, area.y, area.width, area.height)
    axis.set_size(600, 300)
    assert s.width == axis.plot_area.width
    assert s.axis is axis


def test_set_axis_none_is_ignored():
    s = LineSeries()
    s.set_axis(None)
    assert s.axis is None


def test_axis_domain_update_requests_repaint():
    axis = ValueAxis()
    s = LineSeries()
    s.set_axis(axis)
    count = []
    s.update_requested.connect(lambda: count.append(1))
    axis.domain.set_range(0, 50, 0, 50)
    assert len(count) >= 1


def test_vertices_use_axis_domain():
    axis = ValueAxis()
    axis.set_size(400, 300)
    axis.domain.set_range(0, 10, 0, 10)
    s = LineSeries()
    s.set_axis(axis)
    s.set_samples([(0, 0), (10, 10)])
    v = s.vertices()
    assert v[0] == pytest.approx((0, s.height))
    assert v[1] == pytest.approx((s.width, 0))


def test_vertices_with_log_axis():
    axis = LogValueAxis()
    axis.set_size(400, 300)
    axis.domain.set_range(1, 100, 1, 100)
    s = LineSeries()
    s.set_axis(axis)
    s.set_samples([(10, 10)])
    assert s.vertices()[0] == pytest.approx((s.width / 2, s.height / 2))