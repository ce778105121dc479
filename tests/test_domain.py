import pytest

from chartcore.domain import (
    MAX_SCALE,
    MIN_SCALE,
    Domain,
    Signal,
    XYDomain,
    fuzzy_compare,
    mid_zoom,
)


def _collect(signal):
    calls = []
    signal.connect(lambda *args: calls.append(args))
    return calls


def test_fuzzy_compare_equal_and_different():
    assert fuzzy_compare(1.0, 1.0)
    assert fuzzy_compare(0.0, 0.0)
    assert not fuzzy_compare(1.0, 1.1)
    assert fuzzy_compare(1.0, 1.0 + 1e-15)


def test_mid_zoom_clamps():
    assert mid_zoom(0.0001) == MIN_SCALE
    assert mid_zoom(1e9) == MAX_SCALE
    assert mid_zoom(3.0) == 3.0


def test_signal_connect_emit_disconnect():
    signal = Signal()
    d = XYDomain()
    d.set_range(0, 5, 0, 5)
    d.zoom(1, 2, 1, 2)

    signal.connect(d.reset_transform)
    signal.emit()
    assert (d.min_x, d.max_x, d.min_y, d.max_y) == (0, 5, 0, 5)
    assert d.is_zoomed is False

    signal.disconnect(d.reset_transform)
    d.zoom(1, 2, 1, 2)
    signal.emit()
    assert (d.min_x, d.max_x) == (1, 2)
    assert d.is_zoomed is True


def test_signal_disconnect_unknown_raises():
    with pytest.raises(ValueError):
        Signal().disconnect(print)


def test_domain_is_abstract():
    with pytest.raises(TypeError):
        Domain()


def test_defaults():
    d = XYDomain()
    assert (d.min_x, d.max_x, d.min_y, d.max_y) == (1.0, 10.0, 1.0, 10.0)
    assert d.transform_reset == (0.0, 1.0, 0.0, 1.0)
    assert not d.is_moved and not d.is_zoomed
    assert (d.scale_x, d.scale_y) == (1.0, 1.0)


def test_set_range_emits_signals_once():
    d = XYDomain()
    horizontal = _collect(d.range_horizontal_changed)
    vertical = _collect(d.range_vertical_changed)
    updated = _collect(d.updated)

    d.set_range(0, 5, 1, 10)
    assert (len(horizontal), len(vertical), len(updated)) == (1, 0, 1)

    d.set_range(0, 5, 1, 10)
    assert len(updated) == 1


def test_set_range_records_transform_reset():
    d = XYDomain()
    d.set_range(0, 5, -2, 7)
    assert d.transform_reset == (0, 5, -2, 7)


def test_zoom_then_reset_transform_restores_range():
    d = XYDomain()
    d.set_range(0, 5, 0, 5)
    d.zoom(1, 2, 1, 2)
    assert d.is_zoomed
    assert (d.min_x, d.max_x) == (1, 2)
    assert d.transform_reset == (0, 5, 0, 5)
    d.reset_transform()
    assert (d.min_x, d.max_x, d.min_y, d.max_y) == (0, 5, 0, 5)
    assert not d.is_zoomed


def test_move_shifts_range_and_keeps_span():
    d = XYDomain()
    d.set_range(0, 10, 0, 10)
    dx, dy = 2.0, 3.0
    d.move(dx, dy)
    assert d.is_moved
    assert d.min_x == pytest.approx(0 - dx)
    assert d.max_x - d.min_x == pytest.approx(10)
    assert d.min_y == pytest.approx(0 + dy)
    assert d.transform_reset == (0, 10, 0, 10)


def test_move_by_zero_does_nothing():
    d = XYDomain()
    d.move(0.0, 0.0)
    assert not d.is_moved
    assert (d.min_x, d.max_x) == (1.0, 10.0)


def test_zoom_in_and_out_keep_center():
    d = XYDomain()
    d.set_range(0, 10, 0, 20)
    d.zoom_in()
    assert d.is_zoomed
    assert (d.min_x + d.max_x) / 2 == pytest.approx(5)
    assert d.max_x - d.min_x < 10
    span = d.max_y - d.min_y
    d.zoom_out()
    assert (d.min_y + d.max_y) / 2 == pytest.approx(10)
    assert d.max_y - d.min_y > span


def test_set_scale_moves_bounds():
    d = XYDomain()
    old_min = d.min_x
    reset_span = d.transform_reset[1] - d.transform_reset[0]
    d.set_scale(2, 1)
    assert d.scale_x == 2
    assert d.min_x == pytest.approx(old_min + reset_span * (2 - 1))
    assert d.min_y == 1.0


def test_set_scale_rejects_inverted_range():
    d = XYDomain()
    d.set_scale(MAX_SCALE * 2, 1)
    assert d.scale_x == 1.0
    assert d.is_zoomed
    assert (d.min_x, d.max_x) == (1.0, 10.0)


def test_property_setters_go_through_set_range():
    d = XYDomain()
    updated = _collect(d.updated)
    d.max_y = 50
    d.min_x = -4
    assert (d.min_x, d.max_y) == (-4, 50)
    assert len(updated) == 2
    d.set_range_y(2, 3)
    assert (d.min_y, d.max_y) == (2, 3)