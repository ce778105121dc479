import pytest

from chartcore.rangedomain import Orientation, RangeDomain


def _recorder(domain):
    events = []
    domain.updated.connect(lambda: events.append("updated"))
    domain.range_horizontal_changed.connect(lambda: events.append("h"))
    domain.range_vertical_changed.connect(lambda: events.append("v"))
    return events


def test_defaults():
    d = RangeDomain()
    assert (d.min_x, d.max_x, d.min_y, d.max_y) == (1.0, 2.0, 1.0, 2.0)


def test_set_range_x_emits_horizontal_and_updated():
    d = RangeDomain()
    events = _recorder(d)
    d.set_range_x(-5, 7)
    assert (d.min_x, d.max_x) == (-5, 7)
    assert events == ["h", "updated"]


def test_set_range_y_emits_vertical_and_updated():
    d = RangeDomain()
    events = _recorder(d)
    d.set_range_y(3, 9)
    assert (d.min_y, d.max_y) == (3, 9)
    assert events == ["v", "updated"]


def test_same_range_emits_nothing():
    d = RangeDomain()
    events = _recorder(d)
    d.set_range_x(1, 2)
    d.set_range_y(1, 2)
    d.set_ranges(1, 2, 1, 2)
    assert events == []


@pytest.mark.parametrize(
    "orientation, expected",
    [
        (Orientation.VERTICAL, (1.0, 2.0, 4, 8)),
        (Orientation.HORIZONTAL, (4, 8, 1.0, 2.0)),
    ],
)
def test_set_range_by_orientation(orientation, expected):
    d = RangeDomain()
    d.set_range(orientation, 4, 8)
    assert (d.min_x, d.max_x, d.min_y, d.max_y) == expected


def test_set_ranges_only_y_changes():
    d = RangeDomain()
    events = _recorder(d)
    d.set_ranges(1, 2, 10, 20)
    assert events == ["v", "updated"]
    assert (d.min_y, d.max_y) == (10, 20)


def test_set_ranges_both_change_single_update():
    d = RangeDomain()
    events = _recorder(d)
    d.set_ranges(0, 5, 0, 6)
    assert events == ["h", "v", "updated"]


def test_reset_restores_defaults():
    d = RangeDomain()
    d.set_ranges(-3, 3, -4, 4)
    events = _recorder(d)
    d.reset()
    assert (d.min_x, d.max_x, d.min_y, d.max_y) == (1.0, 2.0, 1.0, 2.0)
    assert events.count("updated") == 1


def test_single_value_setters():
    d = RangeDomain()
    events = _recorder(d)
    d.min_x = 0.5
    d.max_y = 50
    assert d.min_x == 0.5
    assert d.max_y == 50
    assert events == ["h", "updated", "v", "updated"]


def test_single_value_setter_unchanged_is_silent():
    d = RangeDomain()
    events = _recorder(d)
    d.max_x = 2
    d.min_y = 1
    assert events == []