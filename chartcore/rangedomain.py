"""A plain x/y range that reports when either direction changes."""

from __future__ import annotations

from enum import IntEnum

from chartcore.domain import Signal, fuzzy_compare


class Orientation(IntEnum):
    HORIZONTAL = 1
    VERTICAL = 2


class RangeDomain:
    """Minimum and maximum along x and y, starting at 1..2 in both directions."""

    def __init__(self) -> None:
        self._min_x, self._max_x = 1.0, 2.0
        self._min_y, self._max_y = 1.0, 2.0
        self.updated = Signal()
        self.range_horizontal_changed = Signal()
        self.range_vertical_changed = Signal()

    def set_range(self, orientation: Orientation, min_value: float, max_value: float) -> None:
        """Set the range along one orientation."""
        if orientation == Orientation.VERTICAL:
            self.set_range_y(min_value, max_value)
        else:
            self.set_range_x(min_value, max_value)

    def set_range_x(self, min_value: float, max_value: float) -> None:
        if fuzzy_compare(self._min_x, min_value) and fuzzy_compare(self._max_x, max_value):
            return
        self._min_x, self._max_x = min_value, max_value
        self.range_horizontal_changed.emit()
        self.updated.emit()

    def set_range_y(self, min_value: float, max_value: float) -> None:
        if fuzzy_compare(self._min_y, min_value) and fuzzy_compare(self._max_y, max_value):
            return
        self._min_y, self._max_y = min_value, max_value
        self.range_vertical_changed.emit()
        self.updated.emit()

    def set_ranges(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        """Set both ranges; updated is emitted at most once."""
        x_changed = not fuzzy_compare(self._min_x, min_x) or not fuzzy_compare(self._max_x, max_x)
        if x_changed:
            self._min_x, self._max_x = min_x, max_x
            self.range_horizontal_changed.emit()

        y_changed = not fuzzy_compare(self._min_y, min_y) or not fuzzy_compare(self._max_y, max_y)
        if y_changed:
            self._min_y, self._max_y = min_y, max_y
            self.range_vertical_changed.emit()

        if x_changed or y_changed:
            self.updated.emit()

    def reset(self) -> None:
        """Return to the initial 1..2 ranges."""
        self.set_ranges(1, 2, 1, 2)

    def _set_one(self, attr: str, value: float, signal: Signal) -> None:
        if fuzzy_compare(getattr(self, attr), value):
            return
        setattr(self, attr, value)
        signal.emit()
        self.updated.emit()

    @property
    def min_x(self) -> float:
        return self._min_x

    @min_x.setter
    def min_x(self, value: float) -> None:
        self._set_one("_min_x", value, self.range_horizontal_changed)

    @property
    def max_x(self) -> float:
        return self._max_x

    @max_x.setter
    def max_x(self, value: float) -> None:
        self._set_one("_max_x", value, self.range_horizontal_changed)

    @property
    def min_y(self) -> float:
        return self._min_y

    @min_y.setter
    def min_y(self, value: float) -> None:
        self._set_one("_min_y", value, self.range_vertical_changed)

    @property
    def max_y(self) -> float:
        return self._max_y

    @max_y.setter
    def max_y(self, value: float) -> None:
        self._set_one("_max_y", value, self.range_vertical_changed)