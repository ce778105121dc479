"""A chart that owns one axis and a list of series."""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Any

from chartcore.axis import Axis, AxisType, Point
from chartcore.domain import Signal, fuzzy_compare
from chartcore.series import LineSeries, Series, SeriesType

_DEFAULT_COLORS = (
    "#9F4141", "blue", "green", "red", "cyan", "yellow",
    "magenta", "darkRed", "darkGreen", "darkBlue", "darkMagenta", "darkCyan", "darkYellow", "darkGray",
)


def _random_color() -> str:
    return "#" + "".join(f"{random.randint(0, 255):02x}" for _ in range(3))


class ChartView:
    """Holds the axis and the series of a chart and keeps their geometry in step."""

    def __init__(self, width: float = 0.0, height: float = 0.0) -> None:
        self._series: list[Series] = []
        self._axis: Axis | None = None
        self._labels_font: Any = None
        self.width = width
        self.height = height

        self.labels_font_changed = Signal()
        self.series_changed = Signal()
        self.axis_changed = Signal()

    @property
    def series(self) -> list[Series]:
        return list(self._series)

    @property
    def axis(self) -> Axis | None:
        return self._axis

    @property
    def labels_font(self) -> Any:
        return self._labels_font

    @labels_font.setter
    def labels_font(self, font: Any) -> None:
        if font != self._labels_font:
            self._labels_font = font
            if self._axis is not None:
                self._axis.labels_font = font
            self.labels_font_changed.emit()

    def component_complete(self, children: Iterable[Any]) -> None:
        """Adopt the series and axis found among the given child items."""
        added = False
        found_axis: Axis | None = None
        for child in children:
            if isinstance(child, Series):
                if child not in self._series:
                    self._series.append(child)
                    added = True
            elif isinstance(child, Axis):
                found_axis = child

        if found_axis is None:
            found_axis = next((s.axis for s in self._series if s.axis is not None), None)

        if found_axis is not None:
            if found_axis is self._axis:
                for s in self._series:
                    s.set_axis(self._axis)
            else:
                self.set_axis(found_axis)

        if added:
            self.series_changed.emit()

    def set_geometry(self, width: float, height: float) -> None:
        self.width, self.height = width, height
        if self._axis is None:
            for s in self._series:
                s.set_size(width, height)
        else:
            self._axis.set_size(width, height)

    def set_axis(self, axis: Axis | None) -> None:
        """Replace the axis and attach every series to it."""
        if axis is self._axis:
            return
        self._axis = axis
        if axis is not None:
            axis.set_size(self.width, self.height)
            axis.labels_font = self._labels_font
            for s in self._series:
                s.set_axis(axis)
        self.axis_changed.emit()

    def create_series(self, series_type: SeriesType = SeriesType.LINE, label: str = "", color: str = "") -> Series | None:
        """Create and add a series; returns None for an unknown type."""
        if series_type != SeriesType.LINE:
            return None
        series = LineSeries()
        if color:
            series.color = color
        elif len(self._series) >= len(_DEFAULT_COLORS):
            series.color = _random_color()
        else:
            series.color = _DEFAULT_COLORS[len(self._series)]

        if self._axis is None:
            series.set_size(self.width, self.height)
        else:
            series.set_axis(self._axis)
        series.label = label
        self._series.append(series)
        self.series_changed.emit()
        return series

    def series_at(self, index: int) -> Series:
        """Return the series at index; raises IndexError when out of range."""
        if not 0 <= index < len(self._series):
            raise IndexError(f"series index {index} out of range")
        return self._series[index]

    def remove_series(self, index: int) -> None:
        """Remove the series at index; an out-of-range index is ignored."""
        if not 0 <= index < len(self._series):
            return
        del self._series[index]
        self.series_changed.emit()

    def remove_all_series(self) -> None:
        while self._series:
            self.remove_series(0)

    def map_to_position(self, point: Point) -> Point:
        if self._axis is None:
            return (0.0, 0.0)
        return self._axis.map_to_position(point)

    def map_to_value(self, point: Point) -> Point:
        if self._axis is None:
            return (0.0, 0.0)
        return self._axis.map_to_value(point)

    def clear(self) -> None:
        for s in self._series:
            s.clear()

    def __len__(self) -> int:
        return len(self._series)

    def _pad_y(self, min_y: float, max_y: float) -> tuple[float, float]:
        diff = max_y - min_y
        if fuzzy_compare(diff + 1, 1.0):
            offset = 0.1 if fuzzy_compare(abs(max_y) + 1, 1.0) else abs(max_y) / 20
        else:
            offset = diff / 20
        if self._axis.type == AxisType.LOG_VALUE:
            if min_y - offset > 0:
                min_y -= offset
            else:
                min_y -= min_y / 20
        else:
            min_y -= offset
        return min_y, max_y + offset

    def force_axis_range(self, init: bool = False) -> None:
        """Fit the axis to the line series; with init, hidden series count too."""
        if self._axis is None:
            return
        min_x, max_x, min_y, max_y = 1.0, 10.0, 1.0, 10.0
        usable = [
            s for s in self._series
            if isinstance(s, LineSeries) and s.size > 0 and (init or s.enabled)
        ]
        if usable:
            min_x = min(s.min_x for s in usable)
            max_x = max(s.max_x for s in usable)
            min_y = min(s.min_y for s in usable)
            max_y = max(s.max_y for s in usable)
            min_y, max_y = self._pad_y(min_y, max_y)

        self._axis.min_x = min_x
        self._axis.max_x = max_x
        self._axis.min_y = min_y
        self._axis.max_y = max_y