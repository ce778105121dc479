"""Chart axes: shared state and the linear value axis."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

from chartcore.domain import Domain, Signal, XYDomain, fuzzy_compare

DASH_SIZE = 4

Point = tuple[float, float]
MeasureText = Callable[[str], tuple[float, float]]


class AxisType(IntEnum):
    VALUE = 0
    DATETIME = 1
    LOG_VALUE = 2


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, point: Point) -> bool:
        px, py = point
        left, right = sorted((self.left, self.right))
        top, bottom = sorted((self.top, self.bottom))
        return left <= px <= right and top <= py <= bottom

    def margins_removed(self, left: float, top: float, right: float, bottom: float) -> Rect:
        return Rect(self.x + left, self.y + top, self.width - left - right, self.height - top - bottom)


def default_measure_text(text: str) -> tuple[float, float]:
    """Approximate the (width, height) of a label drawn in a small sans font."""
    return (7.0 * len(text), 14.0)


def _div(a: float, b: float) -> float:
    """Floating division that yields inf or nan instead of raising."""
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def count_of_digits(number: float) -> int:
    """Digit count used for axis factors; the argument is truncated to an integer."""
    n = abs(int(number))
    if n == 0:
        return 1
    return math.ceil(math.log10(n) + 0.5)


def calc_factor(value: float) -> float:
    """Power of ten by which axis labels are scaled for a value of this magnitude."""
    value = abs(value)
    if value == 0 or not math.isfinite(value):
        return 1.0
    factor = 1.0
    sign = 1
    if value < 1:
        sign = -1
        value = 1.0 / value
    else:
        factor = 0.1
    return factor * 10.0 ** (sign * count_of_digits(value))


def _qt_number(value: float, precision: int = 6) -> str:
    return f"{value:.{precision}g}"


class Axis(ABC):
    """State shared by every axis kind: tick counts, colors, plot area and domain."""

    def __init__(self, axis_type: AxisType, measure_text: MeasureText | None = None) -> None:
        self.type = AxisType(axis_type)
        self.measure_text: MeasureText = measure_text or default_measure_text
        self.domain: Domain | None = None

        self._tick_count_x = 4
        self._tick_count_y = 5
        self._grid_color = "#A0A0A0"
        self._axis_color = "black"
        self._labels_color = "black"
        self._labels_font: Any = None
        self._plot_area = Rect(0.0, 0.0, 0.0, 0.0)
        self.width = 0.0
        self.height = 0.0

        self.labels_color_changed = Signal()
        self.axis_color_changed = Signal()
        self.grid_color_changed = Signal()
        self.tick_count_x_changed = Signal()
        self.tick_count_y_changed = Signal()
        self.plot_area_changed = Signal()
        self.axis_range_changed = Signal()
        self.range_horizontal_changed = Signal()
        self.range_vertical_changed = Signal()
        self.update_requested = Signal()

    @property
    def bounding_rect(self) -> Rect:
        return Rect(0.0, 0.0, self.width, self.height)

    def set_size(self, width: float, height: float) -> None:
        if (width, height) == (self.width, self.height):
            return
        self.width, self.height = width, height
        self.update()

    def update(self) -> None:
        """Recompute the layout (when sized) and ask for a repaint."""
        if self.width > 0 and self.height > 0:
            self.layout()
        self.update_requested.emit()

    @abstractmethod
    def map_to_position(self, point: Point) -> Point:
        """Map a data value to a pixel position."""

    @abstractmethod
    def map_to_value(self, point: Point) -> Point:
        """Map a pixel position to a data value."""

    @abstractmethod
    def layout(self) -> Rect:
        """Compute and store the plot area; return it."""

    @property
    def plot_area(self) -> Rect:
        return self._plot_area

    def _set_plot_area(self, rect: Rect) -> None:
        if rect != self._plot_area:
            self._plot_area = rect
            self.plot_area_changed.emit()

    def _set_tick_count(self, attr: str, signal: Signal, count: int) -> None:
        if getattr(self, attr) != count:
            setattr(self, attr, count)
            signal.emit()
            self.update()

    @property
    def tick_count_x(self) -> int:
        return self._tick_count_x

    @tick_count_x.setter
    def tick_count_x(self, count: int) -> None:
        self._set_tick_count("_tick_count_x", self.tick_count_x_changed, count)

    @property
    def tick_count_y(self) -> int:
        return self._tick_count_y

    @tick_count_y.setter
    def tick_count_y(self, count: int) -> None:
        self._set_tick_count("_tick_count_y", self.tick_count_y_changed, count)

    def _set_color(self, attr: str, signal: Signal, color: str) -> None:
        if getattr(self, attr) != color:
            setattr(self, attr, color)
            signal.emit()
            self.update()

    @property
    def grid_color(self) -> str:
        return self._grid_color

    @grid_color.setter
    def grid_color(self, color: str) -> None:
        self._set_color("_grid_color", self.grid_color_changed, color)

    @property
    def axis_color(self) -> str:
        return self._axis_color

    @axis_color.setter
    def axis_color(self, color: str) -> None:
        self._set_color("_axis_color", self.axis_color_changed, color)

    @property
    def labels_color(self) -> str:
        return self._labels_color

    @labels_color.setter
    def labels_color(self, color: str) -> None:
        self._set_color("_labels_color", self.labels_color_changed, color)

    @property
    def labels_font(self) -> Any:
        return self._labels_font

    @labels_font.setter
    def labels_font(self, font: Any) -> None:
        if self._labels_font != font:
            self._labels_font = font
            self.update()

    def set_min_x(self, value: float) -> None:
        self.domain.min_x = value

    def set_max_x(self, value: float) -> None:
        self.domain.max_x = value

    def set_min_y(self, value: float) -> None:
        self.domain.min_y = value

    def set_max_y(self, value: float) -> None:
        self.domain.max_y = value

    @property
    def min_x(self) -> float:
        return self.domain.min_x

    @min_x.setter
    def min_x(self, value: float) -> None:
        self.set_min_x(value)

    @property
    def max_x(self) -> float:
        return self.domain.max_x

    @max_x.setter
    def max_x(self, value: float) -> None:
        self.set_max_x(value)

    @property
    def min_y(self) -> float:
        return self.domain.min_y

    @min_y.setter
    def min_y(self, value: float) -> None:
        self.set_min_y(value)

    @property
    def max_y(self) -> float:
        return self.domain.max_y

    @max_y.setter
    def max_y(self, value: float) -> None:
        self.set_max_y(value)


class ValueAxis(Axis):
    """A linear axis with automatic factor and offset for very large or small values."""

    def __init__(self, axis_type: AxisType = AxisType.VALUE, measure_text: MeasureText | None = None) -> None:
        super().__init__(axis_type, measure_text)
        self.offset = 0.0
        self.factor = 1.0
        self.interval_x = 0.0
        self.interval_y = 0.0
        self.precision = 1
        self._offset_active = True
        self._factor_active = True

        self.offset_active_changed = Signal()
        self.factor_active_changed = Signal()

        self.domain = XYDomain()
        self.domain.updated.connect(self._on_domain_updated)
        self.domain.range_vertical_changed.connect(self.range_vertical_changed.emit)
        self.domain.range_horizontal_changed.connect(self.range_horizontal_changed.emit)

        self.update_axis_settings()

    def _on_domain_updated(self) -> None:
        self.update_axis_settings()
        self.update()
        self.axis_range_changed.emit()

    def map_to_position(self, point: Point) -> Point:
        d, area = self.domain, self._plot_area
        nx = _div(point[0] - d.min_x, d.max_x - d.min_x)
        ny = 1 - _div(point[1] - d.min_y, d.max_y - d.min_y)
        return (area.x + nx * area.width, area.y + ny * area.height)

    def map_to_value(self, point: Point) -> Point:
        d, area = self.domain, self._plot_area
        nx = _div(point[0] - area.x, area.width)
        ny = 1 - _div(point[1] - area.y, area.height)
        return (nx * (d.max_x - d.min_x) + d.min_x, ny * (d.max_y - d.min_y) + d.min_y)

    def update_axis_settings(self) -> None:
        """Recompute tick intervals, label factor, offset and precision."""
        d = self.domain
        self.interval_x = _div(d.max_x - d.min_x, self._tick_count_x + 1)

        dy = d.max_y - d.min_y
        if abs(d.max_y) > 1000 or abs(d.max_y) < 0.01:
            self.factor = calc_factor(dy) if self._factor_active else 1.0
            if self._offset_active and self._factor_active:
                min_y_factor = calc_factor(d.min_y)
                if min_y_factor / self.factor > 10:
                    self.offset = math.floor(d.min_y / self.factor) * self.factor
                else:
                    self.offset = 0.0
            else:
                self.offset = 0.0
            dy /= self.factor
        else:
            self.factor = 1.0
            self.offset = 0.0

        step = _div(dy, self._tick_count_y + 1)
        self.interval_y = step

        if step > 100:
            self.precision = 0
        elif step > 10:
            self.precision = 1
        elif step < 0.1:
            self.precision = 3
        elif step < 1:
            self.precision = 2
        else:
            self.precision = 1

    def y_labels(self) -> list[str]:
        """Labels along the vertical axis, from top to bottom."""
        start = (self.domain.min_y - self.offset) / self.factor
        ticks = self._tick_count_y + 1
        labels = []
        for i in range(ticks + 1):
            value = start + (ticks - i) * self.interval_y
            if self._factor_active:
                labels.append(f"{value:.{self.precision}f}")
            else:
                labels.append(_qt_number(value, 6))
        return labels

    def x_labels(self) -> list[str]:
        """Labels along the horizontal axis, from left to right."""
        start = self.domain.min_x
        return [_qt_number(start + i * self.interval_x, 5) for i in range(self._tick_count_x + 2)]

    def correction_text(self) -> str:
        """The factor and offset note drawn above the plot; empty when neither applies."""
        text = ""
        if not fuzzy_compare(self.factor, 1):
            text += f"{self.factor:.0e} "
        if not fuzzy_compare(self.offset + 1, 1):
            sign = "-" if self.offset < 0 else "+"
            text += f"{sign} {_qt_number(abs(self.offset))}"
        return text

    def layout(self) -> Rect:
        sizes = [self.measure_text(label) for label in self.y_labels()]
        max_width = max((w for w, _ in sizes), default=0)
        max_height = max((h for _, h in sizes), default=0)
        area = self.bounding_rect.margins_removed(
            max_width + 2 * DASH_SIZE, max_height * 2, max_width * 0.5, max_height * 2
        )
        self._set_plot_area(area)
        return area

    @property
    def offset_active(self) -> bool:
        return self._offset_active

    @offset_active.setter
    def offset_active(self, value: bool) -> None:
        if self._offset_active != value:
            self._offset_active = value
            self.update_axis_settings()
            self.offset_active_changed.emit()

    @property
    def factor_active(self) -> bool:
        return self._factor_active

    @factor_active.setter
    def factor_active(self, value: bool) -> None:
        if self._factor_active != value:
            self._factor_active = value
            self.update_axis_settings()
            self.factor_active_changed.emit()