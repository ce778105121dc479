"""Logarithmic value axis."""

from __future__ import annotations

import math
from dataclasses import dataclass

from chartcore.axis import DASH_SIZE, Axis, AxisType, MeasureText, Point, Rect, _div
from chartcore.domain import XYDomain, fuzzy_compare

MIN_LOG_VALUE = 1e-20


def _number(value: float) -> str:
    return f"{value:.6g}"


def _log(value: float, base: float) -> float:
    """Logarithm used for mapping: negative values map to 1, zero to minus infinity."""
    if value < 0:
        return 1.0
    if value == 0:
        return -math.inf
    return math.log(value) / math.log(base)


@dataclass(frozen=True)
class LogTick:
    """A grid line on a logarithmic axis: its position in log units and its label."""

    log_value: float
    label: str


class LogValueAxis(Axis):
    """An axis whose both directions use a base-10 logarithmic scale."""

    def __init__(self, measure_text: MeasureText | None = None) -> None:
        super().__init__(AxisType.LOG_VALUE, measure_text)
        self._tick_count_x = 0
        self._tick_count_y = 0
        self.base = 10
        self._ln_x: tuple[float, float] = (0.0, 0.0)
        self._ln_y: tuple[float, float] = (0.0, 0.0)

        self.domain = XYDomain()
        self.domain.updated.connect(self.update)
        self.domain.updated.connect(self.axis_range_changed.emit)
        self.domain.range_vertical_changed.connect(self.range_vertical_changed.emit)
        self.domain.range_horizontal_changed.connect(self.range_horizontal_changed.emit)

    def map_to_position(self, point: Point) -> Point:
        x, y = point
        if x <= 0 or y <= 0:
            return (1.0, 1.0)
        d, area = self.domain, self._plot_area
        value_x = _log(x, self.base)
        value_y = _log(y, self.base)
        max_x, min_x = _log(d.max_x, self.base), _log(d.min_x, self.base)
        max_y, min_y = _log(d.max_y, self.base), _log(d.min_y, self.base)
        nx = _div(value_x - min_x, max_x - min_x)
        ny = 1 - _div(value_y - min_y, max_y - min_y)
        return (area.x + nx * area.width, area.y + ny * area.height)

    def map_to_value(self, point: Point) -> Point:
        d, area = self.domain, self._plot_area
        nx = _div(point[0] - area.x, area.width)
        ny = 1 - _div(point[1] - area.y, area.height)
        max_x, min_x = _log(d.max_x, self.base), _log(d.min_x, self.base)
        max_y, min_y = _log(d.max_y, self.base), _log(d.min_y, self.base)
        return (10.0 ** (nx * (max_x - min_x) + min_x), 10.0 ** (ny * (max_y - min_y) + min_y))

    def set_min_x(self, value: float) -> None:
        self.domain.min_x = max(value, MIN_LOG_VALUE)

    def set_max_x(self, value: float) -> None:
        self.domain.max_x = max(value, MIN_LOG_VALUE)

    def set_min_y(self, value: float) -> None:
        self.domain.min_y = max(value, MIN_LOG_VALUE)

    def set_max_y(self, value: float) -> None:
        self.domain.max_y = max(value, MIN_LOG_VALUE)

    def _ticks_for(self, log_min: float, log_max: float) -> int:
        count = abs(math.ceil(log_max) - math.ceil(log_min))
        high = max(log_min, log_max)
        if fuzzy_compare(high, float(math.ceil(high))):
            count += 1
        return count

    def calc_axis_settings(self) -> None:
        """Recompute the log ranges and tick counts; raises ValueError for non-positive ranges."""
        d, log_base = self.domain, math.log(self.base)
        log_max_x = math.log(d.max_x) / log_base
        log_min_x = math.log(d.min_x) / log_base
        log_max_y = math.log(d.max_y) / log_base
        log_min_y = math.log(d.min_y) / log_base
        self._ln_x = (log_min_x, log_max_x)
        self._ln_y = (log_min_y, log_max_y)
        self.tick_count_x = self._ticks_for(log_min_x, log_max_x)
        self.tick_count_y = self._ticks_for(log_min_y, log_max_y)

    @staticmethod
    def _minor_steps(tick_count: int) -> range:
        start, step = 2, 2
        if tick_count in (0, 1):
            step = 1
        elif tick_count in (2, 4):
            step = 3
        elif tick_count in (5, 6, 7):
            start, step = 5, 5
        elif tick_count > 7:
            start = 10
        return range(start, 10, step)

    def _ticks(self, ln_range: tuple[float, float], tick_count: int, minors: range, label_minor: bool) -> list[LogTick]:
        if tick_count <= 0:
            return []
        base = self.base
        temp = math.ceil(ln_range[0])
        previous = base ** (temp - 1)
        ticks: list[LogTick] = []
        for i in range(tick_count + 1):
            value = float(base) ** (temp + i)
            if i == 0:
                bound = base ** ln_range[0]
            elif i == tick_count:
                bound = base ** ln_range[1]
            else:
                bound = value
            for coef in minors:
                v = previous * coef
                if ((i == 0 and v > bound) or (i != 0 and v < bound)) and v > 0:
                    label = _number(v) if label_minor else ""
                    ticks.append(LogTick(math.log(v) / math.log(base), label))
            if i < tick_count:
                ticks.append(LogTick(float(temp + i), _number(value)))
            previous = value
        return ticks

    def y_ticks(self) -> list[LogTick]:
        """Grid lines of the vertical axis; minor lines carry labels too."""
        return self._ticks(self._ln_y, self._tick_count_y, self._minor_steps(self._tick_count_y), True)

    def x_ticks(self) -> list[LogTick]:
        """Grid lines of the horizontal axis; only decades carry labels."""
        return self._ticks(self._ln_x, self._tick_count_x, range(2, 10, 2), False)

    def layout(self) -> Rect:
        self.calc_axis_settings()
        if self._tick_count_y > 0:
            sizes = [self.measure_text(tick.label) for tick in self.y_ticks()]
            max_width = max((w for w, _ in sizes), default=0)
            max_height = max((h for _, h in sizes), default=0)
        else:
            max_width = max_height = 10
        area = self.bounding_rect.margins_removed(
            max_width + 2 * DASH_SIZE, max_height * 1.5, max_width * 0.5, max_height * 2
        )
        self._set_plot_area(area)
        return area