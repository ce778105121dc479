"""Chart series and the geometry of their polylines."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from enum import IntEnum

from chartcore.axis import Axis, Point, Rect, _div
from chartcore.domain import Domain, Signal, XYDomain
from chartcore.logaxis import LogValueAxis


class SeriesType(IntEnum):
    LINE = 0


def _ln(value: float) -> float:
    """Natural logarithm that yields -inf for zero and nan for negatives."""
    if value > 0:
        return math.log(value)
    if value == 0:
        return -math.inf
    return math.nan


def line_vertices(bounds: Rect, domain: Domain, samples: Sequence[Point]) -> list[Point]:
    """Map samples into bounds on a linear scale; y grows downwards."""
    span_x = domain.max_x - domain.min_x
    span_y = domain.max_y - domain.min_y
    vertices = []
    for x, y in samples:
        vx = _div(x - domain.min_x, span_x)
        vy = _div(y - domain.min_y, span_y)
        vertices.append((bounds.x + vx * bounds.width, bounds.y + (1 - vy) * bounds.height))
    return vertices


def log_line_vertices(bounds: Rect, domain: Domain, samples: Sequence[Point], base: float) -> list[Point]:
    """Map samples into bounds on a logarithmic scale of the given base."""
    log_base = math.log(base)
    log_min_x = _ln(domain.min_x) / log_base
    log_max_x = _ln(domain.max_x) / log_base
    log_min_y = _ln(domain.min_y) / log_base
    log_max_y = _ln(domain.max_y) / log_base
    vertices = []
    for x, y in samples:
        vx = _div(_ln(x) / log_base - log_min_x, log_max_x - log_min_x)
        vy = _div(_ln(y) / log_base - log_min_y, log_max_y - log_min_y)
        vertices.append((bounds.x + vx * bounds.width, bounds.y + (1 - vy) * bounds.height))
    return vertices


class Series:
    """A drawable data series placed over an axis' plot area."""

    series_type = SeriesType.LINE

    def __init__(self) -> None:
        self._axis: Axis | None = None
        self.domain: Domain | None = None
        self._label = ""
        self.x = 0.0
        self.y = 0.0
        self.width = 0.0
        self.height = 0.0
        self.enabled = True

        self.axis_changed = Signal()
        self.range_horizontal_changed = Signal()
        self.range_vertical_changed = Signal()
        self.label_changed = Signal()
        self.update_requested = Signal()

    @property
    def axis(self) -> Axis | None:
        return self._axis

    def set_axis(self, axis: Axis | None) -> None:
        """Attach to an axis and follow its plot area; None is ignored."""
        if axis is None or axis is self._axis:
            return
        if self._axis is not None:
            self._axis.domain.updated.disconnect(self.update)
            self._axis.plot_area_changed.disconnect(self.update_plot_area)
        self._axis = axis
        area = axis.plot_area
        self.x, self.y = area.x, area.y
        self.set_size(area.width, area.height)
        axis.domain.updated.connect(self.update)
        axis.plot_area_changed.connect(self.update_plot_area)
        self.axis_changed.emit()

    def set_size(self, width: float, height: float) -> None:
        if (width, height) != (self.width, self.height):
            self.width, self.height = width, height
            self.update()

    def update_plot_area(self) -> None:
        """Move and resize to the axis' current plot area."""
        if self._axis is None:
            return
        area = self._axis.plot_area
        self.x, self.y = area.x, area.y
        self.width, self.height = area.width, area.height
        self.update()

    def update(self) -> None:
        self.update_requested.emit()

    def clear(self) -> None:
        """Remove all data; the base series holds none."""

    @property
    def bounds(self) -> Rect:
        return Rect(0.0, 0.0, self.width, self.height)

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str) -> None:
        if value != self._label:
            self._label = value
            self.label_changed.emit()

    @property
    def min_x(self) -> float:
        return self.domain.min_x

    @property
    def max_x(self) -> float:
        return self.domain.max_x

    @property
    def min_y(self) -> float:
        return self.domain.min_y

    @property
    def max_y(self) -> float:
        return self.domain.max_y


class LineSeries(Series):
    """A polyline through a list of samples."""

    series_type = SeriesType.LINE

    def __init__(self) -> None:
        super().__init__()
        self.domain = XYDomain()
        self.domain.range_vertical_changed.connect(self.range_vertical_changed.emit)
        self.domain.range_horizontal_changed.connect(self.range_horizontal_changed.emit)
        self._samples: list[Point] = []
        self._line_width = 2.0
        self._color = "#24ACFF"

        self.samples_changed = Signal()
        self.line_width_changed = Signal()
        self.color_changed = Signal()

    @property
    def samples(self) -> list[Point]:
        return list(self._samples)

    @property
    def size(self) -> int:
        return len(self._samples)

    def set_samples(self, samples: Iterable[Point]) -> None:
        """Replace the samples and fit the series' own domain to them."""
        self._samples = [(float(x), float(y)) for x, y in samples]
        if not self._samples:
            self.domain.set_range(1, 1, 1, 1)
        else:
            xs = [x for x, _ in self._samples]
            ys = [y for _, y in self._samples]
            self.domain.set_range(min(xs), max(xs), min(ys), max(ys))
        self.samples_changed.emit()
        self.update()

    def append_samples(self, samples: Iterable[Point]) -> None:
        self.set_samples(self._samples + list(samples))

    def clear(self) -> None:
        self._samples.clear()
        self.domain.set_range(1, 10, 1, 10)

    @property
    def color(self) -> str:
        return self._color

    @color.setter
    def color(self, value: str) -> None:
        if value != self._color:
            self._color = value
            self.color_changed.emit()
            self.update()

    @property
    def line_width(self) -> float:
        return self._line_width

    @line_width.setter
    def line_width(self, value: float) -> None:
        if value != self._line_width:
            self._line_width = value
            self.line_width_changed.emit()
            self.update()

    def vertices(self) -> list[Point]:
        """The polyline in local coordinates, using the axis domain when attached."""
        domain = self.domain if self._axis is None else self._axis.domain
        if isinstance(self._axis, LogValueAxis):
            return log_line_vertices(self.bounds, domain, self._samples, self._axis.base)
        return line_vertices(self.bounds, domain, self._samples)