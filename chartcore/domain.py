"""Plot ranges with pan, zoom and scale transforms."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Callable

MIN_SCALE = 0.05
MAX_SCALE = 100.0
ZOOM_ACCURACY = 0.05


def fuzzy_compare(a: float, b: float) -> bool:
    """Return True when two floats are equal up to about twelve significant digits."""
    return abs(a - b) * 1_000_000_000_000 <= min(abs(a), abs(b))


def mid_zoom(value: float) -> float:
    """Clamp a scale factor to the allowed range."""
    if value < MIN_SCALE:
        return MIN_SCALE
    if value > MAX_SCALE:
        return MAX_SCALE
    return value


class Signal:
    """A list of callables invoked together when the signal is emitted."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove a connected slot; raises ValueError if it was never connected."""
        self._slots.remove(slot)

    def emit(self, *args: Any) -> None:
        for slot in list(self._slots):
            slot(*args)


class Domain(ABC):
    """The visible x/y range of a chart together with its transform state."""

    def __init__(self) -> None:
        self.updated = Signal()
        self.range_horizontal_changed = Signal()
        self.range_vertical_changed = Signal()

        self._zoomed = False
        self._moved = False
        self._scale_x = 1.0
        self._scale_y = 1.0

        self._min_x, self._max_x = 1.0, 10.0
        self._min_y, self._max_y = 1.0, 10.0

        self._reset_min_x, self._reset_max_x = 0.0, 1.0
        self._reset_min_y, self._reset_max_y = 0.0, 1.0

    @abstractmethod
    def set_range(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        """Set both ranges at once."""

    @abstractmethod
    def move(self, dx: float, dy: float) -> None:
        """Shift the visible range."""

    @abstractmethod
    def set_scale(self, sx: float, sy: float) -> None:
        """Apply absolute scale factors."""

    @abstractmethod
    def zoom_in(self) -> None:
        """Shrink the visible range."""

    @abstractmethod
    def zoom_out(self) -> None:
        """Enlarge the visible range."""

    def zoom(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        """Zoom to an explicit range."""
        self._zoomed = True
        self.set_range(min_x, max_x, min_y, max_y)

    def reset_transform(self) -> None:
        """Undo every pan, zoom and scale and restore the remembered range."""
        self._scale_x = 1.0
        self._scale_y = 1.0
        self._moved = False
        self._zoomed = False
        self.set_range(self._reset_min_x, self._reset_max_x, self._reset_min_y, self._reset_max_y)

    def set_range_x(self, min_value: float, max_value: float) -> None:
        self.set_range(min_value, max_value, self._min_y, self._max_y)

    def set_range_y(self, min_value: float, max_value: float) -> None:
        self.set_range(self._min_x, self._max_x, min_value, max_value)

    def set_scale_x(self, sx: float) -> None:
        self.set_scale(sx, self._scale_y)

    def set_scale_y(self, sy: float) -> None:
        self.set_scale(self._scale_x, sy)

    def set_transform_reset(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        """Set the range that reset_transform() returns to."""
        self._reset_min_x, self._reset_max_x = min_x, max_x
        self._reset_min_y, self._reset_max_y = min_y, max_y

    @property
    def transform_reset(self) -> tuple[float, float, float, float]:
        return (self._reset_min_x, self._reset_max_x, self._reset_min_y, self._reset_max_y)

    @property
    def min_x(self) -> float:
        return self._min_x

    @min_x.setter
    def min_x(self, value: float) -> None:
        self.set_range(value, self._max_x, self._min_y, self._max_y)

    @property
    def max_x(self) -> float:
        return self._max_x

    @max_x.setter
    def max_x(self, value: float) -> None:
        self.set_range(self._min_x, value, self._min_y, self._max_y)

    @property
    def min_y(self) -> float:
        return self._min_y

    @min_y.setter
    def min_y(self, value: float) -> None:
        self.set_range(self._min_x, self._max_x, value, self._max_y)

    @property
    def max_y(self) -> float:
        return self._max_y

    @max_y.setter
    def max_y(self, value: float) -> None:
        self.set_range(self._min_x, self._max_x, self._min_y, value)

    @property
    def scale_x(self) -> float:
        return self._scale_x

    @scale_x.setter
    def scale_x(self, value: float) -> None:
        self.set_scale_x(value)

    @property
    def scale_y(self) -> float:
        return self._scale_y

    @scale_y.setter
    def scale_y(self, value: float) -> None:
        self.set_scale_y(value)

    @property
    def is_moved(self) -> bool:
        return self._moved

    @property
    def is_zoomed(self) -> bool:
        return self._zoomed


class XYDomain(Domain):
    """A linear x/y domain."""

    def set_range(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        x_changed = False
        y_changed = False

        if not fuzzy_compare(self._min_x, min_x) or not fuzzy_compare(self._max_x, max_x):
            self._min_x, self._max_x = min_x, max_x
            x_changed = True
            self.range_horizontal_changed.emit()

        if not fuzzy_compare(self._min_y, min_y) or not fuzzy_compare(self._max_y, max_y):
            self._min_y, self._max_y = min_y, max_y
            y_changed = True
            self.range_vertical_changed.emit()

        if not self._zoomed and not self._moved:
            if x_changed:
                self._reset_min_x, self._reset_max_x = self._min_x, self._max_x
            if y_changed:
                self._reset_min_y, self._reset_max_y = self._min_y, self._max_y

        if x_changed or y_changed:
            self.updated.emit()

    def move(self, dx: float, dy: float) -> None:
        if not fuzzy_compare(dx + 1, 1.0) or not fuzzy_compare(dy + 1, 1.0):
            self._moved = True
            self.set_range(self._min_x - dx, self._max_x - dx, self._min_y + dy, self._max_y + dy)

    def _zoom_by(self, fraction: float) -> None:
        self._zoomed = True
        span_x = self._max_x - self._min_x
        span_y = self._max_y - self._min_y
        nmin_x = self._min_x + span_x * fraction
        nmax_x = self._max_x - span_x * fraction
        nmin_y = self._min_y + span_y * fraction
        nmax_y = self._max_y - span_y * fraction
        if nmin_x > nmax_x or nmin_y > nmax_y:
            return
        self.set_range(nmin_x, nmax_x, nmin_y, nmax_y)

    def zoom_in(self) -> None:
        self._zoom_by(0.1)

    def zoom_out(self) -> None:
        self._zoom_by(-0.1)

    def set_scale(self, sx: float, sy: float) -> None:
        self._zoomed = True

        nscale_x = mid_zoom(sx)
        nscale_y = mid_zoom(sy)

        reset_span_x = self._reset_max_x - self._reset_min_x
        reset_span_y = self._reset_max_y - self._reset_min_y

        nmin_x = self._min_x + reset_span_x * (nscale_x - self._scale_x)
        nmax_x = self._max_x - reset_span_x * (nscale_x - self._scale_x)
        nmin_y = self._min_y + reset_span_y * (nscale_y - self._scale_y)
        nmax_y = self._max_y - reset_span_y * (nscale_y - self._scale_y)

        if nmin_x > nmax_x or nmin_y > nmax_y:
            return

        self._scale_x = nscale_x
        self._scale_y = nscale_y
        self.set_range(nmin_x, nmax_x, nmin_y, nmax_y)


__all__ = [
    "MAX_SCALE",
    "MIN_SCALE",
    "ZOOM_ACCURACY",
    "Domain",
    "Signal",
    "XYDomain",
    "fuzzy_compare",
    "mid_zoom",
]

_ = math  # math is kept for callers that import it alongside the domain helpers