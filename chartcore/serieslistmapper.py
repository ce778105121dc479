"""Map pairs of model columns onto a list of x/y series, with optional averaging."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, datetime, time
from typing import Any

from chartcore.domain import Signal
from chartcore.rangedomain import Orientation, RangeDomain
from chartcore.xymapper import DISPLAY_ROLE, Cell, Point, TableModel, XYSeries

SectionProvider = Callable[[int], int]


def _read_value(value: Any) -> float | None:
    """Read a model value as a float; None when it cannot be read."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.timestamp() * 1000.0
    if isinstance(value, date):
        return datetime.combine(value, time()).timestamp() * 1000.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _is_visible(series: XYSeries) -> bool:
    return bool(getattr(series, "visible", True))


class XYSeriesListMapper:
    """Fills a list of series from a model: series i takes columns x_section(i) and y_section(i)."""

    def __init__(self, model: TableModel | None = None) -> None:
        self.domain = RangeDomain()
        self._model: TableModel | None = None
        self._series_list: list[XYSeries] = []
        self._domain_list: list[RangeDomain] = []
        self._x_section_provider: SectionProvider | None = None
        self._y_section_provider: SectionProvider | None = None
        self._x_section_role = DISPLAY_ROLE
        self._y_section_role = DISPLAY_ROLE
        self._series_name_section = 1
        self._averaging_interval = 1
        self._completed = False
        self.series_signal_blocked = False
        self._model_links: list[tuple[Signal, Callable[..., Any]]] = []

        self.update_series_list = Signal()
        self.series_reset = Signal()
        self.insert_series = Signal()
        self.remove_series = Signal()
        self.x_section_provider_changed = Signal()
        self.y_section_provider_changed = Signal()
        self.model_changed = Signal()
        self.series_name_section_changed = Signal()
        self.averaging_interval_changed = Signal()
        self.x_section_role_changed = Signal()
        self.y_section_role_changed = Signal()

        if model is not None:
            self.model = model

    # lifecycle

    def component_complete(self) -> None:
        """Mark construction as finished; later changes then ask for a new series list."""
        self._completed = True

    @property
    def is_completed(self) -> bool:
        return self._completed

    # properties

    @property
    def series(self) -> list[XYSeries]:
        return list(self._series_list)

    @property
    def model(self) -> TableModel | None:
        return self._model

    @model.setter
    def model(self, model: TableModel | None) -> None:
        if model is self._model:
            return
        self._unlink_model()
        self.domain.reset()
        self._model = model
        self.model_changed.emit()

        if model is not None:
            self._model_links = [
                (model.columns_inserted, self._on_columns_inserted),
                (model.columns_removed, self._on_columns_removed),
                (model.data_changed, self._on_data_changed),
                (model.rows_inserted, self._on_rows_changed),
                (model.rows_removed, self._on_rows_changed),
                (model.destroyed, self._on_model_destroyed),
                (model.layout_changed, self.update_series_list.emit),
                (model.model_reset, self.series_reset.emit),
                (model.header_data_changed, self._on_header_data_changed),
            ]
            for signal, slot in self._model_links:
                signal.connect(slot)

        if self._completed:
            self.update_series_list.emit()

    def _unlink_model(self) -> None:
        for signal, slot in self._model_links:
            signal.disconnect(slot)
        self._model_links = []

    @property
    def x_section_provider(self) -> SectionProvider | None:
        return self._x_section_provider

    @x_section_provider.setter
    def x_section_provider(self, provider: SectionProvider | None) -> None:
        self._x_section_provider = provider
        self.x_section_provider_changed.emit()
        if self._completed:
            self.update_series_list.emit()

    @property
    def y_section_provider(self) -> SectionProvider | None:
        return self._y_section_provider

    @y_section_provider.setter
    def y_section_provider(self, provider: SectionProvider | None) -> None:
        self._y_section_provider = provider
        self.y_section_provider_changed.emit()
        if self._completed:
            self.update_series_list.emit()

    def _rename_all(self) -> None:
        if self._completed:
            for i in range(len(self._series_list)):
                self.initialize_series_name(i)

    @property
    def x_section_role(self) -> int:
        return self._x_section_role

    @x_section_role.setter
    def x_section_role(self, role: int) -> None:
        if role != self._x_section_role:
            self._x_section_role = role
            self.x_section_role_changed.emit()
            self._rename_all()

    @property
    def y_section_role(self) -> int:
        return self._y_section_role

    @y_section_role.setter
    def y_section_role(self, role: int) -> None:
        if role != self._y_section_role:
            self._y_section_role = role
            self.y_section_role_changed.emit()
            self._rename_all()

    @property
    def series_name_section(self) -> int:
        """0 names a series after its x column header, 1 after its y column header."""
        return self._series_name_section

    @series_name_section.setter
    def series_name_section(self, value: int) -> None:
        if value != self._series_name_section and value in (0, 1):
            self._series_name_section = value
            self.series_name_section_changed.emit()
            self._rename_all()

    @property
    def averaging_interval(self) -> int:
        """Width of the x window over which y values are averaged; 1 means no averaging."""
        return self._averaging_interval

    @averaging_interval.setter
    def averaging_interval(self, value: int) -> None:
        if value != self._averaging_interval and value != 0:
            self._averaging_interval = value
            self.averaging_interval_changed.emit()
            for i in range(len(self._series_list)):
                self.initialize_series(i)

    # sections

    def x_section(self, index: int) -> int:
        if not callable(self._x_section_provider):
            return index * 2
        return int(self._x_section_provider(index))

    def y_section(self, index: int) -> int:
        if not callable(self._y_section_provider):
            return index * 2 + 1
        return int(self._y_section_provider(index))

    def _name_section(self, index: int) -> int:
        return self.y_section(index) if self._series_name_section == 1 else self.x_section(index)

    def number_of_lines(self) -> int:
        """How many series the model can fill with the current section providers."""
        if self._model is None:
            return 0
        columns = self._model.column_count()
        count = 0
        for i in range(columns):
            sx, sy = self.x_section(i), self.y_section(i)
            if sx < 0 or sy < 0 or sx >= columns or sy >= columns:
                break
            count += 1
        return count

    # series list

    def _new_domain(self) -> RangeDomain:
        domain = RangeDomain()
        domain.updated.connect(self.update_domain)
        return domain

    def append(self, series: XYSeries) -> None:
        self._series_list.append(series)
        self.initialize_series_name(len(self._series_list) - 1)
        self._domain_list.append(self._new_domain())
        self.initialize_series(len(self._series_list) - 1)

    def insert(self, index: int, series: XYSeries) -> None:
        self._series_list.insert(index, series)
        self.initialize_series_name(index)
        self._domain_list.insert(index, self._new_domain())
        self.initialize_series(index)

    def remove_at(self, index: int) -> None:
        """Remove the series at index; raises IndexError when out of range."""
        if not 0 <= index < len(self._series_list):
            raise IndexError(f"series index {index} out of range")
        del self._series_list[index]
        self._domain_list.pop(index).updated.disconnect(self.update_domain)
        self.update_domain()

    def remove_all(self) -> None:
        if self._domain_list:
            self.domain.reset()
        self._series_list.clear()
        for domain in self._domain_list:
            domain.updated.disconnect(self.update_domain)
        self._domain_list.clear()

    def domain_at(self, index: int) -> RangeDomain | None:
        if not 0 <= index < len(self._domain_list):
            return None
        return self._domain_list[index]

    def update_domain(self) -> None:
        """Set the overall domain to span every visible, non-empty series."""
        if not self._domain_list:
            self.domain.reset()
            return
        if len(self._domain_list) == 1:
            if _is_visible(self._series_list[0]):
                d = self._domain_list[0]
                self.domain.set_ranges(d.min_x, d.max_x, d.min_y, d.max_y)
            else:
                self.domain.reset()
            return

        used = [
            d for s, d in zip(self._series_list, self._domain_list)
            if _is_visible(s) and len(s) > 0
        ]
        if not used:
            self.domain.reset()
            return
        self.domain.set_ranges(
            min(d.min_x for d in used),
            max(d.max_x for d in used),
            min(d.min_y for d in used),
            max(d.max_y for d in used),
        )

    # filling

    def initialize_series_name(self, index: int) -> None:
        if not 0 <= index < len(self._series_list) or self._model is None:
            return
        value = self._model.header_data(self._name_section(index), Orientation.HORIZONTAL)
        self._series_list[index].name = "" if value is None else str(value)

    def _value(self, row: int, column: int, role: int) -> float | None:
        if not self._model.has_index(row, column):
            return None
        return _read_value(self._model.data(row, column, role))

    def _read_point(self, row: int, xs: int, ys: int) -> Point | None:
        x = self._value(row, xs, self._x_section_role)
        if x is None:
            return None
        y = self._value(row, ys, self._y_section_role)
        if y is None:
            return None
        return (x, y)

    def _clear(self, index: int) -> None:
        self._series_list[index].clear()
        self._domain_list[index].reset()

    def _averaged_points(self, first: Point, rows: int, xs: int, ys: int) -> list[Point]:
        points = [first]
        last = 0.0
        start, total = first
        count = 1
        for row in range(1, rows):
            point = self._read_point(row, xs, ys)
            if point is None:
                break
            x, y = point
            if x - start < self._averaging_interval:
                total += y
                count += 1
            else:
                points.append(((start + last) / 2.0 if last > 0 else start, total / count))
                start, total, count = x, y, 1
            last = x
        if count > 0:
            points.append(((start + last) / 2.0 if last > 0 else start, total / count))
        return points

    def initialize_series(self, index: int) -> None:
        """Refill one series from the model and fit its domain to the points."""
        if not 0 <= index < len(self._series_list):
            return
        if self._model is None:
            self._clear(index)
            return

        columns = self._model.column_count()
        rows = self._model.row_count()
        xs, ys = self.x_section(index), self.y_section(index)
        if columns <= xs or columns <= ys or rows == 0:
            self._clear(index)
            return

        first = self._read_point(0, xs, ys)
        if first is None:
            self._clear(index)
            return

        if self._averaging_interval == 1:
            points = [first]
            for row in range(1, rows):
                point = self._read_point(row, xs, ys)
                if point is None:
                    break
                points.append(point)
        else:
            points = self._averaged_points(first, rows, xs, ys)

        self._series_list[index].replace(points)
        xs_values = [p[0] for p in points]
        ys_values = [p[1] for p in points]
        self._domain_list[index].set_ranges(
            min(xs_values), max(xs_values), min(ys_values), max(ys_values)
        )

    # model notifications

    def _on_model_destroyed(self) -> None:
        self._unlink_model()
        self._model = None
        self.series_reset.emit()

    def _on_data_changed(self, top_left: Cell, bottom_right: Cell, roles: Sequence[int] = ()) -> None:
        if DISPLAY_ROLE not in roles or self._model is None:
            return
        left, right = top_left[1], bottom_right[1]
        started = False
        for i in range(self._model.column_count()):
            sx, sy = self.x_section(i), self.y_section(i)
            if sx < 0 or sy < 0:
                break
            if left <= sx <= right or left <= sy <= right:
                self.initialize_series(i)
                started = True
            elif started:
                break

    def _on_rows_changed(self, start: int, end: int) -> None:
        for i in range(len(self._series_list)):
            self.initialize_series(i)

    def _affected_series(self, start: int, end: int, limit: int) -> tuple[int, int]:
        start_index, count = -1, 0
        for i in range(limit):
            sx, sy = self.x_section(i), self.y_section(i)
            if sx < 0 or sy < 0:
                break
            if start <= sx <= end or start <= sy <= end:
                if start_index == -1:
                    start_index = i
                count += 1
            elif start_index != -1:
                break
        return start_index, count

    def _on_columns_inserted(self, start: int, end: int) -> None:
        self.insert_series.emit(*self._affected_series(start, end, self._model.column_count()))

    def _on_columns_removed(self, start: int, end: int) -> None:
        self.remove_series.emit(*self._affected_series(start, end, self._model.column_count() + end))

    def _on_header_data_changed(self, orientation: Orientation, start: int, end: int) -> None:
        if orientation == Orientation.VERTICAL or self._model is None:
            return
        started = False
        for i in range(self._model.column_count()):
            section = self._name_section(i)
            if section < 0:
                break
            if start <= section <= end:
                self.initialize_series_name(i)
                started = True
            elif started:
                break