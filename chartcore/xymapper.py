"""Keep an x/y series in step with two columns of a table model."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Any, Callable

from chartcore.domain import Signal
from chartcore.rangedomain import Orientation

DISPLAY_ROLE = 0

Point = tuple[float, float]
Cell = tuple[int, int]


def to_real(value: Any) -> float:
    """Convert a model value to a float.

    Dates and datetimes become milliseconds since the epoch (naive values are
    taken as local time); anything that cannot be read as a number gives 0.0.
    """
    if isinstance(value, datetime):
        return value.timestamp() * 1000.0
    if isinstance(value, date):
        return datetime.combine(value, time()).timestamp() * 1000.0
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class TableModel:
    """An in-memory table of values per role, reporting every change through signals."""

    def __init__(self, rows: Iterable[Sequence[Any]] = (), column_count: int | None = None) -> None:
        materialized = [list(r) for r in rows]
        if column_count is None:
            column_count = max((len(r) for r in materialized), default=0)
        self._columns = column_count
        self._cells = [self._make_row(r) for r in materialized]
        self._headers: dict[Orientation, dict[int, Any]] = {
            Orientation.HORIZONTAL: {},
            Orientation.VERTICAL: {},
        }

        self.data_changed = Signal()
        self.rows_inserted = Signal()
        self.rows_removed = Signal()
        self.columns_inserted = Signal()
        self.columns_removed = Signal()
        self.destroyed = Signal()
        self.layout_changed = Signal()
        self.model_reset = Signal()
        self.header_data_changed = Signal()

    def _make_row(self, values: Sequence[Any]) -> list[dict[int, Any]]:
        values = list(values)
        if len(values) > self._columns:
            raise ValueError(f"row has {len(values)} values but the model has {self._columns} columns")
        values += [None] * (self._columns - len(values))
        return [{DISPLAY_ROLE: v} for v in values]

    def row_count(self) -> int:
        return len(self._cells)

    def column_count(self) -> int:
        return self._columns

    def has_index(self, row: int, column: int) -> bool:
        return 0 <= row < len(self._cells) and 0 <= column < self._columns

    def data(self, row: int, column: int, role: int = DISPLAY_ROLE) -> Any:
        """The value stored for a cell and role, or None when there is none."""
        if not self.has_index(row, column):
            return None
        return self._cells[row][column].get(role)

    def set_data(self, row: int, column: int, value: Any, role: int = DISPLAY_ROLE) -> None:
        if not self.has_index(row, column):
            raise IndexError(f"cell ({row}, {column}) out of range")
        self._cells[row][column][role] = value
        self.data_changed.emit((row, column), (row, column), (role,))

    def header_data(self, section: int, orientation: Orientation) -> Any:
        return self._headers[Orientation(orientation)].get(section)

    def set_header_data(self, section: int, orientation: Orientation, value: Any) -> None:
        orientation = Orientation(orientation)
        self._headers[orientation][section] = value
        self.header_data_changed.emit(orientation, section, section)

    def _shift_headers(self, orientation: Orientation, start: int, delta: int) -> None:
        shifted: dict[int, Any] = {}
        for section, value in self._headers[orientation].items():
            if section < start:
                shifted[section] = value
            elif delta < 0 and section < start - delta:
                continue
            else:
                shifted[section + delta] = value
        self._headers[orientation] = shifted

    @staticmethod
    def _check_count(count: int) -> None:
        if count < 1:
            raise ValueError("count must be at least 1")

    def insert_rows(self, row: int, rows: Iterable[Sequence[Any]]) -> None:
        """Insert rows of display values before the given row."""
        if not 0 <= row <= len(self._cells):
            raise IndexError(f"row {row} out of range")
        new_rows = [self._make_row(r) for r in rows]
        if not new_rows:
            return
        self._cells[row:row] = new_rows
        self._shift_headers(Orientation.VERTICAL, row, len(new_rows))
        self.rows_inserted.emit(row, row + len(new_rows) - 1)

    def remove_rows(self, row: int, count: int) -> None:
        self._check_count(count)
        if row < 0 or row + count > len(self._cells):
            raise IndexError(f"rows {row}..{row + count - 1} out of range")
        del self._cells[row:row + count]
        self._shift_headers(Orientation.VERTICAL, row, -count)
        self.rows_removed.emit(row, row + count - 1)

    def insert_columns(self, column: int, columns: Iterable[Sequence[Any]]) -> None:
        """Insert columns, each given as its display values from the top row down."""
        if not 0 <= column <= self._columns:
            raise IndexError(f"column {column} out of range")
        new_columns = [list(c) for c in columns]
        if not new_columns:
            return
        rows = len(self._cells)
        for values in new_columns:
            if len(values) > rows:
                raise ValueError(f"column has {len(values)} values but the model has {rows} rows")
            values += [None] * (rows - len(values))
        for r, cells in enumerate(self._cells):
            cells[column:column] = [{DISPLAY_ROLE: values[r]} for values in new_columns]
        self._columns += len(new_columns)
        self._shift_headers(Orientation.HORIZONTAL, column, len(new_columns))
        self.columns_inserted.emit(column, column + len(new_columns) - 1)

    def remove_columns(self, column: int, count: int) -> None:
        self._check_count(count)
        if column < 0 or column + count > self._columns:
            raise IndexError(f"columns {column}..{column + count - 1} out of range")
        for cells in self._cells:
            del cells[column:column + count]
        self._columns -= count
        self._shift_headers(Orientation.HORIZONTAL, column, -count)
        self.columns_removed.emit(column, column + count - 1)

    def reset(self, rows: Iterable[Sequence[Any]]) -> None:
        """Replace every row at once."""
        materialized = [list(r) for r in rows]
        self._columns = max((len(r) for r in materialized), default=self._columns)
        self._cells = [self._make_row(r) for r in materialized]
        self._headers[Orientation.VERTICAL] = {}
        self.model_reset.emit()

    def destroy(self) -> None:
        """Tell observers that the model is going away."""
        self.destroyed.emit()


class XYSeries:
    """A named list of x/y points."""

    def __init__(self, name: str = "", points: Iterable[Point] = ()) -> None:
        self.name = name
        self._points: list[Point] = [(float(x), float(y)) for x, y in points]
        self.points_replaced = Signal()
        self.destroyed = Signal()

    @property
    def points(self) -> list[Point]:
        return list(self._points)

    def replace(self, points: Iterable[Point]) -> None:
        self._points = [(float(x), float(y)) for x, y in points]
        self.points_replaced.emit()

    def clear(self) -> None:
        self._points.clear()

    def append(self, point: Point) -> None:
        x, y = point
        self._points.append((float(x), float(y)))

    def remove(self, index: int, count: int = 1) -> None:
        """Remove count points starting at index; raises IndexError when out of range."""
        if count < 1 or index < 0 or index + count > len(self._points):
            raise IndexError(f"points {index}..{index + count - 1} out of range")
        del self._points[index:index + count]

    def destroy(self) -> None:
        self.destroyed.emit()

    def __len__(self) -> int:
        return len(self._points)


class XYMapper:
    """Fills a series from an x column and a y column of a model and follows its changes."""

    def __init__(self, model: TableModel | None = None, series: XYSeries | None = None) -> None:
        self._model: TableModel | None = None
        self._series: XYSeries | None = None
        self._blocked = False
        self.orientation = Orientation.VERTICAL

        self._x_section = 0
        self._y_section = 1
        self._first = 0
        self._count = -1
        self._series_name_section = -1

        self._model_links: list[tuple[Signal, Callable[..., Any]]] = []

        self.series_changed = Signal()
        self.model_changed = Signal()
        self.x_section_changed = Signal()
        self.y_section_changed = Signal()
        self.first_changed = Signal()
        self.count_changed = Signal()
        self.series_name_section_changed = Signal()

        if series is not None:
            self.series = series
        if model is not None:
            self.model = model

    @property
    def model(self) -> TableModel | None:
        return self._model

    @model.setter
    def model(self, model: TableModel | None) -> None:
        if model is self._model:
            return
        for signal, slot in self._model_links:
            signal.disconnect(slot)
        self._model_links = []

        self._model = model
        self.model_changed.emit()

        if model is not None:
            self._model_links = [
                (model.data_changed, self._on_data_changed),
                (model.rows_inserted, self._on_rows_inserted),
                (model.rows_removed, self._on_rows_removed),
                (model.columns_inserted, self._on_columns_changed),
                (model.columns_removed, self._on_columns_changed),
                (model.destroyed, self._on_model_destroyed),
                (model.layout_changed, self.refresh),
                (model.model_reset, self.refresh),
                (model.header_data_changed, self._on_header_data_changed),
            ]
            for signal, slot in self._model_links:
                signal.connect(slot)

        self._initialize_series_name()
        self.refresh()

    @property
    def series(self) -> XYSeries | None:
        return self._series

    @series.setter
    def series(self, series: XYSeries | None) -> None:
        if series is self._series:
            return
        if self._series is not None:
            self._series.destroyed.disconnect(self._on_series_destroyed)
        self._series = series
        self.series_changed.emit()
        if series is None:
            return
        series.destroyed.connect(self._on_series_destroyed)
        self._initialize_series_name()
        self.refresh()

    @property
    def x_section(self) -> int:
        return self._x_section

    @x_section.setter
    def x_section(self, value: int) -> None:
        if value == self._x_section:
            return
        self._x_section = value
        self.x_section_changed.emit()
        self.refresh()

    @property
    def y_section(self) -> int:
        return self._y_section

    @y_section.setter
    def y_section(self, value: int) -> None:
        if value == self._y_section:
            return
        self._y_section = value
        self.y_section_changed.emit()
        self.refresh()

    @property
    def first(self) -> int:
        return self._first

    @first.setter
    def first(self, value: int) -> None:
        if value == self._first:
            return
        self._first = max(0, value)
        self.first_changed.emit()
        self.refresh()

    @property
    def count(self) -> int:
        """Number of rows mapped; -1 means every row from first on."""
        return self._count

    @count.setter
    def count(self, value: int) -> None:
        if value == self._count:
            return
        self._count = max(-1, value)
        self.count_changed.emit()
        self.refresh()

    @property
    def series_name_section(self) -> int:
        """Column whose header names the series; -1 leaves the name alone."""
        return self._series_name_section

    @series_name_section.setter
    def series_name_section(self, value: int) -> None:
        if value == self._series_name_section:
            return
        self._series_name_section = value
        self.series_name_section_changed.emit()
        if value != -1:
            self._initialize_series_name()

    @property
    def model_size(self) -> int:
        if self._model is None:
            return 0
        if self.orientation == Orientation.VERTICAL:
            return self._model.row_count()
        return self._model.column_count()

    @property
    def last(self) -> int:
        """One past the last row that is mapped."""
        size = self.model_size
        if self._count < 0 or self._first + self._count >= size:
            return size
        return self._first + self._count

    @contextmanager
    def _blocking(self) -> Iterator[None]:
        self._blocked = True
        try:
            yield
        finally:
            self._blocked = False

    def _points(self) -> list[Point]:
        model = self._model
        if model is None:
            return []
        columns = model.column_count()
        if not (0 <= self._x_section < columns and 0 <= self._y_section < columns):
            return []
        points = []
        for row in range(self._first, self.last):
            if not model.has_index(row, self._x_section) or not model.has_index(row, self._y_section):
                break
            points.append((to_real(model.data(row, self._x_section)), to_real(model.data(row, self._y_section))))
        return points

    def refresh(self) -> None:
        """Rebuild every point of the series from the model."""
        if self._series is None:
            return
        with self._blocking():
            self._series.replace(self._points())

    def _header_orientation(self) -> Orientation:
        if self.orientation == Orientation.VERTICAL:
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL

    def _initialize_series_name(self) -> None:
        if self._series is None or self._model is None:
            return
        header_orientation = self._header_orientation()
        size = (
            self._model.column_count()
            if header_orientation == Orientation.HORIZONTAL
            else self._model.row_count()
        )
        if not 0 <= self._series_name_section < size:
            return
        value = self._model.header_data(self._series_name_section, header_orientation)
        self._series.name = "" if value is None else str(value)

    def _on_series_destroyed(self) -> None:
        self._series = None

    def _on_model_destroyed(self) -> None:
        for signal, slot in self._model_links:
            signal.disconnect(slot)
        self._model_links = []
        self._model = None
        self.refresh()

    def _on_data_changed(self, top_left: Cell, bottom_right: Cell, roles: Sequence[int] = ()) -> None:
        if self._blocked or DISPLAY_ROLE not in roles:
            return
        top_row, left_column = top_left
        bottom_row, right_column = bottom_right
        if self._first > bottom_row or self.last < top_row:
            return
        if self._x_section > right_column and self._y_section > right_column:
            return
        if self._x_section < left_column and self._y_section < left_column:
            return
        self.refresh()

    def _on_rows_inserted(self, start: int, end: int) -> None:
        if self._blocked:
            return
        if start <= self._first or start <= self.last:
            self.refresh()

    def _on_rows_removed(self, start: int, end: int) -> None:
        if self._blocked or self._series is None:
            return
        if len(self._series) < start:
            return
        with self._blocking():
            last = self.last
            if self._first <= start < last or self._first <= end < last:
                index = start - self._first
                count = end - start + 1
                if index < 0:
                    count += index
                    index = 0
                count = min(count, len(self._series) - index)
                if count > 0:
                    self._series.remove(index, count)

    def _on_columns_changed(self, start: int, end: int) -> None:
        if self._blocked:
            return
        if start <= self._x_section or start <= self._y_section:
            self.refresh()

    def _on_header_data_changed(self, orientation: Orientation, start: int, end: int) -> None:
        if self._series is None or self._series_name_section == -1:
            return
        if orientation != self._header_orientation():
            return
        if start <= self._series_name_section <= end:
            self._initialize_series_name()