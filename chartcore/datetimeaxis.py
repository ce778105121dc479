"""Value axis whose horizontal values are seconds since the epoch."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum

from chartcore.axis import AxisType, MeasureText, Rect, ValueAxis
from chartcore.domain import Signal, fuzzy_compare

_DAY_SHORT = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_DAY_LONG = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_SHORT = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTH_LONG = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class TimeSpec(IntEnum):
    LOCAL_TIME = 0
    UTC = 1


def _run_length(fmt: str, start: int) -> int:
    end = start
    while end < len(fmt) and fmt[end] == fmt[start]:
        end += 1
    return end - start


def format_datetime(moment: datetime, fmt: str) -> str:
    """Format a datetime with d/M/y/h/H/m/s/z/AP patterns and quoted literal text."""
    twelve_hour = "ap" in fmt.lower()
    out: list[str] = []
    i, n = 0, len(fmt)
    while i < n:
        c = fmt[i]
        if c == "'":
            if i + 1 < n and fmt[i + 1] == "'":
                out.append("'")
                i += 2
                continue
            i += 1
            while i < n:
                if fmt[i] == "'":
                    if i + 1 < n and fmt[i + 1] == "'":
                        out.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                out.append(fmt[i])
                i += 1
            continue
        if c in "Aa" and i + 1 < n and fmt[i + 1] in "Pp":
            text = "AM" if moment.hour < 12 else "PM"
            out.append(text if c == "A" else text.lower())
            i += 2
            continue

        run = _run_length(fmt, i)
        if c == "d":
            k = min(run, 4)
            out.append({1: str(moment.day), 2: f"{moment.day:02d}",
                        3: _DAY_SHORT[moment.weekday()], 4: _DAY_LONG[moment.weekday()]}[k])
        elif c == "M":
            k = min(run, 4)
            out.append({1: str(moment.month), 2: f"{moment.month:02d}",
                        3: _MONTH_SHORT[moment.month - 1], 4: _MONTH_LONG[moment.month - 1]}[k])
        elif c == "y" and run >= 2:
            k = 4 if run >= 4 else 2
            out.append(f"{moment.year:04d}" if k == 4 else f"{moment.year % 100:02d}")
        elif c in "hH":
            k = min(run, 2)
            hour = moment.hour
            if c == "h" and twelve_hour:
                hour = hour % 12 or 12
            out.append(f"{hour:02d}" if k == 2 else str(hour))
        elif c in "ms":
            k = min(run, 2)
            value = moment.minute if c == "m" else moment.second
            out.append(f"{value:02d}" if k == 2 else str(value))
        elif c == "z":
            k = 3 if run >= 3 else 1
            ms = moment.microsecond // 1000
            out.append(f"{ms:03d}" if k == 3 else str(ms))
        else:
            k = 1
            out.append(c)
        i += k
    return "".join(out)


def _from_secs(secs: int, spec: TimeSpec) -> datetime | None:
    try:
        if spec == TimeSpec.UTC:
            return datetime.fromtimestamp(secs, tz=timezone.utc)
        return datetime.fromtimestamp(secs)
    except (OverflowError, OSError, ValueError):
        return None


class DateTimeAxis(ValueAxis):
    """A value axis whose horizontal labels are dates; x values are seconds."""

    def __init__(self, measure_text: MeasureText | None = None) -> None:
        self._time_spec = TimeSpec.UTC
        self._date_format = "dd:MM:yyyy"
        self.time_spec_changed = Signal()
        self.date_format_changed = Signal()
        super().__init__(AxisType.DATETIME, measure_text)

    @property
    def time_spec(self) -> TimeSpec:
        return self._time_spec

    @time_spec.setter
    def time_spec(self, spec: TimeSpec) -> None:
        spec = TimeSpec(spec)
        if spec != self._time_spec:
            self._time_spec = spec
            self.time_spec_changed.emit()
            self.update()

    @property
    def date_format(self) -> str:
        return self._date_format

    @date_format.setter
    def date_format(self, value: str) -> None:
        if value != self._date_format:
            self._date_format = value
            self.date_format_changed.emit()
            self.update()

    format_y = date_format

    def secs_to_string(self, secs: int, fmt: str = "dd.MM.yyyy hh:mm:ss") -> str:
        """Format seconds since the epoch; an out-of-range moment gives an empty string."""
        moment = _from_secs(int(secs), self._time_spec)
        return "" if moment is None else format_datetime(moment, fmt)

    def y_labels(self) -> list[str]:
        if fuzzy_compare(1 + self.interval_y, 1):
            return []
        start = (self.domain.min_y - self.offset) / self.factor
        ticks = self._tick_count_y + 1
        return [f"{start + (ticks - i) * self.interval_y:.{self.precision}f}" for i in range(ticks + 1)]

    def x_labels(self) -> list[str]:
        if fuzzy_compare(1 + self.interval_x, 1):
            return []
        start = self.domain.min_x
        labels = []
        for i in range(self._tick_count_x + 2):
            moment = _from_secs(int(start + i * self.interval_x), self._time_spec)
            if moment is not None:
                labels.append(format_datetime(moment, self._date_format))
        return labels

    def layout(self) -> Rect:
        """Lay out the plot area around the vertical labels, which may be absent."""
        return super().layout()