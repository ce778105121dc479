# chartcore

Chart geometry and data plumbing with no GUI toolkit underneath. The package
works out ranges, plot areas, tick labels, polyline vertices and the effect of
pan and zoom gestures. Drawing the result is left to the caller.

## Modules

- `chartcore.domain`: `XYDomain` holds the visible x/y range. It can
  `move`, `zoom_in`, `zoom_out`, `zoom` to an explicit range, `set_scale`
  (clamped by `mid_zoom` to 0.05..100) and `reset_transform` back to the last
  range set before any transform. Range changes are reported through
  `Signal` objects (`updated`, `range_horizontal_changed`,
  `range_vertical_changed`). `fuzzy_compare` is the float comparison used
  throughout.
- `chartcore.axis`: `ValueAxis` is a linear axis. `map_to_position` and
  `map_to_value` convert between data values and positions inside the plot
  area. `update_axis_settings` computes tick intervals, a label `factor` and
  `offset` for very large or very small values, and the label `precision`.
  `y_labels`, `x_labels` and `correction_text` give the label texts, and
  `layout` computes the plot area from the label sizes. The sizes come from
  `measure_text`, which is `default_measure_text` unless you pass your own.
  `calc_factor`, `count_of_digits`, `Rect` and `AxisType` are also public.
- `chartcore.logaxis`: `LogValueAxis` uses a base-10 logarithmic scale in
  both directions. Values set through `set_min_x` and the like are clamped to
  at least 1e-20. `y_ticks` and `x_ticks` return `LogTick` grid lines. On the
  vertical axis the minor lines are labelled too; on the horizontal axis only
  the decades are.
- `chartcore.datetimeaxis`: `DateTimeAxis` is a `ValueAxis` whose x values
  are seconds since the epoch. Its x labels use `date_format` (default
  `dd:MM:yyyy`) in `time_spec` (`TimeSpec.UTC` by default). `secs_to_string`
  and `format_datetime` format with `d`, `M`, `y`, `h`, `H`, `m`, `s`, `z` and
  `AP` patterns and quoted literal text.
- `chartcore.series`: `LineSeries` holds samples and fits its own domain to
  them. Once attached to an axis with `set_axis`, it follows the axis' plot
  area. `vertices` returns the polyline in local coordinates, on a log scale
  when the axis is a `LogValueAxis`. `line_vertices` and `log_line_vertices`
  do the projection on their own.
- `chartcore.chartview`: `ChartView` owns one axis and a list of series. It
  has `create_series` (colours are taken from a fixed palette, or picked at
  random once the palette runs out), `series_at`, `remove_series`,
  `remove_all_series`, `clear`, `set_geometry` and `component_complete`. Its
  `force_axis_range` fits the axis to the line series and pads the y range by
  a twentieth.
- `chartcore.draghandler`: `AxisDragHandler` turns input on an axis into
  changes of its domain. A left drag pans, a right drag zooms to the dragged
  rectangle, the wheel zooms in or out, and a two-finger pinch scales. It
  works through `mouse_press`, `mouse_move`, `mouse_release`, `wheel` and
  `touch` (with `TouchPhase`). The `Mode` values are `MARKER`, `ZOOMING` and
  `INACTION`. Logarithmic axes are not panned or zoomed.
- `chartcore.rangedomain`: `RangeDomain` is a plain min/max holder. It starts
  at 1..2 on both axes and reports changes. `Orientation` picks the direction.
- `chartcore.xymapper`: `TableModel` is an in-memory table that signals
  every change. `XYSeries` is a named list of points. `XYMapper` keeps one
  series filled from an x column and a y column, within `first` and `count`.
  `to_real` turns dates and datetimes into milliseconds since the epoch.
- `chartcore.serieslistmapper`: `XYSeriesListMapper` fills many series. By
  default series `i` takes columns `2*i` and `2*i+1`; callables in
  `x_section_provider` and `y_section_provider` can change that. It can
  average y values over an x window (`averaging_interval`). It keeps one
  `RangeDomain` per series and a combined `domain`.
- `chartcore.enums`: `ChartAxes`, `OpenGlUsage`, `XYSeriesType` and
  `ChartHandlerMode`.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

A chart with one line:

```python
from chartcore.axis import ValueAxis
from chartcore.chartview import ChartView
from chartcore.series import SeriesType

view = ChartView()
view.set_axis(ValueAxis())
view.set_geometry(640, 480)

line = view.create_series(SeriesType.LINE, "temperature", "")
line.set_samples([(0.0, 12.5), (1.0, 14.0), (2.0, 13.2)])

view.force_axis_range(True)
print(view.map_to_position((1.0, 14.0)))
print(line.vertices())
```

Zooming a domain and undoing it:

```python
from chartcore.domain import XYDomain

d = XYDomain()
d.set_range(0, 10, 0, 100)
d.zoom_in()                      # 1..9 and 10..90
d.reset_transform()              # back to 0..10 and 0..100
print(d.min_x, d.max_x, d.min_y, d.max_y)
```

Mapping a table onto series:

```python
from chartcore.xymapper import TableModel, XYSeries, XYMapper
from chartcore.serieslistmapper import XYSeriesListMapper

model = TableModel([[0, 1.0], [1, 4.0], [2, 9.0]])
series = XYSeries()
mapper = XYMapper(model, series)
print(series.points)

lists = XYSeriesListMapper(model)
lists.append(XYSeries())
print(lists.domain.min_y, lists.domain.max_y)
```

## What it does not do

chartcore does no drawing. It opens no window, saves no images and does not
print. It has no command-line program. Axes, series and handlers produce
numbers and label strings; painting them, and feeding real input events to
`AxisDragHandler`, is up to the application that uses the package.