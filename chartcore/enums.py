"""Enumerations shared by chart components."""

from __future__ import annotations

from enum import IntEnum


class ChartAxes(IntEnum):
    """How many axes a chart shows."""

    ONE_AXIS = 0
    MULTIPLE_HORIZONTAL_AXES = 1
    MULTIPLE_VERTICAL_AXES = 2
    MULTIPLE_AXES = 3


class OpenGlUsage(IntEnum):
    """Whether hardware-accelerated drawing is used."""

    USE = 0
    NOT_USE = 1
    AUTO = 2


class XYSeriesType(IntEnum):
    """Kinds of x/y series, numbered as in the charting toolkit's series types."""

    LINE = 0
    SCATTER = 6
    SPLINE = 7


class ChartHandlerMode(IntEnum):
    """What pointer interaction on a chart does."""

    MARKER = 0
    ZOOMING = 1
    INACTION = 2