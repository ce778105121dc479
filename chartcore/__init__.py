"""Chart domains, axes, line series, input handlers and table-to-series mappers without a GUI toolkit."""

__version__ = "0.1.0"

__all__ = [
    "axis",
    "chartview",
    "datetimeaxis",
    "domain",
    "draghandler",
    "enums",
    "logaxis",
    "rangedomain",
    "series",
    "serieslistmapper",
    "xymapper",
]