"""Shared utilities for weatherworld."""

from .formatters import (
    UNITS,
    format_day,
    format_time,
    icon_url,
    local_hour,
    location_label,
    start_of_day,
    temperature_label,
    units_label,
    wind_label,
)

__all__ = [
    "UNITS",
    "format_day",
    "format_time",
    "icon_url",
    "local_hour",
    "location_label",
    "start_of_day",
    "temperature_label",
    "units_label",
    "wind_label",
]
