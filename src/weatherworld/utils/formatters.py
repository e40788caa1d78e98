"""Display formatting for timestamps, temperatures and wind speeds.

All timestamps are Unix seconds. A ``tz`` of None means the local timezone
of the running process.
"""

from datetime import datetime, tzinfo
from typing import Any, Optional

EMPTY = "—"  # em dash placeholder for missing values

ICON_BASE_URL = "https://openweathermap.org/img/wn"

UNITS = ("metric", "imperial")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_local(dt: float, tz: Optional[tzinfo] = None) -> datetime:
    """Convert a Unix timestamp to a datetime in ``tz``."""
    return datetime.fromtimestamp(dt, tz)


def start_of_day(dt: float, tz: Optional[tzinfo] = None) -> int:
    """Unix seconds of local midnight for the day containing ``dt``.

    Args:
        dt: Unix timestamp (seconds)
        tz: Timezone defining the calendar day

    Returns:
        Timestamp of 00:00:00 on that local calendar day
    """
    midnight = to_local(dt, tz).replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp())


def local_hour(dt: float, tz: Optional[tzinfo] = None) -> int:
    """Local hour-of-day (0-23) of a timestamp."""
    return to_local(dt, tz).hour


def format_time(dt: float, tz: Optional[tzinfo] = None) -> str:
    """Format a timestamp as a 24h time of day, e.g. ``"15:00"``."""
    return to_local(dt, tz).strftime("%H:%M")


def format_day(dt: float, tz: Optional[tzinfo] = None) -> str:
    """Format a timestamp as weekday and date, e.g. ``"Mon, Jan 5"``."""
    local = to_local(dt, tz)
    return f"{local:%a}, {local:%b} {local.day}"


def wind_label(units: str, wind_speed: Any) -> str:
    """Format a wind speed for display.

    The provider reports m/s for metric and mph for imperial; metric is
    shown in km/h.

    Args:
        units: "metric" or "imperial"
        wind_speed: Provider wind speed, may be missing

    Returns:
        e.g. "18 km/h", "7 mph", or a dash when the speed is not numeric
    """
    if not _is_number(wind_speed):
        return EMPTY
    if units == "metric":
        return f"{wind_speed * 3.6:.0f} km/h"
    return f"{wind_speed:.0f} mph"


def unit_symbol(units: str) -> str:
    return "C" if units == "metric" else "F"


def temperature_label(temp: Any, units: str) -> str:
    """Format a temperature rounded to whole degrees, e.g. ``"23°C"``."""
    value = f"{round(temp)}" if _is_number(temp) else EMPTY
    return f"{value}°{unit_symbol(units)}"


def units_label(units: str) -> str:
    """Label for the unit toggle."""
    return "°C / km/h" if units == "metric" else "°F / mph"


def icon_url(icon_code: Optional[str], size: str = "md") -> str:
    """OpenWeather condition icon URL; empty string when there is no icon."""
    if not icon_code:
        return ""
    suffix = "@2x" if size == "md" else ""
    return f"{ICON_BASE_URL}/{icon_code}{suffix}.png"


def location_label(place: Any) -> str:
    """Header label for the selected place, e.g. ``"Abuja, FCT — NG"``."""
    if place is None:
        return "No location selected"
    state = f", {place.state}" if place.state else ""
    return f"{place.name}{state} {EMPTY} {place.country}"
