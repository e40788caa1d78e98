"""Current, hourly and daily forecast panels.

The table builders are pure functions over a ForecastBundle so they can be
tested without Streamlit; the ``render_*`` functions only lay them out.
"""

from datetime import tzinfo
from typing import Optional

import pandas as pd
import streamlit as st

from weatherworld.api.schemas import ForecastBundle, WeatherCondition
from weatherworld.utils.formatters import (
    EMPTY,
    format_day,
    format_time,
    icon_url,
    location_label,
    temperature_label,
    units_label,
    wind_label,
)

HOURLY_COLUMNS = ["time", "icon", "temp", "conditions"]
DAILY_COLUMNS = ["day", "icon", "conditions", "low", "high"]


def _condition(weather: list[WeatherCondition]) -> Optional[WeatherCondition]:
    return weather[0] if weather else None


def _description(weather: list[WeatherCondition]) -> str:
    condition = _condition(weather)
    if condition is None:
        return EMPTY
    return condition.description or condition.main or EMPTY


def _icon(weather: list[WeatherCondition], size: str = "md") -> str:
    condition = _condition(weather)
    return icon_url(condition.icon if condition else None, size)


def current_summary(bundle: ForecastBundle, units: str) -> dict[str, str]:
    """Display labels for the summary card.

    Returns:
        Dict with temp, feels_like, humidity, wind, conditions, icon
    """
    current = bundle.current
    humidity = f"{current.humidity:.0f}%" if current.humidity is not None else EMPTY
    return {
        "temp": temperature_label(current.temp, units),
        "feels_like": temperature_label(current.feels_like, units),
        "humidity": humidity,
        "wind": wind_label(units, current.wind_speed),
        "conditions": _description(current.weather),
        "icon": _icon(current.weather),
    }


def hourly_frame(bundle: ForecastBundle, units: str, tz: Optional[tzinfo] = None) -> pd.DataFrame:
    """One row per hourly sample, in provider order."""
    rows = [
        {
            "time": format_time(sample.dt, tz) if sample.dt is not None else EMPTY,
            "icon": _icon(sample.weather, "sm"),
            "temp": temperature_label(sample.temp, units),
            "conditions": _description(sample.weather),
        }
        for sample in bundle.hourly
    ]
    return pd.DataFrame(rows, columns=HOURLY_COLUMNS)


def daily_frame(bundle: ForecastBundle, units: str, tz: Optional[tzinfo] = None) -> pd.DataFrame:
    """One row per calendar day, earliest first."""
    rows = [
        {
            "day": format_day(day.dt, tz),
            "icon": _icon(day.weather, "sm"),
            "conditions": _description(day.weather),
            "low": temperature_label(day.temp.min, units),
            "high": temperature_label(day.temp.max, units),
        }
        for day in bundle.daily
    ]
    return pd.DataFrame(rows, columns=DAILY_COLUMNS)


def render_current_card(bundle: ForecastBundle, place, units: str) -> None:
    """Render the summary card for the selected place."""
    summary = current_summary(bundle, units)
    st.subheader(location_label(place))

    col_icon, col_temp = st.columns([1, 4])
    with col_icon:
        if summary["icon"]:
            st.image(summary["icon"], width=80)
    with col_temp:
        st.metric("Now", summary["temp"], help=f"Units: {units_label(units)}")
        st.caption(summary["conditions"])

    col1, col2, col3 = st.columns(3)
    col1.metric("Feels like", summary["feels_like"])
    col2.metric("Humidity", summary["humidity"])
    col3.metric("Wind", summary["wind"])


def render_hourly_strip(bundle: ForecastBundle, units: str, tz: Optional[tzinfo] = None) -> None:
    """Render the "Next 12 hours" strip."""
    st.markdown("**Next 12 hours**")
    frame = hourly_frame(bundle, units, tz)
    if frame.empty:
        st.info("No hourly data")
        return
    st.dataframe(
        frame,
        hide_index=True,
        use_container_width=True,
        column_config={"icon": st.column_config.ImageColumn("")},
    )


def render_daily_table(bundle: ForecastBundle, units: str, tz: Optional[tzinfo] = None) -> None:
    """Render the "Daily outlook" table."""
    st.markdown("**Daily outlook**")
    frame = daily_frame(bundle, units, tz)
    if frame.empty:
        st.info("No daily data")
        return
    st.dataframe(
        frame,
        hide_index=True,
        use_container_width=True,
        column_config={"icon": st.column_config.ImageColumn("")},
    )
