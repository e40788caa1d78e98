"""Tests for display formatters."""

from datetime import datetime, timedelta, timezone

import pytest

from weatherworld.api.schemas import PlaceCandidate
from weatherworld.utils.formatters import (
    EMPTY,
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

UTC = timezone.utc
# Monday 2026-01-05 15:30 UTC
TS = int(datetime(2026, 1, 5, 15, 30, tzinfo=UTC).timestamp())


class TestTime:
    """Tests for timestamp helpers."""

    def test_start_of_day(self):
        assert start_of_day(TS, UTC) == int(datetime(2026, 1, 5, tzinfo=UTC).timestamp())

    def test_start_of_day_other_zone(self):
        """At UTC+10 the same instant is already Tuesday."""
        tz = timezone(timedelta(hours=10))
        assert start_of_day(TS, tz) == int(datetime(2026, 1, 6, tzinfo=tz).timestamp())

    def test_local_hour(self):
        assert local_hour(TS, UTC) == 15
        assert local_hour(TS, timezone(timedelta(hours=-5))) == 10

    def test_format_time(self):
        assert format_time(TS, UTC) == "15:30"

    def test_format_day(self):
        assert format_day(TS, UTC) == "Mon, Jan 5"


class TestWind:
    """Tests for wind speed labels."""

    def test_metric_converted_to_kmh(self):
        assert wind_label("metric", 5) == "18 km/h"

    def test_imperial(self):
        assert wind_label("imperial", 7.4) == "7 mph"

    @pytest.mark.parametrize("value", [None, "fast", True])
    def test_not_numeric(self, value):
        assert wind_label("metric", value) == EMPTY


class TestTemperature:
    def test_rounded(self):
        assert temperature_label(23.6, "metric") == "24°C"
        assert temperature_label(-0.4, "imperial") == "0°F"

    def test_missing(self):
        assert temperature_label(None, "metric") == f"{EMPTY}°C"

    def test_units_label(self):
        assert units_label("metric") == "°C / km/h"
        assert units_label("imperial") == "°F / mph"


class TestIcons:
    def test_medium(self):
        assert icon_url("10d") == "https://openweathermap.org/img/wn/10d@2x.png"

    def test_small(self):
        assert icon_url("10d", size="sm") == "https://openweathermap.org/img/wn/10d.png"

    def test_missing(self):
        assert icon_url(None) == ""
        assert icon_url("") == ""


class TestLocationLabel:
    def test_with_state(self):
        place = PlaceCandidate(name="Abuja", lat=9.07, lon=7.49, country="NG", state="FCT")
        assert location_label(place) == f"Abuja, FCT {EMPTY} NG"

    def test_without_state(self):
        place = PlaceCandidate(name="Kano", lat=12.0, lon=8.5, country="NG")
        assert location_label(place) == f"Kano {EMPTY} NG"

    def test_nothing_selected(self):
        assert location_label(None) == "No location selected"
