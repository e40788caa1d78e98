"""Shared pytest fixtures for weatherworld tests.

Test Tiers:
- unit: Fast tests with fixtures, no network (default)
- live: Real OpenWeather calls, need OPENWEATHER_API_KEY and network

Run live tests with: pytest -m live --run-live
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from weatherworld.api.schemas import PlaceCandidate
from weatherworld.config import Settings
from weatherworld.providers.openweather import OpenWeatherClient, UpstreamResponse

# 2026-01-05 09:00 UTC, first step of the sample forecast
FORECAST_START = int(datetime(2026, 1, 5, 9, tzinfo=timezone.utc).timestamp())
STEP_SECONDS = 3 * 3600


def pytest_addoption(parser):
    """Add command line options for test configuration."""
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run live API tests (slow, requires network)",
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: fast unit tests using fixtures")
    config.addinivalue_line("markers", "live: real API tests (slow, requires network)")


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --run-live is specified."""
    if config.getoption("--run-live"):
        return

    skip_live = pytest.mark.skip(reason="need --run-live option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def make_step():
    """Factory for one forecast step as the provider sends it."""

    def _make_step(dt, temp=20.0, description="clear sky", icon="01d"):
        return {
            "dt": dt,
            "main": {"temp": temp, "feels_like": temp + 1, "humidity": 60},
            "weather": [{"id": 800, "main": "Clear", "description": description, "icon": icon}],
            "wind": {"speed": 3.0},
            "dt_txt": datetime.fromtimestamp(dt, timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
        }

    return _make_step


@pytest.fixture
def current_payload() -> dict:
    """Sample /data/2.5/weather body."""
    return {
        "coord": {"lon": 7.49, "lat": 9.07},
        "weather": [{"id": 802, "main": "Clouds", "description": "scattered clouds", "icon": "03d"}],
        "main": {"temp": 29.4, "feels_like": 32.1, "humidity": 70, "pressure": 1011},
        "wind": {"speed": 3.1, "deg": 220},
        "dt": 1767603600,
        "name": "Abuja",
    }


@pytest.fixture
def forecast_payload(make_step) -> dict:
    """Sample /data/2.5/forecast body: 40 steps from 2026-01-05 09:00 UTC.

    Calendar days in UTC: Jan 5 (5 steps), Jan 6-9 (8 each), Jan 10 (3).
    Temperatures rise by one degree per step starting at 10.
    """
    steps = [make_step(FORECAST_START + i * STEP_SECONDS, temp=10.0 + i) for i in range(40)]
    return {"cod": "200", "cnt": len(steps), "list": steps, "city": {"name": "Abuja"}}


@pytest.fixture
def geocode_payload() -> list:
    """Sample /geo/1.0/direct body."""
    return [
        {"name": "Lagos", "lat": 6.4550575, "lon": 3.3941795, "country": "NG", "state": "Lagos State"},
        {"name": "Lagos", "lat": 37.1019, "lon": -8.6730, "country": "PT", "state": "Faro"},
    ]


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with a test key, UTC day buckets and a temporary store."""
    return Settings(api_key="test-key", timezone="UTC", store_path=tmp_path / "prefs.json")


@pytest.fixture
def fake_client(current_payload, forecast_payload, geocode_payload) -> Mock:
    """OpenWeatherClient double answering every endpoint with 200."""
    client = Mock(spec=OpenWeatherClient)
    client.require_api_key.return_value = "test-key"
    client.current_weather.return_value = UpstreamResponse(200, current_payload)
    client.forecast.return_value = UpstreamResponse(200, forecast_payload)
    client.geocode_direct.return_value = UpstreamResponse(200, geocode_payload)
    client.geocode_reverse.return_value = UpstreamResponse(
        200, [{"name": "Abuja", "lat": 9.0765, "lon": 7.3986, "country": "NG", "state": "FCT"}]
    )
    return client


@pytest.fixture
def abuja() -> PlaceCandidate:
    return PlaceCandidate(name="Abuja", lat=9.0765, lon=7.3986, country="NG", state="FCT")


@pytest.fixture
def lagos() -> PlaceCandidate:
    return PlaceCandidate(name="Lagos", lat=6.4550575, lon=3.3941795, country="NG", state="Lagos State")
