"""Live smoke tests against the real OpenWeather API.

Run with: OPENWEATHER_API_KEY=... pytest -m live --run-live
"""

import pytest

from weatherworld.config import Settings
from weatherworld.forecast.normalizer import fetch_forecast
from weatherworld.providers.openweather import OpenWeatherClient
from weatherworld.services.geocoding import forward_geocode, reverse_geocode

pytestmark = pytest.mark.live


@pytest.fixture(scope="module")
def live_client():
    settings = Settings.from_env()
    if not settings.has_api_key:
        pytest.skip("OPENWEATHER_API_KEY not set")
    return OpenWeatherClient(settings)


class TestLiveOpenWeather:
    """End-to-end checks that the free endpoints still match our parsing."""

    def test_forward_geocode(self, live_client):
        places = forward_geocode(live_client, "Abuja,NG")

        assert places
        assert places[0].country == "NG"

    def test_reverse_geocode(self, live_client):
        places = reverse_geocode(live_client, 9.0765, 7.3986, "NG")

        assert len(places) == 1

    def test_forecast(self, live_client):
        bundle = fetch_forecast(live_client, 9.0765, 7.3986, "metric")

        assert bundle.current.temp is not None
        assert len(bundle.hourly) == 12
        assert 5 <= len(bundle.daily) <= 7
        days = [day.dt for day in bundle.daily]
        assert days == sorted(days)
