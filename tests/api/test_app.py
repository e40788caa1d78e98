"""Tests for the weatherworld API.

Tests use FastAPI TestClient with an OpenWeather client double.
"""

from unittest.mock import Mock

import pytest
import requests
from fastapi.testclient import TestClient

from weatherworld.api import create_app
from weatherworld.api.app import parse_coordinates, parse_units
from weatherworld.config import Settings
from weatherworld.errors import ConfigurationError, ValidationError
from weatherworld.providers.openweather import OpenWeatherClient, UpstreamResponse


@pytest.fixture
def client(settings, fake_client):
    """Create test client with an OpenWeather double."""
    return TestClient(create_app(settings=settings, client=fake_client))


@pytest.fixture
def keyless_client():
    """Test client for a server without an API key (real client, no calls made)."""
    return TestClient(create_app(settings=Settings(api_key="")))


class TestParsers:
    """Tests for query parameter parsing."""

    def test_coordinates(self):
        assert parse_coordinates("9.07", "-7.5") == (9.07, -7.5)

    @pytest.mark.parametrize("lat,lon", [(None, "1"), ("1", None), ("", ""), (None, None)])
    def test_missing_coordinates(self, lat, lon):
        with pytest.raises(ValidationError, match="Missing lat/lon"):
            parse_coordinates(lat, lon)

    def test_invalid_coordinates(self):
        with pytest.raises(ValidationError, match="Invalid lat/lon"):
            parse_coordinates("north", "7")

    def test_units_default(self):
        assert parse_units(None) == "metric"
        assert parse_units("imperial") == "imperial"

    def test_invalid_units(self):
        with pytest.raises(ValidationError):
            parse_units("kelvin")


class TestInfoEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "Weather Worldwide API"

    def test_health(self, client):
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["api_key_configured"] is True

    def test_health_without_key(self, keyless_client):
        assert keyless_client.get("/health").json()["api_key_configured"] is False


class TestGeocodeEndpoint:
    """Tests for /api/geocode."""

    def test_success(self, client, fake_client):
        response = client.get("/api/geocode", params={"q": "Lagos"})

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        assert data[0]["name"] == "Lagos"
        assert data[0]["state"] == "Lagos State"
        fake_client.geocode_direct.assert_called_once_with("Lagos", limit=5)

    def test_missing_query(self, client):
        response = client.get("/api/geocode")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing city query"}

    def test_missing_key(self, keyless_client):
        """A missing key is a 500 with no details."""
        response = keyless_client.get("/api/geocode", params={"q": "Lagos"})

        assert response.status_code == 500
        assert response.json() == {"error": "Missing API key"}

    def test_upstream_status_passed_through(self, client, fake_client):
        body = {"cod": 429, "message": "Too many requests"}
        fake_client.geocode_direct.return_value = UpstreamResponse(429, body)

        response = client.get("/api/geocode", params={"q": "Lagos"})

        assert response.status_code == 429
        assert response.json() == {"error": "OpenWeather geocode failed", "details": body}

    def test_unreachable_provider(self, settings):
        """A connection failure still answers with the JSON envelope."""
        session = Mock()
        session.get.side_effect = requests.ConnectionError("refused")
        app = create_app(settings=settings, client=OpenWeatherClient(settings, session=session))

        response = TestClient(app).get("/api/geocode", params={"q": "Lagos"})

        assert response.status_code == 502
        assert response.json() == {
            "error": "OpenWeather geocode failed",
            "details": {"error": "refused"},
        }


class TestReverseEndpoint:
    """Tests for /api/reverse."""

    def test_success(self, client):
        response = client.get("/api/reverse", params={"lat": "9.07", "lon": "7.49"})

        assert response.status_code == 200
        assert response.json()[0]["name"] == "Abuja"

    def test_missing_lon(self, client):
        response = client.get("/api/reverse", params={"lat": "9.07"})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing lat/lon"}

    def test_empty(self, client, fake_client):
        fake_client.geocode_reverse.return_value = UpstreamResponse(200, [])
        assert client.get("/api/reverse", params={"lat": "0", "lon": "0"}).json() == []


class TestForecastEndpoint:
    """Tests for /api/forecast."""

    def test_success(self, client, fake_client):
        response = client.get("/api/forecast", params={"lat": "9.07", "lon": "7.49", "units": "imperial"})

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "free_current+5day_forecast"
        assert data["current"]["temp"] == 29.4
        assert len(data["hourly"]) == 12
        assert len(data["daily"]) == 6
        assert set(data["daily"][0]["temp"]) == {"min", "max"}
        fake_client.current_weather.assert_called_once_with(9.07, 7.49, "imperial")

    def test_default_units(self, client, fake_client):
        client.get("/api/forecast", params={"lat": "9.07", "lon": "7.49"})
        fake_client.forecast.assert_called_once_with(9.07, 7.49, "metric")

    def test_invalid_units(self, client):
        response = client.get("/api/forecast", params={"lat": "9.07", "lon": "7.49", "units": "kelvin"})
        assert response.status_code == 400

    def test_missing_coordinates(self, client):
        response = client.get("/api/forecast")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing lat/lon"}

    def test_missing_key_before_fetch(self, client, fake_client):
        fake_client.require_api_key.side_effect = ConfigurationError("Missing API key")

        response = client.get("/api/forecast", params={"lat": "9.07", "lon": "7.49"})

        assert response.status_code == 500
        assert response.json() == {"error": "Missing API key"}
        fake_client.current_weather.assert_not_called()

    def test_upstream_failure(self, client, fake_client):
        fake_client.forecast.return_value = UpstreamResponse(404, {"cod": "404", "message": "city not found"})

        response = client.get("/api/forecast", params={"lat": "9.07", "lon": "7.49"})

        assert response.status_code == 404
        assert response.json() == {
            "error": "Forecast fetch failed",
            "details": {"cod": "404", "message": "city not found"},
        }
