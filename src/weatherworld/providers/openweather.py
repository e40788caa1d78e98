"""OpenWeather HTTP client for the free-tier geocoding and weather endpoints.

Endpoints used:
- Direct geocoding:  /geo/1.0/direct
- Reverse geocoding: /geo/1.0/reverse
- Current weather:   /data/2.5/weather
- 5-day/3-hour:      /data/2.5/forecast

The client never interprets bodies; it returns the status code and the
decoded body so callers decide what counts as a failure.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from weatherworld.config import Settings
from weatherworld.errors import ConfigurationError

logger = logging.getLogger(__name__)

DIRECT_GEOCODE_PATH = "/geo/1.0/direct"
REVERSE_GEOCODE_PATH = "/geo/1.0/reverse"
CURRENT_WEATHER_PATH = "/data/2.5/weather"
FORECAST_PATH = "/data/2.5/forecast"

# Status reported when the provider could not be reached at all
TRANSPORT_ERROR_STATUS = 502


@dataclass
class UpstreamResponse:
    """Status and decoded body of one upstream call.

    Attributes:
        status_code: HTTP status returned by the provider
        body: JSON-decoded body, or the raw text when it is not JSON
    """

    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class OpenWeatherClient:
    """Thin wrapper around the OpenWeather REST API.

    Example:
        >>> client = OpenWeatherClient(Settings.from_env())
        >>> resp = client.geocode_direct("Abuja,NG")
        >>> resp.ok, resp.body[0]["name"]
        (True, 'Abuja')
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        """Initialize the client.

        Args:
            settings: Settings carrying the API key, base URL and timeout
            session: Optional requests session (a new one is created if omitted)
        """
        self.settings = settings
        self.session = session or requests.Session()

    def require_api_key(self) -> str:
        """Return the API key, or fail before any request is made.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not self.settings.api_key:
            raise ConfigurationError("Missing API key")
        return self.settings.api_key

    def _get(self, path: str, params: dict[str, Any]) -> UpstreamResponse:
        key = self.require_api_key()
        url = f"{self.settings.base_url.rstrip('/')}{path}"
        logger.debug(f"GET {url} {params}")

        try:
            response = self.session.get(
                url,
                params={**params, "appid": key},
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"OpenWeather {path} request failed: {e}")
            return UpstreamResponse(status_code=TRANSPORT_ERROR_STATUS, body={"error": str(e)})

        try:
            body = response.json()
        except ValueError:
            body = response.text

        if not 200 <= response.status_code < 300:
            logger.warning(f"OpenWeather {path} returned {response.status_code}")
        return UpstreamResponse(status_code=response.status_code, body=body)

    def geocode_direct(self, query: str, limit: int = 5) -> UpstreamResponse:
        """Look up places matching a free-text query."""
        return self._get(DIRECT_GEOCODE_PATH, {"q": query, "limit": limit})

    def geocode_reverse(self, lat: float, lon: float, limit: int = 1) -> UpstreamResponse:
        """Look up places at a coordinate."""
        return self._get(REVERSE_GEOCODE_PATH, {"lat": lat, "lon": lon, "limit": limit})

    def current_weather(self, lat: float, lon: float, units: str = "metric") -> UpstreamResponse:
        """Fetch the current-conditions snapshot."""
        return self._get(CURRENT_WEATHER_PATH, {"lat": lat, "lon": lon, "units": units})

    def forecast(self, lat: float, lon: float, units: str = "metric") -> UpstreamResponse:
        """Fetch the 5-day forecast in 3-hour steps."""
        return self._get(FORECAST_PATH, {"lat": lat, "lon": lon, "units": units})
