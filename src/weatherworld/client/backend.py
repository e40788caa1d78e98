"""Backends the client uses to reach geocoding and forecast data.

``HttpBackend`` talks to the weatherworld API over HTTP. ``ServiceBackend``
calls the same adapters in-process and reports failures with the exact
payloads the API would have returned, so the client behaves identically
with either.
"""

import logging
from typing import Any, Optional, Protocol

import requests

from weatherworld.api.schemas import ForecastBundle, PlaceCandidate
from weatherworld.config import Settings
from weatherworld.errors import BackendError, WeatherWorldError
from weatherworld.forecast.normalizer import fetch_forecast
from weatherworld.providers.openweather import OpenWeatherClient
from weatherworld.services.geocoding import forward_geocode, reverse_geocode

logger = logging.getLogger(__name__)


class WeatherBackend(Protocol):
    """Operations the client orchestrator depends on.

    Non-success outcomes raise ``BackendError``; transport problems raise
    whatever the transport raises.
    """

    def geocode(self, query: str) -> list[PlaceCandidate]:
        ...

    def reverse(self, lat: float, lon: float) -> list[PlaceCandidate]:
        ...

    def forecast(self, lat: float, lon: float, units: str) -> ForecastBundle:
        ...


class HttpBackend:
    """Backend calling the weatherworld HTTP API with requests."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        response = self.session.get(f"{self.base_url}{path}", params=params)
        try:
            data = response.json()
        except ValueError:
            data = response.text
        if not response.ok:
            raise BackendError(response.status_code, data)
        return data

    def _places(self, data: Any, status_code: int = 200) -> list[PlaceCandidate]:
        if not isinstance(data, list):
            raise BackendError(status_code, data)
        return [PlaceCandidate(**item) for item in data]

    def geocode(self, query: str) -> list[PlaceCandidate]:
        return self._places(self._get("/api/geocode", {"q": query}))

    def reverse(self, lat: float, lon: float) -> list[PlaceCandidate]:
        return self._places(self._get("/api/reverse", {"lat": lat, "lon": lon}))

    def forecast(self, lat: float, lon: float, units: str) -> ForecastBundle:
        data = self._get("/api/forecast", {"lat": lat, "lon": lon, "units": units})
        return ForecastBundle.model_validate(data)


class ServiceBackend:
    """Backend calling the adapters and the normalizer in-process."""

    def __init__(self, client: OpenWeatherClient, settings: Settings):
        self.client = client
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceBackend":
        return cls(OpenWeatherClient(settings), settings)

    def geocode(self, query: str) -> list[PlaceCandidate]:
        try:
            return forward_geocode(self.client, query)
        except WeatherWorldError as e:
            raise BackendError(e.status_code, e.to_payload()) from e

    def reverse(self, lat: float, lon: float) -> list[PlaceCandidate]:
        try:
            return reverse_geocode(self.client, lat, lon, self.settings.default_country)
        except WeatherWorldError as e:
            raise BackendError(e.status_code, e.to_payload()) from e

    def forecast(self, lat: float, lon: float, units: str) -> ForecastBundle:
        try:
            return fetch_forecast(self.client, lat, lon, units, self.settings.tz())
        except WeatherWorldError as e:
            raise BackendError(e.status_code, e.to_payload()) from e
