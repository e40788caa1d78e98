"""Upstream weather and geocoding providers."""

from .openweather import OpenWeatherClient, UpstreamResponse

__all__ = ["OpenWeatherClient", "UpstreamResponse"]
