"""HTTP API for weatherworld.

This module provides:

- create_app: Factory function to create the FastAPI application
- PlaceCandidate, ForecastBundle and the other data schemas

Note: create_app is lazy-loaded so the schemas can be imported without
FastAPI installed.
"""

# Schemas can be imported directly (only depend on pydantic)
from weatherworld.api.schemas import (
    CurrentConditions,
    DailyAggregate,
    ErrorResponse,
    ForecastBundle,
    HealthResponse,
    HourlySample,
    PlaceCandidate,
    SavedPlace,
    TemperatureRange,
    WeatherCondition,
)


def __getattr__(name):
    """Lazy load FastAPI-dependent components."""
    if name == "create_app":
        from weatherworld.api.app import create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "create_app",
    "CurrentConditions",
    "DailyAggregate",
    "ErrorResponse",
    "ForecastBundle",
    "HealthResponse",
    "HourlySample",
    "PlaceCandidate",
    "SavedPlace",
    "TemperatureRange",
    "WeatherCondition",
]
