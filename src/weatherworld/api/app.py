"""FastAPI application for place search and normalized forecasts.

Provides REST API endpoints for:
- Forward geocoding (/api/geocode)
- Reverse geocoding (/api/reverse)
- Normalized forecasts (/api/forecast)
- Health checks

Example:
    >>> from weatherworld.api import create_app
    >>> app = create_app()
    >>> # Run with: uvicorn weatherworld.api.app:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weatherworld import __version__
from weatherworld.api.schemas import (
    ErrorResponse,
    ForecastBundle,
    HealthResponse,
    PlaceCandidate,
)
from weatherworld.config import Settings
from weatherworld.errors import ValidationError, WeatherWorldError
from weatherworld.forecast.normalizer import fetch_forecast
from weatherworld.providers.openweather import OpenWeatherClient
from weatherworld.services.geocoding import forward_geocode, reverse_geocode
from weatherworld.utils.formatters import UNITS

logger = logging.getLogger(__name__)

API_VERSION = __version__

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid parameter"},
    500: {"model": ErrorResponse, "description": "Server credential missing"},
}


def parse_coordinates(lat: Optional[str], lon: Optional[str]) -> tuple[float, float]:
    """Parse required lat/lon query parameters.

    Raises:
        ValidationError: If either value is missing or not a number
    """
    if not lat or not lon:
        raise ValidationError("Missing lat/lon")
    try:
        return float(lat), float(lon)
    except ValueError:
        raise ValidationError("Invalid lat/lon")


def parse_units(units: Optional[str]) -> str:
    """Validate the units parameter, defaulting to metric."""
    units = units or "metric"
    if units not in UNITS:
        raise ValidationError(f"Invalid units: {units}. Must be one of {', '.join(UNITS)}")
    return units


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[OpenWeatherClient] = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Settings (read from the environment if omitted)
        client: OpenWeather client (built from ``settings`` if omitted)

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings.from_env()
    client = client or OpenWeatherClient(settings)

    app = FastAPI(
        title="Weather Worldwide API",
        description="Place search and normalized current/hourly/daily weather",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if not settings.has_api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; data endpoints will return 500")

    @app.exception_handler(WeatherWorldError)
    async def weatherworld_error_handler(request: Request, exc: WeatherWorldError):
        """Map domain errors to their JSON envelope and status."""
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed: {exc.message} ({exc.status_code})")
        else:
            logger.info(f"{request.url.path} rejected: {exc.message} ({exc.status_code})")
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with the same envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True),
        )

    @app.get("/", tags=["info"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Weather Worldwide API",
            "version": API_VERSION,
            "docs": "/docs",
        }

    @app.get("/health", response_model=HealthResponse, tags=["info"])
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            api_key_configured=settings.has_api_key,
            version=API_VERSION,
        )

    @app.get(
        "/api/geocode",
        response_model=list[PlaceCandidate],
        responses=ERROR_RESPONSES,
        tags=["places"],
    )
    def geocode(q: Optional[str] = None):
        """Find up to 5 places matching a free-text query."""
        return forward_geocode(client, q or "")

    @app.get(
        "/api/reverse",
        response_model=list[PlaceCandidate],
        responses=ERROR_RESPONSES,
        tags=["places"],
    )
    def reverse(lat: Optional[str] = None, lon: Optional[str] = None):
        """Resolve a coordinate to at most one place."""
        lat_f, lon_f = parse_coordinates(lat, lon)
        return reverse_geocode(client, lat_f, lon_f, settings.default_country)

    @app.get(
        "/api/forecast",
        response_model=ForecastBundle,
        responses=ERROR_RESPONSES,
        tags=["weather"],
    )
    def forecast(
        lat: Optional[str] = None,
        lon: Optional[str] = None,
        units: Optional[str] = None,
    ):
        """Current conditions, 12 forecast steps and up to 7 daily aggregates."""
        lat_f, lon_f = parse_coordinates(lat, lon)
        return fetch_forecast(client, lat_f, lon_f, parse_units(units), settings.tz())

    return app


# Default app instance for uvicorn
app = create_app()
