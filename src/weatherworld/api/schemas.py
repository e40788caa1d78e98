"""Pydantic schemas for places, normalized forecasts and API envelopes.

Defines all data models shared by the API, the normalizer and the client.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Units = Literal["metric", "imperial"]
Theme = Literal["light", "dark"]

FORECAST_SOURCE = "free_current+5day_forecast"

MAX_HOURLY = 12
MAX_DAILY = 7


class PlaceCandidate(BaseModel):
    """A resolved place returned by geocoding.

    Two candidates are the same place when their coordinates match,
    regardless of the label.

    Attributes:
        name: Place name
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        country: Country code
        state: State or region, when the provider has one
    """

    model_config = ConfigDict(frozen=True)

    name: str
    lat: float
    lon: float
    country: str
    state: Optional[str] = None

    def same_place(self, other: "PlaceCandidate") -> bool:
        """Check whether ``other`` has the same (lat, lon) pair."""
        return self.lat == other.lat and self.lon == other.lon


# Saved places are stored in exactly the candidate shape
SavedPlace = PlaceCandidate


class WeatherCondition(BaseModel):
    """Provider weather condition, extra provider keys kept as-is."""

    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    main: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None


class CurrentConditions(BaseModel):
    """Current conditions snapshot, projected without aggregation."""

    dt: Optional[int] = None
    temp: Optional[float] = None
    feels_like: Optional[float] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    weather: list[WeatherCondition] = Field(default_factory=list)


class HourlySample(BaseModel):
    """One 3-hour forecast step taken verbatim from the forecast list."""

    dt: Optional[int] = None
    temp: Optional[float] = None
    weather: list[WeatherCondition] = Field(default_factory=list)


class TemperatureRange(BaseModel):
    """Daily min/max; both None when no sample had a numeric temperature."""

    min: Optional[float] = None
    max: Optional[float] = None


class DailyAggregate(BaseModel):
    """One local calendar day of forecast samples.

    Attributes:
        dt: Local midnight of the day (Unix seconds)
        temp: Min/max over the day's samples
        weather: Conditions of the representative sample
    """

    dt: int
    temp: TemperatureRange
    weather: list[WeatherCondition] = Field(default_factory=list)


class ForecastBundle(BaseModel):
    """Normalized current/hourly/daily forecast for one place and unit system."""

    current: CurrentConditions
    hourly: list[HourlySample] = Field(default_factory=list, max_length=MAX_HOURLY)
    daily: list[DailyAggregate] = Field(default_factory=list, max_length=MAX_DAILY)
    source: str = FORECAST_SOURCE

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "current": {
                        "dt": 1760860800,
                        "temp": 29.4,
                        "feels_like": 32.1,
                        "humidity": 70,
                        "wind_speed": 3.1,
                        "weather": [{"id": 802, "main": "Clouds",
                                     "description": "scattered clouds", "icon": "03d"}],
                    },
                    "hourly": [],
                    "daily": [],
                    "source": FORECAST_SOURCE,
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response.

    Attributes:
        status: Service status
        api_key_configured: Whether the upstream credential is present
        version: API version
    """

    status: str = Field(default="healthy", description="Service status")
    api_key_configured: bool = Field(default=False, description="Whether the API key is set")
    version: str = Field(default="1.0.0", description="API version")


class ErrorResponse(BaseModel):
    """Error response schema.

    Attributes:
        error: Short error message
        details: Upstream body, only present for upstream failures
    """

    error: str = Field(..., description="Error message")
    details: Optional[Any] = Field(default=None, description="Upstream response body")
