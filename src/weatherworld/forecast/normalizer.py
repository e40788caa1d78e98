"""Normalize free-tier OpenWeather payloads into current/hourly/daily.

The free tier offers a current-conditions snapshot and a 5-day forecast in
3-hour steps. This module reshapes the two into a single
``ForecastBundle``:

- current: the snapshot fields, projected as-is
- hourly: the first 12 forecast steps, in order (about 36 hours)
- daily: forecast steps grouped by local calendar day, with min/max
  temperature and a representative condition (the 12:00 step if present)

Example:
    >>> client = OpenWeatherClient(Settings.from_env())
    >>> bundle = fetch_forecast(client, 9.07, 7.49, units="metric")
    >>> len(bundle.daily)
    5
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import tzinfo
from typing import Any, Optional

from weatherworld.api.schemas import (
    FORECAST_SOURCE,
    MAX_DAILY,
    MAX_HOURLY,
    CurrentConditions,
    DailyAggregate,
    ForecastBundle,
    HourlySample,
    TemperatureRange,
)
from weatherworld.errors import UpstreamFailure
from weatherworld.forecast.schema import (
    CURRENT_FIELDS,
    SAMPLE_FIELDS,
    extract,
    has_required,
)
from weatherworld.providers.openweather import OpenWeatherClient
from weatherworld.utils.formatters import local_hour, start_of_day

logger = logging.getLogger(__name__)

# Hour of day whose sample supplies the daily condition/icon
REPRESENTATIVE_HOUR = 12


def forecast_items(forecast_payload: Any) -> list:
    """The forecast ``list`` array, or [] when absent or malformed."""
    if isinstance(forecast_payload, dict) and isinstance(forecast_payload.get("list"), list):
        return forecast_payload["list"]
    return []


def normalize_current(current_payload: Any) -> CurrentConditions:
    """Project the current-conditions payload; missing fields become None."""
    return CurrentConditions(**extract(current_payload, CURRENT_FIELDS))


def normalize_hourly(items: list) -> list[HourlySample]:
    """Take the first 12 forecast steps verbatim, order preserved."""
    return [HourlySample(**extract(item, SAMPLE_FIELDS)) for item in items[:MAX_HOURLY]]


def bucket_by_day(items: list, tz: Optional[tzinfo] = None) -> dict[int, list[dict]]:
    """Group forecast steps by local calendar day.

    Args:
        items: Raw forecast steps, ascending by ``dt``
        tz: Timezone defining calendar days (None = process local time)

    Returns:
        Mapping of local-midnight timestamp to projected samples, keys in
        ascending order, samples in input order. Steps without a usable
        ``dt`` cannot be placed on a day and are left out.
    """
    buckets: dict[int, list[dict]] = {}
    for item in items:
        sample = extract(item, SAMPLE_FIELDS)
        if not has_required(sample, SAMPLE_FIELDS):
            logger.debug(f"Skipping forecast step without dt: {item!r}")
            continue
        buckets.setdefault(start_of_day(sample["dt"], tz), []).append(sample)
    return dict(sorted(buckets.items()))


def aggregate_bucket(
    day: int,
    samples: list[dict],
    tz: Optional[tzinfo] = None,
) -> DailyAggregate:
    """Reduce one day's samples to min/max and a representative condition.

    Samples without a numeric temperature do not contribute to min/max.
    The representative is the first sample at local hour 12, else the
    first sample of the day.
    """
    temps = [s["temp"] for s in samples if s["temp"] is not None]

    representative = next(
        (s for s in samples if local_hour(s["dt"], tz) == REPRESENTATIVE_HOUR),
        samples[0],
    )

    return DailyAggregate(
        dt=day,
        temp=TemperatureRange(
            min=min(temps) if temps else None,
            max=max(temps) if temps else None,
        ),
        weather=representative["weather"],
    )


def normalize_daily(items: list, tz: Optional[tzinfo] = None) -> list[DailyAggregate]:
    """Aggregate forecast steps into at most 7 ascending daily entries."""
    buckets = bucket_by_day(items, tz)
    return [
        aggregate_bucket(day, samples, tz)
        for day, samples in list(buckets.items())[:MAX_DAILY]
    ]


def normalize_forecast(
    current_payload: Any,
    forecast_payload: Any,
    tz: Optional[tzinfo] = None,
) -> ForecastBundle:
    """Build a ForecastBundle from two successful upstream payloads."""
    items = forecast_items(forecast_payload)
    return ForecastBundle(
        current=normalize_current(current_payload),
        hourly=normalize_hourly(items),
        daily=normalize_daily(items, tz),
        source=FORECAST_SOURCE,
    )


def fetch_forecast(
    client: OpenWeatherClient,
    lat: float,
    lon: float,
    units: str = "metric",
    tz: Optional[tzinfo] = None,
) -> ForecastBundle:
    """Fetch both upstream payloads concurrently and normalize them.

    Both calls are awaited before anything else happens. A failure of
    either aborts the whole operation; the current-conditions failure is
    reported first when both fail.

    Args:
        client: OpenWeather client
        lat: Latitude
        lon: Longitude
        units: "metric" or "imperial" (conversion is done by the provider)
        tz: Timezone for daily buckets

    Returns:
        Normalized ForecastBundle

    Raises:
        ConfigurationError: If the API key is missing (before any request)
        UpstreamFailure: If either upstream call did not succeed
    """
    client.require_api_key()
    logger.info(f"Fetching forecast for ({lat}, {lon}) in {units} units")

    with ThreadPoolExecutor(max_workers=2) as executor:
        current_future = executor.submit(client.current_weather, lat, lon, units)
        forecast_future = executor.submit(client.forecast, lat, lon, units)
        current_res = current_future.result()
        forecast_res = forecast_future.result()

    if not current_res.ok:
        raise UpstreamFailure(
            "Current weather fetch failed",
            status_code=current_res.status_code,
            details=current_res.body,
        )
    if not forecast_res.ok:
        raise UpstreamFailure(
            "Forecast fetch failed",
            status_code=forecast_res.status_code,
            details=forecast_res.body,
        )

    return normalize_forecast(current_res.body, forecast_res.body, tz)
