"""Forecast normalization for the free-tier OpenWeather endpoints."""

from weatherworld.forecast.normalizer import (
    aggregate_bucket,
    bucket_by_day,
    fetch_forecast,
    normalize_current,
    normalize_daily,
    normalize_forecast,
    normalize_hourly,
)

__all__ = [
    "aggregate_bucket",
    "bucket_by_day",
    "fetch_forecast",
    "normalize_current",
    "normalize_daily",
    "normalize_forecast",
    "normalize_hourly",
]
