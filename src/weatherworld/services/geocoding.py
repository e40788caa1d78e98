"""Forward and reverse geocoding adapters.

Both adapters translate between a query and a list of PlaceCandidates and
surface upstream failures unchanged; there is no other business logic.
"""

import logging
from typing import Any

from weatherworld.api.schemas import PlaceCandidate
from weatherworld.errors import UpstreamFailure, ValidationError
from weatherworld.forecast.schema import PLACE_FIELDS, extract, has_required
from weatherworld.providers.openweather import OpenWeatherClient

logger = logging.getLogger(__name__)

GEOCODE_LIMIT = 5
REVERSE_LIMIT = 1

# Name used when the coordinate cannot be resolved to a named place
MY_LOCATION = "My location"


def _candidates(body: Any, limit: int) -> list[PlaceCandidate]:
    places = []
    for item in body[:limit]:
        fields = extract(item, PLACE_FIELDS)
        if not has_required(fields, PLACE_FIELDS):
            logger.debug(f"Dropping geocode result without coordinates: {item!r}")
            continue
        places.append(PlaceCandidate(**fields))
    return places


def forward_geocode(
    client: OpenWeatherClient,
    query: str,
    limit: int = GEOCODE_LIMIT,
) -> list[PlaceCandidate]:
    """Look up places by free-text query.

    Args:
        client: OpenWeather client
        query: Place name, e.g. "Lagos,NG"
        limit: Maximum number of candidates (provider ranking kept)

    Returns:
        Up to ``limit`` candidates; an empty list is a valid answer

    Raises:
        ValidationError: If the query is blank
        ConfigurationError: If the API key is missing
        UpstreamFailure: If the provider answered with a non-success status
    """
    query = (query or "").strip()
    if not query:
        raise ValidationError("Missing city query")

    res = client.geocode_direct(query, limit=limit)
    if not res.ok:
        raise UpstreamFailure("OpenWeather geocode failed", res.status_code, res.body)
    if not isinstance(res.body, list):
        raise UpstreamFailure("Unexpected geocode response", 502, res.body)

    places = _candidates(res.body, limit)
    logger.info(f"Geocode {query!r}: {len(places)} candidate(s)")
    return places


def fallback_place(lat: float, lon: float, default_country: str) -> PlaceCandidate:
    """Candidate for a coordinate the provider could not name."""
    return PlaceCandidate(name=MY_LOCATION, lat=lat, lon=lon, country=default_country)


def reverse_geocode(
    client: OpenWeatherClient,
    lat: float,
    lon: float,
    default_country: str,
) -> list[PlaceCandidate]:
    """Resolve a coordinate to at most one place.

    Unresolved fields of the provider's answer are filled in: the name
    becomes "My location", the country ``default_country`` and the
    coordinates those of the query.

    Raises:
        ConfigurationError: If the API key is missing
        UpstreamFailure: If the provider answered with a non-success status
    """
    res = client.geocode_reverse(lat, lon, limit=REVERSE_LIMIT)
    if not res.ok:
        raise UpstreamFailure("OpenWeather reverse geocode failed", res.status_code, res.body)
    if not isinstance(res.body, list) or not res.body:
        return []

    fields = extract(res.body[0], PLACE_FIELDS)
    return [
        PlaceCandidate(
            name=fields["name"] or MY_LOCATION,
            lat=fields["lat"] if fields["lat"] is not None else lat,
            lon=fields["lon"] if fields["lon"] is not None else lon,
            country=fields["country"] or default_country,
            state=fields["state"],
        )
    ]
