"""Browser geolocation for "Use my location".

``get_geolocation()`` from streamlit_js_eval answers on a later rerun with
either ``{"coords": {...}}`` or ``{"error": {"code": ..., "message": ...}}``
(W3C PositionError codes). ``geolocator_from_position`` turns that answer
into a geolocator the controller can consume.
"""

import logging
from typing import Any, Optional

from streamlit_js_eval import get_geolocation

from weatherworld.client.geolocation import Coordinates, StaticGeolocator
from weatherworld.errors import GeolocationError

logger = logging.getLogger(__name__)

# W3C PositionError codes
POSITION_ERROR_CODES = {
    1: GeolocationError.PERMISSION_DENIED,
    2: GeolocationError.POSITION_UNAVAILABLE,
    3: GeolocationError.TIMEOUT,
}


class FailedGeolocator:
    """Geolocator replaying a failure reported by the browser."""

    def __init__(self, code: str, reason: str = ""):
        self.code = code
        self.reason = reason

    def locate(self) -> Coordinates:
        raise GeolocationError(self.code, self.reason)


def geolocator_from_position(position: Any):
    """Build a geolocator from a browser geolocation answer.

    Args:
        position: Value returned by ``get_geolocation()``

    Returns:
        StaticGeolocator for a position fix, FailedGeolocator otherwise
    """
    if isinstance(position, dict):
        coords = position.get("coords")
        if isinstance(coords, dict) and "latitude" in coords and "longitude" in coords:
            return StaticGeolocator(float(coords["latitude"]), float(coords["longitude"]))
        error = position.get("error")
        if isinstance(error, dict):
            code = POSITION_ERROR_CODES.get(error.get("code"), GeolocationError.POSITION_UNAVAILABLE)
            return FailedGeolocator(code, str(error.get("message", "")))
    logger.debug(f"Unrecognized geolocation answer: {position!r}")
    return FailedGeolocator(GeolocationError.POSITION_UNAVAILABLE)


def request_browser_position(key: str = "geolocation") -> Optional[Any]:
    """Ask the browser for its position; None until the browser answers."""
    return get_geolocation(component_key=key)
