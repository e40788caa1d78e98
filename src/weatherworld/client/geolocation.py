"""Geolocation capability for "use my location".

A geolocator returns the device coordinates or raises ``GeolocationError``
with a code telling an unsupported environment apart from a denied
permission or a failed lookup.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Callable, Protocol

from weatherworld.errors import GeolocationError

logger = logging.getLogger(__name__)

# Bounded wait for a position fix, in seconds
DEFAULT_TIMEOUT = 15.0


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


class Geolocator(Protocol):
    def locate(self) -> Coordinates:
        ...


class UnsupportedGeolocator:
    """Environment without any geolocation capability."""

    def locate(self) -> Coordinates:
        raise GeolocationError(GeolocationError.UNSUPPORTED)


class StaticGeolocator:
    """Always reports the same configured coordinates."""

    def __init__(self, lat: float, lon: float):
        self.coordinates = Coordinates(lat, lon)

    def locate(self) -> Coordinates:
        return self.coordinates


class CallableGeolocator:
    """Wraps a position lookup function with a bounded wait.

    The lookup runs on a worker thread. ``PermissionError`` raised by it
    maps to PERMISSION_DENIED, exceeding ``timeout`` to TIMEOUT, and any
    other failure to POSITION_UNAVAILABLE.

    Example:
        >>> geolocator = CallableGeolocator(lambda: (9.07, 7.49), timeout=15.0)
        >>> geolocator.locate()
        Coordinates(lat=9.07, lon=7.49)
    """

    def __init__(self, lookup: Callable[[], tuple[float, float]], timeout: float = DEFAULT_TIMEOUT):
        self.lookup = lookup
        self.timeout = timeout

    def locate(self) -> Coordinates:
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self.lookup)
        try:
            lat, lon = future.result(timeout=self.timeout)
            coordinates = Coordinates(float(lat), float(lon))
        except FutureTimeout:
            logger.warning(f"Position lookup exceeded {self.timeout:.0f}s")
            raise GeolocationError(GeolocationError.TIMEOUT, "Position lookup timed out")
        except PermissionError as e:
            raise GeolocationError(GeolocationError.PERMISSION_DENIED, str(e))
        except GeolocationError:
            raise
        except Exception as e:
            logger.warning(f"Position lookup failed: {e}")
            raise GeolocationError(GeolocationError.POSITION_UNAVAILABLE, str(e))
        finally:
            # Do not block on a lookup that overran the wait
            executor.shutdown(wait=False)
        return coordinates
