"""Error types shared by the API, the adapters and the client.

The HTTP layer maps every ``WeatherWorldError`` to a JSON envelope with
``to_payload()`` and ``status_code``; the client sees failed calls as
``BackendError`` carrying that envelope verbatim.
"""

from typing import Any, Optional


class WeatherWorldError(Exception):
    """Base class for all weatherworld errors.

    Attributes:
        message: Short human-readable message
        status_code: HTTP-style status reported to callers
    """

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_payload(self) -> dict[str, Any]:
        """JSON body returned to API callers."""
        return {"error": self.message}


class ValidationError(WeatherWorldError):
    """A required request parameter is missing or malformed."""

    status_code = 400


class ConfigurationError(WeatherWorldError):
    """A server-held credential is missing.

    Reported before any network call is attempted, and never carries
    upstream details.
    """

    status_code = 500


class UpstreamFailure(WeatherWorldError):
    """An upstream provider answered with a non-success status.

    Attributes:
        details: Upstream response body, passed through verbatim
    """

    def __init__(self, message: str, status_code: int, details: Any = None):
        super().__init__(message, status_code)
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class GeolocationError(Exception):
    """Geolocation is unavailable in the current environment.

    Attributes:
        code: One of the ``GeolocationError.*`` code constants
    """

    UNSUPPORTED = "unsupported"
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"

    def __init__(self, code: str, reason: str = ""):
        super().__init__(reason or code)
        self.code = code
        self.reason = reason

    @property
    def message(self) -> str:
        """User-facing message distinguishing the failure causes."""
        if self.code == self.UNSUPPORTED:
            return "Geolocation is not supported in this environment."
        if self.code == self.PERMISSION_DENIED:
            return "Location permission denied."
        return "Failed to get location."


class BackendError(Exception):
    """A backend call finished with a non-success status.

    Attributes:
        status_code: HTTP status of the failed call
        payload: JSON error body exactly as the server returned it
    """

    def __init__(self, status_code: int, payload: Any):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.payload = payload
