"""Runtime configuration loaded from environment variables."""

import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org"
DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_COUNTRY = "NG"
DEFAULT_STORE_PATH = Path.home() / ".weatherworld" / "preferences.json"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Settings:
    """Application settings.

    Attributes:
        api_key: OpenWeather API key (server-held credential)
        base_url: OpenWeather API root
        default_country: Country code used when reverse geocoding finds nothing
        timezone: IANA zone used for daily buckets (None = process local time)
        request_timeout: Timeout for upstream calls in seconds (None = no timeout)
        api_url: Base URL of the weatherworld API, used by the HTTP client backend
        store_path: JSON file holding client preferences for the CLI
        log_level: Logging level name
    """

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    default_country: str = DEFAULT_COUNTRY
    timezone: Optional[str] = None
    request_timeout: Optional[float] = None
    api_url: str = DEFAULT_API_URL
    store_path: Path = DEFAULT_STORE_PATH
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        timeout = os.environ.get("WEATHERWORLD_REQUEST_TIMEOUT")
        return cls(
            api_key=os.environ.get("OPENWEATHER_API_KEY", ""),
            base_url=os.environ.get("OPENWEATHER_BASE_URL", DEFAULT_BASE_URL),
            default_country=os.environ.get("WEATHERWORLD_DEFAULT_COUNTRY", DEFAULT_COUNTRY),
            timezone=os.environ.get("WEATHERWORLD_TIMEZONE") or None,
            request_timeout=float(timeout) if timeout else None,
            api_url=os.environ.get("WEATHERWORLD_API_URL", DEFAULT_API_URL),
            store_path=Path(os.environ.get("WEATHERWORLD_STORE_PATH", DEFAULT_STORE_PATH)),
            log_level=os.environ.get("WEATHERWORLD_LOG_LEVEL", "INFO"),
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def tz(self) -> Optional[tzinfo]:
        """Timezone for day bucketing, or None for the process local zone."""
        if not self.timezone:
            return None
        return ZoneInfo(self.timezone)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for CLI and server entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    # Keep connection chatter out of INFO output
    logging.getLogger("urllib3").setLevel(logging.WARNING)
