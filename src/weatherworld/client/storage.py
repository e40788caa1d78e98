"""Durable key/value storage for client preferences.

Two independent keys are persisted: the theme and the saved-places list.
Reading never fails: absent or corrupt content falls back to the defaults
(system-preferred theme, empty list).

Usage:
    from weatherworld.client.storage import JsonFileStore, load_preferences

    store = JsonFileStore(Path("~/.weatherworld/preferences.json").expanduser())
    theme, places = load_preferences(store, prefers_dark=False)
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from weatherworld.api.schemas import SavedPlace
from weatherworld.client.state import normalize_saved_places

logger = logging.getLogger(__name__)

# Storage keys
THEME_KEY = "theme"
SAVED_PLACES_KEY = "weatherworld_saved_v1"

THEMES = ("light", "dark")

_saved_places_adapter = TypeAdapter(list[SavedPlace])


class KeyValueStore(Protocol):
    """String key/value storage in the shape of browser localStorage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-process store, used for tests and sessions without persistence."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class JsonFileStore:
    """Store backed by a single JSON object on disk.

    A missing or unreadable file behaves like an empty store; every
    ``set_item`` rewrites the file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# Pure functions for testing (no storage dependency)
def parse_theme(raw: Optional[str], prefers_dark: bool = False) -> str:
    """Parse a stored theme, falling back to the system preference.

    Args:
        raw: Stored value, or None
        prefers_dark: Whether the environment prefers a dark color scheme

    Returns:
        "light" or "dark"
    """
    if raw in THEMES:
        return raw
    return "dark" if prefers_dark else "light"


def parse_saved_places(raw: Optional[str]) -> list[SavedPlace]:
    """Parse the saved-places JSON array.

    Args:
        raw: JSON string from storage, or None

    Returns:
        Saved places, de-duplicated by (lat, lon) and capped. Empty list on
        absent or invalid input.
    """
    if not raw:
        return []
    try:
        places = _saved_places_adapter.validate_json(raw)
    except SchemaError:
        logger.warning("Ignoring corrupt saved places in storage")
        return []
    return list(normalize_saved_places(places))


def serialize_saved_places(places) -> str:
    """Serialize saved places to a JSON array string."""
    return _saved_places_adapter.dump_json(list(places), exclude_none=True).decode("utf-8")


def load_preferences(store: KeyValueStore, prefers_dark: bool = False) -> tuple[str, list[SavedPlace]]:
    """Read theme and saved places from ``store``; never raises."""
    try:
        raw_theme = store.get_item(THEME_KEY)
        raw_places = store.get_item(SAVED_PLACES_KEY)
    except Exception as e:
        logger.warning(f"Could not read preferences: {e}")
        raw_theme, raw_places = None, None
    return parse_theme(raw_theme, prefers_dark), parse_saved_places(raw_places)


def save_theme(store: KeyValueStore, theme: str) -> None:
    store.set_item(THEME_KEY, theme)


def save_places(store: KeyValueStore, places) -> None:
    store.set_item(SAVED_PLACES_KEY, serialize_saved_places(places))
