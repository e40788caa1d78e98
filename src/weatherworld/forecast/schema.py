"""Field schema for upstream OpenWeather records.

Every field read from a provider payload is declared here with its path,
expected kind and default. ``extract`` is the only place where a missing or
malformed field is replaced by its default, so substitution never raises.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

# Field kinds
NUMBER = "number"
INTEGER = "integer"
TIMESTAMP = "timestamp"
STRING = "string"
CONDITIONS = "conditions"


@dataclass(frozen=True)
class FieldSpec:
    """One projected field.

    Attributes:
        name: Output key
        path: Keys walked from the record root, e.g. ("main", "temp")
        kind: One of NUMBER, INTEGER, TIMESTAMP, STRING, CONDITIONS
        required: Whether downstream logic depends on the field
        default: Value used when the field is absent or of the wrong kind
    """

    name: str
    path: tuple[str, ...]
    kind: str
    required: bool = False
    default: Any = None


# Current-conditions payload (/data/2.5/weather)
CURRENT_FIELDS = (
    FieldSpec("dt", ("dt",), TIMESTAMP),
    FieldSpec("temp", ("main", "temp"), NUMBER),
    FieldSpec("feels_like", ("main", "feels_like"), NUMBER),
    FieldSpec("humidity", ("main", "humidity"), NUMBER),
    FieldSpec("wind_speed", ("wind", "speed"), NUMBER),
    FieldSpec("weather", ("weather",), CONDITIONS),
)

# One entry of the forecast "list" (/data/2.5/forecast)
SAMPLE_FIELDS = (
    FieldSpec("dt", ("dt",), TIMESTAMP, required=True),
    FieldSpec("temp", ("main", "temp"), NUMBER),
    FieldSpec("weather", ("weather",), CONDITIONS),
)

# One geocoding result (/geo/1.0/direct and /geo/1.0/reverse)
PLACE_FIELDS = (
    FieldSpec("name", ("name",), STRING, default=""),
    FieldSpec("lat", ("lat",), NUMBER, required=True),
    FieldSpec("lon", ("lon",), NUMBER, required=True),
    FieldSpec("country", ("country",), STRING, default=""),
    FieldSpec("state", ("state",), STRING),
)

CONDITION_KEYS = {"id": INTEGER, "main": STRING, "description": STRING, "icon": STRING}


def is_number(value: Any) -> bool:
    """True for ints and floats, but not bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coerce_integer(value: Any) -> Any:
    if is_number(value) and float(value).is_integer():
        return int(value)
    return None


def _coerce_timestamp(value: Any) -> Any:
    """Unix seconds that datetime can represent; anything else is missing."""
    seconds = _coerce_integer(value)
    if seconds is None:
        return None
    try:
        datetime.fromtimestamp(seconds, timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return seconds


def _coerce_conditions(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    conditions = []
    for item in value:
        if not isinstance(item, dict):
            continue
        condition = dict(item)
        for key, kind in CONDITION_KEYS.items():
            if key in condition:
                condition[key] = _coerce(condition[key], kind)
        conditions.append(condition)
    return conditions


def _coerce(value: Any, kind: str) -> Any:
    """Return ``value`` if it has the expected kind, else None."""
    if kind == NUMBER:
        return value if is_number(value) else None
    if kind == INTEGER:
        return _coerce_integer(value)
    if kind == TIMESTAMP:
        return _coerce_timestamp(value)
    if kind == STRING:
        return value if isinstance(value, str) else None
    if kind == CONDITIONS:
        return _coerce_conditions(value)
    raise ValueError(f"Unknown field kind: {kind}")


def lookup(record: Any, path: tuple[str, ...]) -> Any:
    """Walk ``path`` through nested dicts; None when any step is missing."""
    current = record
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def extract(record: Any, fields: tuple[FieldSpec, ...]) -> dict[str, Any]:
    """Project ``record`` through ``fields``, substituting defaults.

    Args:
        record: Raw provider record (any JSON value)
        fields: Field specs to project

    Returns:
        Dict keyed by field name; never raises for malformed input
    """
    out = {}
    for spec in fields:
        value = _coerce(lookup(record, spec.path), spec.kind)
        if value is None:
            value = spec.default
        out[spec.name] = value
    return out


def has_required(projected: dict[str, Any], fields: tuple[FieldSpec, ...]) -> bool:
    """Whether every required field resolved to a real value."""
    return all(projected.get(spec.name) is not None for spec in fields if spec.required)

