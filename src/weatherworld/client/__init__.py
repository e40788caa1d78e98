"""Client-side state, storage and orchestration.

This module provides:

- WeatherController: drives search -> select -> fetch -> persist
- AppState, Phase, reduce: the state machine
- HttpBackend, ServiceBackend: data sources for the controller
- MemoryStore, JsonFileStore: durable preference storage
- StaticGeolocator, CallableGeolocator, UnsupportedGeolocator: positions
"""

from weatherworld.client.backend import HttpBackend, ServiceBackend, WeatherBackend
from weatherworld.client.geolocation import (
    CallableGeolocator,
    Coordinates,
    StaticGeolocator,
    UnsupportedGeolocator,
)
from weatherworld.client.orchestrator import WeatherController
from weatherworld.client.state import AppState, Phase, reduce
from weatherworld.client.storage import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "AppState",
    "CallableGeolocator",
    "Coordinates",
    "HttpBackend",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "Phase",
    "ServiceBackend",
    "StaticGeolocator",
    "UnsupportedGeolocator",
    "WeatherBackend",
    "WeatherController",
    "reduce",
]
