"""Client orchestrator: search, select, fetch, display, persist.

``WeatherController`` owns the ``AppState`` and drives every user action
through the reducer in ``weatherworld.client.state``. Network work goes
through a ``WeatherBackend``; theme and saved places are written to a
``KeyValueStore`` whenever they change.

Example:
    >>> controller = WeatherController.create(backend, MemoryStore())
    >>> controller.search("Lagos,NG")
    >>> controller.select(controller.state.search_results[0], auto_save=True)
    >>> controller.state.phase
    <Phase.FORECAST_SHOWN: 'forecast-shown'>
"""

import json
import logging
from typing import Any, Callable, Optional

from weatherworld.api.schemas import PlaceCandidate
from weatherworld.client.backend import WeatherBackend
from weatherworld.client.geolocation import Geolocator, UnsupportedGeolocator
from weatherworld.client.state import (
    AppState,
    Event,
    ForecastFailed,
    ForecastLoaded,
    ForecastRequested,
    LocateFailed,
    LocateStarted,
    PlaceRemoved,
    PlaceSaved,
    QueryChanged,
    SavedPlacesLoaded,
    SearchFailed,
    SearchStarted,
    SearchSucceeded,
    ThemeChanged,
    UnitsChanged,
    reduce,
)
from weatherworld.client.storage import KeyValueStore, load_preferences, save_places, save_theme
from weatherworld.config import DEFAULT_COUNTRY
from weatherworld.errors import BackendError, GeolocationError
from weatherworld.services.geocoding import fallback_place
from weatherworld.utils.formatters import UNITS

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong"
LOCATION_WEATHER_ERROR = "Failed to load location weather"

Listener = Callable[[AppState], None]


def describe_backend_error(error: BackendError) -> str:
    """The raw error payload, pretty-printed for display."""
    payload: Any = error.payload
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, indent=2)


def describe_exception(error: Exception, fallback: str = GENERIC_ERROR) -> str:
    return str(error) or fallback


class WeatherController:
    """Single owner of the client state.

    Attributes:
        state: Current AppState (replaced, never mutated, on every event)
        backend: Source of geocoding and forecast data
        store: Durable storage for theme and saved places
        geolocator: Position source for "use my location"
        default_country: Country used when the device position has no name
    """

    def __init__(
        self,
        backend: WeatherBackend,
        store: KeyValueStore,
        geolocator: Optional[Geolocator] = None,
        state: Optional[AppState] = None,
        default_country: str = DEFAULT_COUNTRY,
    ):
        self.backend = backend
        self.store = store
        self.geolocator = geolocator or UnsupportedGeolocator()
        self.state = state or AppState()
        self.default_country = default_country
        self._listeners: list[Listener] = []

    @classmethod
    def create(
        cls,
        backend: WeatherBackend,
        store: KeyValueStore,
        geolocator: Optional[Geolocator] = None,
        prefers_dark: bool = False,
        default_country: str = DEFAULT_COUNTRY,
    ) -> "WeatherController":
        """Build a controller with theme and saved places read from ``store``."""
        controller = cls(backend, store, geolocator=geolocator, default_country=default_country)
        controller.restore_preferences(prefers_dark)
        return controller

    # ---------- State plumbing ----------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def dispatch(self, event: Event) -> AppState:
        previous = self.state
        self.state = reduce(previous, event)
        if self.state is previous:
            return self.state

        if self.state.theme != previous.theme:
            self._persist(save_theme, self.state.theme)
        if self.state.saved_places != previous.saved_places:
            self._persist(save_places, self.state.saved_places)

        self._notify()
        return self.state

    def restore_preferences(self, prefers_dark: bool = False) -> None:
        """Replace theme and saved places with what ``store`` holds.

        Nothing is written back to the store.
        """
        theme, places = load_preferences(self.store, prefers_dark)
        state = reduce(self.state, ThemeChanged(theme))
        self.state = reduce(state, SavedPlacesLoaded(tuple(places)))
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def _persist(self, writer: Callable[[KeyValueStore, Any], None], value: Any) -> None:
        try:
            writer(self.store, value)
        except Exception as e:
            logger.warning(f"Could not persist preferences: {e}")

    # ---------- Actions ----------

    def set_query(self, query: str) -> None:
        self.dispatch(QueryChanged(query))

    def search(self, query: Optional[str] = None) -> None:
        """Geocode the query and show the candidates.

        Clears any previous results, selection, forecast and error first.
        """
        if query is not None:
            self.dispatch(QueryChanged(query))
        generation = self.dispatch(SearchStarted()).generation
        query = self.state.query.strip()

        try:
            results = self.backend.geocode(query)
        except BackendError as e:
            logger.info(f"Search for {query!r} failed with {e.status_code}")
            self.dispatch(SearchFailed(generation, describe_backend_error(e)))
            return
        except Exception as e:
            logger.warning(f"Search for {query!r} failed: {e}")
            self.dispatch(SearchFailed(generation, describe_exception(e)))
            return

        self.dispatch(SearchSucceeded(generation, tuple(results)))

    def select(self, place: PlaceCandidate, auto_save: bool = False) -> None:
        """Load the forecast for ``place`` in the current units.

        With ``auto_save``, the place is added to the saved places once the
        forecast has loaded.
        """
        generation = self.dispatch(ForecastRequested(place)).generation
        units = self.state.units

        try:
            bundle = self.backend.forecast(place.lat, place.lon, units)
        except BackendError as e:
            logger.info(f"Forecast for ({place.lat}, {place.lon}) failed with {e.status_code}")
            self.dispatch(ForecastFailed(generation, describe_backend_error(e)))
            return
        except Exception as e:
            logger.warning(f"Forecast for ({place.lat}, {place.lon}) failed: {e}")
            self.dispatch(ForecastFailed(generation, describe_exception(e)))
            return

        self.dispatch(ForecastLoaded(generation, bundle, auto_save=auto_save))

    def use_my_location(self) -> None:
        """Locate the device, name the position and load its forecast.

        The resulting place is saved once its forecast loads.
        """
        generation = self.dispatch(LocateStarted()).generation

        try:
            coords = self.geolocator.locate()
        except GeolocationError as e:
            logger.info(f"Geolocation failed: {e.code}")
            self.dispatch(LocateFailed(generation, e.message))
            return

        try:
            matches = self.backend.reverse(coords.lat, coords.lon)
        except BackendError as e:
            logger.info(f"Reverse geocode failed with {e.status_code}; using raw coordinates")
            matches = []
        except Exception as e:
            logger.warning(f"Reverse geocode failed: {e}")
            self.dispatch(LocateFailed(generation, describe_exception(e, LOCATION_WEATHER_ERROR)))
            return

        if self.state.generation != generation:
            # A newer action superseded this lookup
            return

        place = matches[0] if matches else fallback_place(coords.lat, coords.lon, self.default_country)
        self.select(place, auto_save=True)

    def change_units(self, units: str) -> None:
        """Switch units and refetch the selected place's forecast.

        The provider converts values, so a selected place is always
        refetched rather than converted locally.
        """
        if units not in UNITS:
            raise ValueError(f"Invalid units: {units}. Must be one of {UNITS}")
        if units == self.state.units:
            return
        self.dispatch(UnitsChanged(units))
        if self.state.selected_place is not None:
            self.select(self.state.selected_place)

    def toggle_units(self) -> None:
        self.change_units("imperial" if self.state.units == "metric" else "metric")

    def toggle_theme(self) -> None:
        self.dispatch(ThemeChanged("light" if self.state.theme == "dark" else "dark"))

    def save_place(self, place: PlaceCandidate) -> None:
        self.dispatch(PlaceSaved(place))

    def remove_saved(self, place: PlaceCandidate) -> None:
        self.dispatch(PlaceRemoved(place))
