"""Client application state and its pure transition function.

The client is a small state machine:

    idle -> searching -> results-shown -> loading-forecast -> forecast-shown

with ``error`` reachable from every network-issuing state. All transitions
go through ``reduce(state, event)``, which never mutates its input.

Overlapping requests are resolved with a request generation: every event
that issues a network call increments ``generation`` and completion events
carry the generation they were issued under. A completion whose generation
is no longer current is dropped, so the most recently issued request wins.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from weatherworld.api.schemas import ForecastBundle, PlaceCandidate, SavedPlace

MAX_SAVED_PLACES = 12

DEFAULT_QUERY = "Abuja,NG"
NO_RESULTS_MESSAGE = "No results found. Try: Lagos,NG or Abuja,NG"


class Phase(str, Enum):
    """Client state machine states."""

    IDLE = "idle"
    SEARCHING = "searching"
    RESULTS_SHOWN = "results-shown"
    LOADING_FORECAST = "loading-forecast"
    FORECAST_SHOWN = "forecast-shown"
    ERROR = "error"


@dataclass(frozen=True)
class AppState:
    """Everything the presentation layer reads.

    ``theme`` and ``saved_places`` are persisted; the other fields only live
    for the session.
    """

    query: str = DEFAULT_QUERY
    units: str = "metric"
    theme: str = "light"
    search_results: tuple[PlaceCandidate, ...] = ()
    selected_place: Optional[PlaceCandidate] = None
    forecast: Optional[ForecastBundle] = None
    saved_places: tuple[SavedPlace, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    phase: Phase = Phase.IDLE
    generation: int = 0


# ---------- Saved places ----------

def add_saved_place(
    places: tuple[SavedPlace, ...],
    place: PlaceCandidate,
    cap: int = MAX_SAVED_PLACES,
) -> tuple[SavedPlace, ...]:
    """Add a place to the front of the saved list.

    A place whose (lat, lon) is already saved leaves the list untouched.
    Past ``cap`` entries, the oldest (last) entries are dropped.
    """
    if any(p.same_place(place) for p in places):
        return places
    return ((place,) + tuple(places))[:cap]


def remove_saved_place(
    places: tuple[SavedPlace, ...],
    place: PlaceCandidate,
) -> tuple[SavedPlace, ...]:
    """Remove every saved entry with the same (lat, lon) as ``place``."""
    return tuple(p for p in places if not p.same_place(place))


def normalize_saved_places(
    places: list[SavedPlace],
    cap: int = MAX_SAVED_PLACES,
) -> tuple[SavedPlace, ...]:
    """Drop later duplicates and cap the list, keeping order."""
    out: list[SavedPlace] = []
    for place in places:
        if not any(p.same_place(place) for p in out):
            out.append(place)
    return tuple(out[:cap])


# ---------- Events ----------

@dataclass(frozen=True)
class QueryChanged:
    query: str


@dataclass(frozen=True)
class SearchStarted:
    pass


@dataclass(frozen=True)
class SearchSucceeded:
    generation: int
    results: tuple[PlaceCandidate, ...]


@dataclass(frozen=True)
class SearchFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class ForecastRequested:
    place: PlaceCandidate


@dataclass(frozen=True)
class ForecastLoaded:
    generation: int
    forecast: ForecastBundle
    auto_save: bool = False


@dataclass(frozen=True)
class ForecastFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class LocateStarted:
    pass


@dataclass(frozen=True)
class LocateFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class UnitsChanged:
    units: str


@dataclass(frozen=True)
class ThemeChanged:
    theme: str


@dataclass(frozen=True)
class PlaceSaved:
    place: PlaceCandidate


@dataclass(frozen=True)
class PlaceRemoved:
    place: PlaceCandidate


@dataclass(frozen=True)
class SavedPlacesLoaded:
    places: tuple[SavedPlace, ...] = field(default_factory=tuple)


Event = Union[
    QueryChanged,
    SearchStarted,
    SearchSucceeded,
    SearchFailed,
    ForecastRequested,
    ForecastLoaded,
    ForecastFailed,
    LocateStarted,
    LocateFailed,
    UnitsChanged,
    ThemeChanged,
    PlaceSaved,
    PlaceRemoved,
    SavedPlacesLoaded,
]


def is_stale(state: AppState, event: Event) -> bool:
    """Whether a completion event belongs to a superseded request."""
    generation = getattr(event, "generation", None)
    return generation is not None and generation != state.generation


def reduce(state: AppState, event: Event) -> AppState:
    """Apply one event to the state.

    Args:
        state: Current state (not modified)
        event: Event to apply

    Returns:
        The next state; ``state`` itself when the event is stale or a no-op
    """
    if is_stale(state, event):
        return state

    if isinstance(event, QueryChanged):
        return replace(state, query=event.query)

    if isinstance(event, SearchStarted):
        return replace(
            state,
            search_results=(),
            selected_place=None,
            forecast=None,
            error=None,
            loading=True,
            phase=Phase.SEARCHING,
            generation=state.generation + 1,
        )

    if isinstance(event, SearchSucceeded):
        return replace(
            state,
            search_results=tuple(event.results),
            error=None if event.results else NO_RESULTS_MESSAGE,
            loading=False,
            phase=Phase.RESULTS_SHOWN,
        )

    if isinstance(event, (SearchFailed, ForecastFailed, LocateFailed)):
        return replace(state, error=event.message, loading=False, phase=Phase.ERROR)

    if isinstance(event, ForecastRequested):
        return replace(
            state,
            selected_place=event.place,
            forecast=None,
            error=None,
            loading=True,
            phase=Phase.LOADING_FORECAST,
            generation=state.generation + 1,
        )

    if isinstance(event, ForecastLoaded):
        saved = state.saved_places
        if event.auto_save and state.selected_place is not None:
            saved = add_saved_place(saved, state.selected_place)
        return replace(
            state,
            forecast=event.forecast,
            saved_places=saved,
            loading=False,
            phase=Phase.FORECAST_SHOWN,
        )

    if isinstance(event, LocateStarted):
        return replace(
            state,
            search_results=(),
            forecast=None,
            error=None,
            loading=True,
            phase=Phase.LOADING_FORECAST,
            generation=state.generation + 1,
        )

    if isinstance(event, UnitsChanged):
        return replace(state, units=event.units)

    if isinstance(event, ThemeChanged):
        return replace(state, theme=event.theme)

    if isinstance(event, PlaceSaved):
        return replace(state, saved_places=add_saved_place(state.saved_places, event.place))

    if isinstance(event, PlaceRemoved):
        return replace(state, saved_places=remove_saved_place(state.saved_places, event.place))

    if isinstance(event, SavedPlacesLoaded):
        return replace(state, saved_places=normalize_saved_places(list(event.places)))

    raise TypeError(f"Unknown event: {event!r}")
