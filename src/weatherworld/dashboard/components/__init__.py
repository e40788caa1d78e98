"""Dashboard UI components for weatherworld.

This module provides reusable Streamlit components:

- Map: render_place_map, create_place_layer, create_place_view, map_style_for_theme
- Forecast: current_summary, hourly_frame, daily_frame, render_current_card,
  render_hourly_strip, render_daily_table
- Saved places: LocalStorageStore, render_saved_places, render_save_button
- Location: geolocator_from_position, request_browser_position
- Loading: with_loading, render_error, render_empty_state
"""

from weatherworld.dashboard.components.forecast_panels import (
    current_summary,
    daily_frame,
    hourly_frame,
    render_current_card,
    render_daily_table,
    render_hourly_strip,
)
from weatherworld.dashboard.components.loading import (
    render_empty_state,
    render_error,
    with_loading,
)
from weatherworld.dashboard.components.location import (
    FailedGeolocator,
    geolocator_from_position,
    request_browser_position,
)
from weatherworld.dashboard.components.map_view import (
    PLACE_ZOOM,
    create_place_layer,
    create_place_view,
    map_style_for_theme,
    render_place_map,
)
from weatherworld.dashboard.components.saved_places import (
    LocalStorageStore,
    chip_label,
    render_save_button,
    render_saved_places,
)

__all__ = [
    # Map
    "render_place_map",
    "create_place_layer",
    "create_place_view",
    "map_style_for_theme",
    "PLACE_ZOOM",
    # Forecast panels
    "current_summary",
    "hourly_frame",
    "daily_frame",
    "render_current_card",
    "render_hourly_strip",
    "render_daily_table",
    # Saved places
    "LocalStorageStore",
    "chip_label",
    "render_saved_places",
    "render_save_button",
    # Location
    "FailedGeolocator",
    "geolocator_from_position",
    "request_browser_position",
    # Loading and errors
    "with_loading",
    "render_error",
    "render_empty_state",
]
