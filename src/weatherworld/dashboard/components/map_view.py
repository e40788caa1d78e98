"""Map of the selected place for the weatherworld dashboard.

Provides a PyDeck map with a single marker on the selected place, drawn
over a light or dark basemap to match the current theme.

Example usage:
    >>> from weatherworld.api.schemas import PlaceCandidate
    >>> from weatherworld.dashboard.components import render_place_map
    >>>
    >>> abuja = PlaceCandidate(name="Abuja", lat=9.07, lon=7.49, country="NG")
    >>> deck = render_place_map(abuja, theme="dark")
"""

import pandas as pd
import pydeck as pdk

from weatherworld.api.schemas import PlaceCandidate
from weatherworld.utils.formatters import location_label

# Zoom used when centering on a single place
PLACE_ZOOM = 11

# Free CartoDB basemaps (no API key required)
MAP_STYLES = {
    "light": "https://basemaps.cartocdn.com/gl/positron-gl-style/style.json",
    "dark": "https://basemaps.cartocdn.com/gl/dark-matter-gl-style/style.json",
}

MARKER_COLORS = {
    "light": [37, 99, 235, 220],
    "dark": [96, 165, 250, 220],
}


def map_style_for_theme(theme: str) -> str:
    """Basemap style URL for a theme; unknown themes get the light map."""
    return MAP_STYLES.get(theme, MAP_STYLES["light"])


def place_frame(place: PlaceCandidate) -> pd.DataFrame:
    """One-row DataFrame describing ``place`` for the marker layer."""
    return pd.DataFrame([{
        "name": place.name,
        "label": location_label(place),
        "latitude": place.lat,
        "longitude": place.lon,
    }])


def create_place_layer(place: PlaceCandidate, theme: str = "light") -> pdk.Layer:
    """Create ScatterplotLayer with a marker on the place.

    Args:
        place: Place to mark
        theme: "light" or "dark", picks the marker color

    Returns:
        PyDeck ScatterplotLayer, pickable for the tooltip
    """
    return pdk.Layer(
        "ScatterplotLayer",
        data=place_frame(place),
        get_position=["longitude", "latitude"],
        get_fill_color=MARKER_COLORS.get(theme, MARKER_COLORS["light"]),
        get_radius=200,
        radius_min_pixels=8,
        radius_max_pixels=30,
        pickable=True,
    )


def create_place_view(place: PlaceCandidate, zoom: float = PLACE_ZOOM) -> pdk.ViewState:
    """Create map view centered on the place."""
    return pdk.ViewState(
        latitude=place.lat,
        longitude=place.lon,
        zoom=zoom,
        pitch=0,
    )


def render_place_map(place: PlaceCandidate, theme: str = "light") -> pdk.Deck:
    """Render the map for the selected place.

    Args:
        place: Selected place
        theme: Current theme

    Returns:
        PyDeck Deck object ready for display with st.pydeck_chart()
    """
    dark = theme == "dark"
    tooltip = {
        "html": "<b>{label}</b>",
        "style": {
            "backgroundColor": "#1a1a2e" if dark else "white",
            "color": "white" if dark else "#1a1a2e",
            "padding": "8px",
            "borderRadius": "4px",
        },
    }

    return pdk.Deck(
        layers=[create_place_layer(place, theme)],
        initial_view_state=create_place_view(place),
        tooltip=tooltip,
        map_style=map_style_for_theme(theme),
    )
