"""Saved places and theme persistence in browser local storage.

``LocalStorageStore`` adapts streamlit_local_storage to the client's
key/value store, so the controller persists preferences in the browser
exactly as it does to a file or memory.

Usage:
    from weatherworld.dashboard.components.saved_places import (
        LocalStorageStore,
        render_saved_places,
    )

    store = LocalStorageStore()
    render_saved_places(controller)
"""

import logging
from typing import Optional

import streamlit as st
from streamlit_local_storage import LocalStorage

from weatherworld.api.schemas import PlaceCandidate

logger = logging.getLogger(__name__)


def get_storage() -> LocalStorage:
    """Get LocalStorage instance (cached in session state)."""
    if "local_storage" not in st.session_state:
        st.session_state.local_storage = LocalStorage()
    return st.session_state.local_storage


class LocalStorageStore:
    """Key/value store over browser localStorage."""

    def __init__(self, storage: Optional[LocalStorage] = None):
        self.storage = storage or get_storage()

    def get_item(self, key: str) -> Optional[str]:
        raw = self.storage.getItem(key)
        return raw if isinstance(raw, str) else None

    def set_item(self, key: str, value: str) -> None:
        self.storage.setItem(itemKey=key, itemValue=value, key=f"set_{key}")


# Pure functions for testing (no Streamlit dependency)
def chip_label(place: PlaceCandidate) -> str:
    """Short label for a saved-place chip, e.g. ``"Abuja, NG"``."""
    return f"{place.name}, {place.country}" if place.country else place.name


def chip_key(place: PlaceCandidate, action: str) -> str:
    """Widget key unique per (lat, lon)."""
    return f"{action}_{place.lat:.4f}_{place.lon:.4f}"


def is_saved(places, place: Optional[PlaceCandidate]) -> bool:
    return place is not None and any(p.same_place(place) for p in places)


def render_saved_places(controller, container=None) -> None:
    """Render saved places as chips with view and remove buttons.

    Args:
        controller: WeatherController owning the saved list
        container: Streamlit container to render in (default: sidebar)
    """
    target = container if container is not None else st.sidebar
    places = controller.state.saved_places

    target.markdown("**Saved places**")
    if not places:
        target.caption("No saved places yet")
        return

    for place in places:
        col_view, col_remove = target.columns([5, 1])
        with col_view:
            if st.button(chip_label(place), key=chip_key(place, "view"), use_container_width=True):
                controller.select(place)
                st.rerun()
        with col_remove:
            if st.button("✕", key=chip_key(place, "remove"), help="Remove"):
                controller.remove_saved(place)
                st.rerun()


def render_save_button(controller, container=None) -> None:
    """Render "Save city" for the selected place when it is not saved yet."""
    target = container if container is not None else st
    place = controller.state.selected_place
    if place is None or is_saved(controller.state.saved_places, place):
        return
    if target.button("⭐ Save city", key=chip_key(place, "save")):
        controller.save_place(place)
        st.rerun()
