"""Streamlit dashboard for weatherworld.

Search a place, pick a candidate, and see the current conditions, the next
12 hours, the daily outlook and a map. Theme and saved places live in the
browser's local storage.

Run with: streamlit run src/weatherworld/dashboard/app.py
"""

import logging

import streamlit as st

from weatherworld.client import HttpBackend, ServiceBackend, WeatherController
from weatherworld.client.state import Phase
from weatherworld.config import Settings, setup_logging
from weatherworld.dashboard.components import (
    LocalStorageStore,
    geolocator_from_position,
    render_current_card,
    render_daily_table,
    render_empty_state,
    render_error,
    render_hourly_strip,
    render_place_map,
    render_save_button,
    render_saved_places,
    request_browser_position,
    with_loading,
)
from weatherworld.utils.formatters import location_label, units_label

logger = logging.getLogger(__name__)

# Reruns to wait for browser storage before giving up on stored preferences
RESTORE_ATTEMPTS = 2

THEME_CSS = {
    "dark": """
        <style>
            .stApp { background-color: #0f172a; color: #e2e8f0; }
            .stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label { color: #e2e8f0; }
        </style>
    """,
    "light": "",
}


def get_settings() -> Settings:
    if "settings" not in st.session_state:
        settings = Settings.from_env()
        setup_logging(settings.log_level)
        st.session_state.settings = settings
    return st.session_state.settings


def create_backend(settings: Settings):
    """In-process backend when this process holds the API key, HTTP otherwise."""
    if settings.has_api_key:
        return ServiceBackend.from_settings(settings)
    logger.info(f"No API key in the dashboard process; using API at {settings.api_url}")
    return HttpBackend(settings.api_url)


def get_controller() -> WeatherController:
    """Get the session's controller (created on first use)."""
    if "controller" not in st.session_state:
        settings = get_settings()
        st.session_state.controller = WeatherController.create(
            create_backend(settings),
            LocalStorageStore(),
            default_country=settings.default_country,
        )
        st.session_state.restore_attempts = 0
    return st.session_state.controller


def sync_preferences(controller: WeatherController) -> None:
    """Re-read stored preferences until browser storage has answered."""
    attempts = st.session_state.get("restore_attempts", RESTORE_ATTEMPTS)
    if attempts >= RESTORE_ATTEMPTS:
        return
    controller.restore_preferences()
    st.session_state.restore_attempts = attempts + 1


def create_sidebar(controller: WeatherController) -> None:
    """Sidebar with unit and theme toggles and the saved places."""
    state = controller.state
    st.sidebar.header("Settings")

    if st.sidebar.button(f"Units: {units_label(state.units)}", key="toggle_units"):
        with_loading("Switching units...")(controller.toggle_units)()
        st.rerun()

    theme_label = "☀️ Light mode" if state.theme == "dark" else "🌙 Dark mode"
    if st.sidebar.button(theme_label, key="toggle_theme"):
        controller.toggle_theme()
        st.rerun()

    st.sidebar.markdown("---")
    render_saved_places(controller)


def render_search(controller: WeatherController) -> None:
    """Search box, "Use my location" and the candidate list."""
    state = controller.state

    with st.form("search", clear_on_submit=False):
        col_query, col_submit = st.columns([5, 1])
        with col_query:
            query = st.text_input(
                "City",
                value=state.query,
                placeholder="e.g. Lagos,NG",
                label_visibility="collapsed",
            )
        with col_submit:
            submitted = st.form_submit_button("Search", use_container_width=True)
    if submitted:
        with_loading("Searching...")(controller.search)(query)
        st.rerun()

    if st.button("📍 Use my location", key="use_location"):
        st.session_state.gps_wait = True

    if st.session_state.get("gps_wait"):
        position = request_browser_position()
        if position is not None:
            st.session_state.gps_wait = False
            controller.geolocator = geolocator_from_position(position)
            with_loading("Loading location weather...")(controller.use_my_location)()
            st.rerun()
        else:
            st.caption("⏳ Waiting for location...")

    if state.search_results:
        st.markdown("**Results**")
        for i, place in enumerate(state.search_results):
            col_label, col_view = st.columns([5, 1])
            col_label.write(f"{location_label(place)}  ({place.lat:.2f}, {place.lon:.2f})")
            if col_view.button("View", key=f"view_{i}"):
                with_loading("Loading forecast...")(controller.select)(place, auto_save=True)
                st.rerun()


def render_status(controller: WeatherController) -> None:
    state = controller.state
    if state.error is None:
        return
    if state.phase == Phase.ERROR:
        render_error(state.error)
    else:
        render_empty_state(state.error)


def render_forecast(controller: WeatherController) -> None:
    """Summary card, map, hourly strip and daily table for the selection."""
    state = controller.state
    tz = get_settings().tz()

    if state.selected_place is None or state.forecast is None:
        if state.phase in (Phase.IDLE, Phase.RESULTS_SHOWN):
            render_empty_state(
                "No location selected",
                suggestion="Search for a city or use your location.",
            )
        return

    col_card, col_map = st.columns([3, 2])
    with col_card:
        render_current_card(state.forecast, state.selected_place, state.units)
        render_save_button(controller)
    with col_map:
        st.pydeck_chart(render_place_map(state.selected_place, state.theme))

    render_hourly_strip(state.forecast, state.units, tz)
    render_daily_table(state.forecast, state.units, tz)


def main():
    """Main dashboard function."""
    st.set_page_config(
        page_title="Weather Worldwide",
        page_icon="🌦️",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    controller = get_controller()
    sync_preferences(controller)

    st.markdown(THEME_CSS.get(controller.state.theme, ""), unsafe_allow_html=True)
    st.title("🌦️ Weather Worldwide")
    st.caption("Current conditions, next 12 hours and daily outlook from OpenWeather")

    create_sidebar(controller)
    render_search(controller)
    render_status(controller)
    render_forecast(controller)


def run_dashboard():
    """Entry point for running dashboard."""
    main()


if __name__ == "__main__":
    main()
