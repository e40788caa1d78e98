"""Streamlit dashboard for weatherworld.

This module provides:

- run_dashboard: Launch the Streamlit page
- components: map, forecast panels, saved places, geolocation
"""

__all__ = ["run_dashboard"]


def __getattr__(name):
    if name == "run_dashboard":
        from weatherworld.dashboard.app import run_dashboard
        return run_dashboard
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
