"""Streamlit Cloud entry point for the weatherworld dashboard.

Run locally with: streamlit run streamlit_app.py
"""

from weatherworld.dashboard.app import main

main()
