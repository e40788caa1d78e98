"""Tests for dashboard wiring that does not need a browser session."""

from unittest.mock import MagicMock

from weatherworld.client.backend import HttpBackend, ServiceBackend
from weatherworld.config import Settings
from weatherworld.dashboard.app import create_backend
from weatherworld.dashboard.components.loading import is_json_message, render_error


class TestCreateBackend:
    def test_in_process_with_key(self):
        assert isinstance(create_backend(Settings(api_key="k")), ServiceBackend)

    def test_http_without_key(self):
        backend = create_backend(Settings(api_key="", api_url="http://api.test/"))

        assert isinstance(backend, HttpBackend)
        assert backend.base_url == "http://api.test"


class TestErrorDisplay:
    """Tests for error rendering."""

    def test_json_detection(self):
        assert is_json_message('{\n  "error": "Missing API key"\n}')
        assert is_json_message("[]")
        assert not is_json_message("Location permission denied.")

    def test_json_rendered_as_code(self):
        container = MagicMock()

        render_error('{"error": "x"}', container=container)

        container.code.assert_called_once_with('{"error": "x"}', language="json")

    def test_plain_message(self):
        container = MagicMock()

        render_error("Failed to get location.", container=container)

        container.error.assert_called_once_with("Failed to get location.")
        container.code.assert_not_called()
