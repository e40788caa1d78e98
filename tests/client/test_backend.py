"""Tests for the client backends."""

from unittest.mock import Mock, patch

import pytest
import requests

from weatherworld.api.schemas import ForecastBundle
from weatherworld.client.backend import HttpBackend, ServiceBackend
from weatherworld.errors import BackendError, ConfigurationError
from weatherworld.providers.openweather import UpstreamResponse


def make_response(status_code=200, json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_data is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = json_data
    response.text = text
    return response


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def backend(session):
    return HttpBackend("http://api.test/", session=session)


class TestHttpBackend:
    """Tests for the HTTP backend."""

    def test_geocode(self, backend, session, geocode_payload):
        session.get.return_value = make_response(json_data=geocode_payload)

        places = backend.geocode("Lagos")

        session.get.assert_called_once_with("http://api.test/api/geocode", params={"q": "Lagos"})
        assert [p.country for p in places] == ["NG", "PT"]

    def test_reverse(self, backend, session):
        session.get.return_value = make_response(json_data=[])

        assert backend.reverse(9.07, 7.49) == []
        session.get.assert_called_once_with("http://api.test/api/reverse", params={"lat": 9.07, "lon": 7.49})

    def test_forecast(self, backend, session):
        session.get.return_value = make_response(
            json_data={"current": {"temp": 20.5}, "hourly": [], "daily": [], "source": "free_current+5day_forecast"}
        )

        bundle = backend.forecast(9.07, 7.49, "imperial")

        assert isinstance(bundle, ForecastBundle)
        assert bundle.current.temp == 20.5
        assert session.get.call_args.kwargs["params"]["units"] == "imperial"

    def test_error_payload_preserved(self, backend, session):
        """Non-success responses raise with the server's JSON body."""
        payload = {"error": "Missing lat/lon"}
        session.get.return_value = make_response(400, json_data=payload)

        with pytest.raises(BackendError) as exc_info:
            backend.reverse(None, None)

        assert exc_info.value.status_code == 400
        assert exc_info.value.payload == payload

    def test_text_error_body(self, backend, session):
        session.get.return_value = make_response(502, text="Bad Gateway")

        with pytest.raises(BackendError) as exc_info:
            backend.geocode("Lagos")

        assert exc_info.value.payload == "Bad Gateway"

    def test_transport_error_propagates(self, backend, session):
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(requests.ConnectionError):
            backend.geocode("Lagos")

    def test_default_session(self):
        with patch("weatherworld.client.backend.requests.Session") as mock_session:
            backend = HttpBackend("http://api.test")

        assert backend.session is mock_session.return_value


class TestServiceBackend:
    """Tests for the in-process backend."""

    def test_geocode(self, fake_client, settings):
        places = ServiceBackend(fake_client, settings).geocode("Lagos")
        assert len(places) == 2

    def test_reverse_uses_default_country(self, fake_client, settings):
        fake_client.geocode_reverse.return_value = UpstreamResponse(200, [{"lat": 1, "lon": 2}])

        places = ServiceBackend(fake_client, settings).reverse(1.0, 2.0)

        assert places[0].country == settings.default_country

    def test_forecast(self, fake_client, settings):
        bundle = ServiceBackend(fake_client, settings).forecast(9.07, 7.49, "metric")
        assert len(bundle.daily) == 6

    def test_errors_match_api_payloads(self, fake_client, settings):
        """Failures carry the same status and body the API would send."""
        backend = ServiceBackend(fake_client, settings)

        with pytest.raises(BackendError) as exc_info:
            backend.geocode("")
        assert exc_info.value.status_code == 400
        assert exc_info.value.payload == {"error": "Missing city query"}

        fake_client.require_api_key.side_effect = ConfigurationError("Missing API key")
        with pytest.raises(BackendError) as exc_info:
            backend.forecast(9.07, 7.49, "metric")
        assert exc_info.value.status_code == 500
        assert exc_info.value.payload == {"error": "Missing API key"}

    def test_upstream_details(self, fake_client, settings):
        fake_client.current_weather.return_value = UpstreamResponse(401, {"cod": 401})

        with pytest.raises(BackendError) as exc_info:
            ServiceBackend(fake_client, settings).forecast(9.07, 7.49, "metric")

        assert exc_info.value.status_code == 401
        assert exc_info.value.payload == {"error": "Current weather fetch failed", "details": {"cod": 401}}
