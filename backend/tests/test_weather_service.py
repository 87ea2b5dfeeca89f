"""
Tests pour OpenWeatherService : requete sortante, extraction main.temp / main.humidity, typologie des erreurs.
"""
import asyncio

import httpx
import pytest

from aiweather.domain.entities.weather import WeatherReading
from aiweather.domain.errors import (
    ConfigurationError,
    InvalidArgument,
    InvalidResponse,
    UpstreamError,
)
from aiweather.domain.services.weather_service import (
    OpenWeatherService,
    _as_integer,
    _build_reading_from_response,
)

PARIS_PAYLOAD = {
    "name": "Paris",
    "main": {"temp": 21.5, "feels_like": 21.0, "humidity": 60, "pressure": 1015},
    "weather": [{"id": 800, "main": "Clear"}],
}


def _get_weather(settings, city, handler):
    """Execute get_weather avec un transport httpx simule. Retourne (result, requetes)."""
    requests = []

    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    async def _run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(_record)) as client:
            return await OpenWeatherService(settings, client).get_weather(city)

    return asyncio.run(_run()), requests


def _respond(status_code=200, **kwargs):
    return lambda request: httpx.Response(status_code, **kwargs)


# ============================================================
# Succes
# ============================================================

class TestGetWeatherSuccess:
    def test_returns_reading(self, settings_factory):
        result, _ = _get_weather(settings_factory(), "Paris", _respond(json=PARIS_PAYLOAD))

        assert result.ok
        assert result.value == WeatherReading(temperature_c=21.5, humidity_pct=60)

    def test_request_parameters(self, settings_factory):
        settings = settings_factory(OPENWEATHER_API_KEY="abc123")
        _, requests = _get_weather(settings, "São Paulo", _respond(json=PARIS_PAYLOAD))

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "GET"
        assert str(request.url).startswith("https://api.openweathermap.org/data/2.5/weather?")
        assert request.url.params["q"] == "São Paulo"
        assert request.url.params["appid"] == "abc123"
        assert request.url.params["units"] == "metric"
        # La ville est encodee dans l'URL
        assert "São" not in request.url.query.decode("ascii")

    def test_integer_temperature_is_float(self, settings_factory):
        payload = {"main": {"temp": 3, "humidity": 80}}
        result, _ = _get_weather(settings_factory(), "Oslo", _respond(json=payload))

        assert result.value.temperature_c == 3.0
        assert isinstance(result.value.temperature_c, float)

    def test_integral_float_humidity_rejected(self, settings_factory):
        payload = {"main": {"temp": 10.2, "humidity": 55.0}}
        result, _ = _get_weather(settings_factory(), "Lyon", _respond(json=payload))

        # 55.0 n'est pas un entier JSON
        assert isinstance(result.error, InvalidResponse)
        assert "'humidity'" in result.error.message

    def test_unwrap_returns_value(self, settings_factory):
        result, _ = _get_weather(settings_factory(), "Paris", _respond(json=PARIS_PAYLOAD))
        assert result.unwrap().humidity_pct == 60


# ============================================================
# Preconditions : aucun appel sortant
# ============================================================

class TestGetWeatherPreconditions:
    @pytest.mark.parametrize("city", ["", "   ", "\t\n"])
    def test_blank_city_is_invalid_argument(self, settings_factory, city):
        result, requests = _get_weather(settings_factory(), city, _respond(json=PARIS_PAYLOAD))

        assert isinstance(result.error, InvalidArgument)
        assert requests == []

    def test_none_city_is_invalid_argument(self, settings_factory):
        result, requests = _get_weather(settings_factory(), None, _respond(json=PARIS_PAYLOAD))

        assert isinstance(result.error, InvalidArgument)
        assert requests == []

    def test_missing_api_key(self, settings_factory):
        settings = settings_factory(OPENWEATHER_API_KEY="")
        result, requests = _get_weather(settings, "Paris", _respond(json=PARIS_PAYLOAD))

        assert not result.ok
        assert isinstance(result.error, ConfigurationError)
        assert "OpenWeather API key is not configured" in result.error.message
        assert requests == []

    def test_unwrap_raises_carried_error(self, settings_factory):
        settings = settings_factory(OPENWEATHER_API_KEY="")
        result, _ = _get_weather(settings, "Paris", _respond(json=PARIS_PAYLOAD))

        with pytest.raises(ConfigurationError):
            result.unwrap()


# ============================================================
# Erreurs amont
# ============================================================

class TestGetWeatherUpstreamErrors:
    def test_not_found_carries_status_and_body(self, settings_factory):
        body = '{"cod":"404","message":"city not found"}'
        result, requests = _get_weather(
            settings_factory(), "Atlantis", _respond(404, text=body)
        )

        assert len(requests) == 1
        error = result.error
        assert isinstance(error, UpstreamError)
        assert error.status_code == 404
        assert error.body == body
        assert "OpenWeather API error 404" in error.message
        assert "city not found" in error.message

    def test_unauthorized_is_upstream_error(self, settings_factory):
        result, _ = _get_weather(settings_factory(), "Paris", _respond(401, text="Invalid API key"))

        assert isinstance(result.error, UpstreamError)
        assert result.error.status_code == 401

    def test_network_failure_has_no_status(self, settings_factory):
        def _fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        result, _ = _get_weather(settings_factory(), "Paris", _fail)

        assert isinstance(result.error, UpstreamError)
        assert result.error.status_code is None
        assert "connection refused" in result.error.message


# ============================================================
# Reponses mal formees
# ============================================================

class TestGetWeatherInvalidResponse:
    @pytest.mark.parametrize("payload, field", [
        ({}, "main"),
        ({"main": None}, "main"),
        ({"main": [21.5, 60]}, "main"),
        ({"main": {"humidity": 60}}, "temp"),
        ({"main": {"temp": "21.5", "humidity": 60}}, "temp"),
        ({"main": {"temp": True, "humidity": 60}}, "temp"),
        ({"main": {"temp": 21.5}}, "humidity"),
        ({"main": {"temp": 21.5, "humidity": 60.5}}, "humidity"),
        ({"main": {"temp": 21.5, "humidity": 60.0}}, "humidity"),
        ({"main": {"temp": 21.5, "humidity": "60"}}, "humidity"),
        ({"main": {"temp": 21.5, "humidity": None}}, "humidity"),
    ])
    def test_bad_shape(self, settings_factory, payload, field):
        result, _ = _get_weather(settings_factory(), "Paris", _respond(json=payload))

        assert isinstance(result.error, InvalidResponse)
        assert f"'{field}'" in result.error.message

    def test_body_is_not_json(self, settings_factory):
        result, _ = _get_weather(settings_factory(), "Paris", _respond(text="<html>oops</html>"))

        assert isinstance(result.error, InvalidResponse)

    def test_top_level_array(self, settings_factory):
        result, _ = _get_weather(settings_factory(), "Paris", _respond(json=[1, 2]))

        assert isinstance(result.error, InvalidResponse)


class TestHelpers:
    def test_as_integer(self):
        assert _as_integer(60) == 60
        assert _as_integer(60.0) is None
        assert _as_integer(60.5) is None
        assert _as_integer(False) is None
        assert _as_integer("60") is None

    def test_build_reading_ignores_extra_fields(self):
        reading = _build_reading_from_response(PARIS_PAYLOAD)
        assert reading == WeatherReading(temperature_c=21.5, humidity_pct=60)
