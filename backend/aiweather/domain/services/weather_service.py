"""
Service meteo — Lecture temperature/humidite via l'API OpenWeather.
Un seul appel sortant par lecture, unites metriques (°C), pas de cache ni de retry.
"""
import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import Depends

from aiweather.core.http import get_http_client
from aiweather.core.settings import Settings, get_settings
from aiweather.domain.entities.weather import WeatherReading
from aiweather.domain.errors import (
    ConfigurationError,
    GatewayError,
    InvalidArgument,
    InvalidResponse,
    UpstreamError,
)
from aiweather.domain.services.result import ProviderResult

logger = logging.getLogger(__name__)

# units=metric pour obtenir des degres Celsius
UNITS = "metric"


def _is_number(value: Any) -> bool:
    # bool est un int en Python, mais pas une mesure
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_integer(value: Any) -> Optional[int]:
    """Retourne value si c'est un entier JSON (60, pas 60.0), None sinon."""
    if not isinstance(value, int) or isinstance(value, bool):
        return None
    return value


def _build_reading_from_response(data: Any) -> WeatherReading:
    """Extrait main.temp et main.humidity de la reponse OpenWeather."""
    main = data.get("main") if isinstance(data, dict) else None
    if not isinstance(main, dict):
        raise InvalidResponse("Invalid response from OpenWeather: 'main' section missing.")

    temperature = main.get("temp")
    if not _is_number(temperature):
        raise InvalidResponse("Invalid response from OpenWeather: 'temp' missing or invalid.")

    humidity = _as_integer(main.get("humidity"))
    if humidity is None:
        raise InvalidResponse("Invalid response from OpenWeather: 'humidity' missing or invalid.")

    return WeatherReading(temperature_c=float(temperature), humidity_pct=humidity)


class OpenWeatherService:
    """Fournisseur meteo OpenWeather."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    async def get_weather(self, city: str) -> ProviderResult[WeatherReading]:
        """Lecture meteo courante pour une ville.

        Ne leve pas d'erreur du domaine : l'echec est porte par le resultat.
        """
        try:
            reading = await self._fetch_reading(city)
        except GatewayError as exc:
            return ProviderResult.failure(exc)
        return ProviderResult.success(reading)

    async def _fetch_reading(self, city: str) -> WeatherReading:
        if city is None or not city.strip():
            raise InvalidArgument("City must be provided.")

        api_key = self.settings.OPENWEATHER_API_KEY
        if not api_key:
            raise ConfigurationError(
                "OpenWeather API key is not configured. Check OPENWEATHER_API_KEY."
            )

        data = await self._call_open_weather(city, api_key)
        return _build_reading_from_response(data)

    async def _call_open_weather(self, city: str, api_key: str) -> Dict[str, Any]:
        """Appelle OpenWeather et retourne le JSON decode."""
        params = {
            "q": city,
            "appid": api_key,
            "units": UNITS,
        }

        try:
            resp = await self.client.get(self.settings.OPENWEATHER_BASE_URL, params=params)
        except httpx.RequestError as e:
            logger.warning(f"OpenWeather erreur reseau pour '{city}': {e}")
            raise UpstreamError(f"OpenWeather request failed: {e}") from e

        if not resp.is_success:
            logger.warning(f"OpenWeather HTTP {resp.status_code} pour '{city}'")
            raise UpstreamError(
                f"OpenWeather API error {resp.status_code} {resp.reason_phrase}: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise InvalidResponse("Invalid response from OpenWeather: body is not JSON.") from e


def get_weather_service(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> OpenWeatherService:
    """Fournit le service meteo pour l'injection de dependance."""
    return OpenWeatherService(settings, client)
