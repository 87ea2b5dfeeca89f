"""
Routes meteo : lecture brute temperature/humidite d'une ville.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends

from aiweather.api.routers._shared import provider_error_to_http, require_city
from aiweather.domain.entities.weather import WeatherRead
from aiweather.domain.services.weather_service import OpenWeatherService, get_weather_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["weather"])

ERROR_CONTEXT = "An error occurred while fetching weather data"


@router.get("/weather/", include_in_schema=False)
async def get_weather_without_city():
    """Segment ville absent : toujours 400"""
    require_city(None)


@router.get("/weather/{city}", response_model=WeatherRead)
async def get_weather(
    city: str,
    weather_service: OpenWeatherService = Depends(get_weather_service),
):
    """Temperature (°C) et humidite (%) actuelles de la ville"""
    city = require_city(city)

    result = await weather_service.get_weather(city)
    if not result.ok:
        raise provider_error_to_http(result.error, ERROR_CONTEXT)

    reading = result.value
    return WeatherRead(
        city=city,
        temperature=reading.temperature_c,
        humidity=reading.humidity_pct,
    )
