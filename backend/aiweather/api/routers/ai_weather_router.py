"""
Routes meteo IA : lecture OpenWeather + description et suggestions d'activites generees par Groq.
Routes = validation + delegation aux services. Pas de logique metier ici.
"""
import asyncio
import logging
from fastapi import APIRouter, Depends

from aiweather.api.routers._shared import provider_error_to_http, require_city
from aiweather.core.settings import Settings, get_settings
from aiweather.domain.entities.weather import AiWeatherRead
from aiweather.domain.services.text_generation_service import (
    GroqTextService,
    get_text_generation_service,
)
from aiweather.domain.services.weather_service import OpenWeatherService, get_weather_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ai-weather"])

ERROR_CONTEXT = "An error occurred while processing AI weather data"


@router.get("/ai-weather/", include_in_schema=False)
async def get_ai_weather_without_city():
    """Segment ville absent : toujours 400"""
    require_city(None)


@router.get("/ai-weather/{city}", response_model=AiWeatherRead)
async def get_ai_weather_info(
    city: str,
    weather_service: OpenWeatherService = Depends(get_weather_service),
    text_service: GroqTextService = Depends(get_text_generation_service),
    settings: Settings = Depends(get_settings),
):
    """Meteo de la ville enrichie d'une description et de suggestions d'activites generees par IA.

    Le premier echec interrompt la chaine : aucune reponse partielle.
    """
    city = require_city(city)

    weather = await weather_service.get_weather(city)
    if not weather.ok:
        raise provider_error_to_http(weather.error, ERROR_CONTEXT)
    reading = weather.value

    if settings.AI_PARALLEL_GENERATION:
        # Les deux generations sont independantes : on attend les deux avant de conclure
        description, suggestions = await asyncio.gather(
            text_service.generate_description(reading.temperature_c, reading.humidity_pct, city),
            text_service.generate_activity_suggestions(reading.temperature_c, reading.humidity_pct, city),
        )
        for result in (description, suggestions):
            if not result.ok:
                raise provider_error_to_http(result.error, ERROR_CONTEXT)
    else:
        description = await text_service.generate_description(
            reading.temperature_c, reading.humidity_pct, city
        )
        if not description.ok:
            raise provider_error_to_http(description.error, ERROR_CONTEXT)

        suggestions = await text_service.generate_activity_suggestions(
            reading.temperature_c, reading.humidity_pct, city
        )
        if not suggestions.ok:
            raise provider_error_to_http(suggestions.error, ERROR_CONTEXT)

    return AiWeatherRead(
        city=city,
        temperature=reading.temperature_c,
        humidity=reading.humidity_pct,
        ai_weather_description=description.value,
        ai_activity_suggestions=suggestions.value,
    )
