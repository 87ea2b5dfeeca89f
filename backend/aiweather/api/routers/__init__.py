"""
Routers API pour la passerelle AI Weather.

Ce module regroupe tous les sous-routers et expose un router principal
a inclure dans l'application FastAPI.
"""
from fastapi import APIRouter

from aiweather.api.routers.weather_router import router as weather_router
from aiweather.api.routers.ai_weather_router import router as ai_weather_router

router = APIRouter()

router.include_router(weather_router)
router.include_router(ai_weather_router)

__all__ = ["router"]
