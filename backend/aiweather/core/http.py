"""
Client HTTP sortant (httpx) pour les appels OpenWeather et Groq
"""
from typing import AsyncIterator

import httpx
from fastapi import Depends

from aiweather.core.settings import Settings, get_settings


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """Générateur de client HTTP pour l'injection de dépendance (un client par requête)"""
    async with httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT_S) as client:
        yield client
