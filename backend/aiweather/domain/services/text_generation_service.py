"""
Service de generation de texte — descriptions meteo et suggestions d'activites via Groq.

Les deux operations publiques ne different que par le prompt : la requete,
l'appel HTTP et l'extraction de choices[0].message.content sont communs (_complete).
"""
import logging
from typing import Any

import httpx
from fastapi import Depends

from aiweather.core.http import get_http_client
from aiweather.core.settings import Settings, get_settings
from aiweather.domain.entities.generation import GenerationRequest
from aiweather.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    GatewayError,
    InvalidResponse,
    UpstreamError,
)
from aiweather.domain.services.result import ProviderResult

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "/chat/completions"

DESCRIPTION_PROMPT = (
    "Briefly describe the current weather in {city} in natural, friendly language. "
    "The temperature is {temperature}°C and the humidity is {humidity}%. "
    "Answer in at most 2 sentences using casual, engaging language."
)

ACTIVITY_PROMPT = (
    "Suggest 2 or 3 short, specific activities for the current weather in {city}. "
    "The temperature is {temperature}°C and the humidity is {humidity}%. "
    "Answer with a short list, one activity per line, without long explanations."
)


def build_description_prompt(temperature: float, humidity: int, city: str) -> str:
    return DESCRIPTION_PROMPT.format(city=city, temperature=temperature, humidity=humidity)


def build_activity_prompt(temperature: float, humidity: int, city: str) -> str:
    return ACTIVITY_PROMPT.format(city=city, temperature=temperature, humidity=humidity)


def _extract_first_completion(data: Any) -> str:
    """Retourne choices[0].message.content ('' si content est null)."""
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices:
        raise InvalidResponse("Invalid response format from Groq API")

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict) or "content" not in message:
        raise InvalidResponse("Invalid response format from Groq API")

    content = message["content"]
    if content is None:
        return ""
    if not isinstance(content, str):
        raise InvalidResponse("Invalid response format from Groq API")
    return content


class GroqTextService:
    """Fournisseur de generation de texte Groq (API compatible OpenAI)."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    async def generate_description(
        self, temperature: float, humidity: int, city: str
    ) -> ProviderResult[str]:
        """Description courte et amicale du temps actuel."""
        return await self._complete(build_description_prompt(temperature, humidity, city))

    async def generate_activity_suggestions(
        self, temperature: float, humidity: int, city: str
    ) -> ProviderResult[str]:
        """2 ou 3 activites adaptees au temps, une par ligne."""
        return await self._complete(build_activity_prompt(temperature, humidity, city))

    async def _complete(self, prompt: str) -> ProviderResult[str]:
        try:
            text = await self._call_groq(prompt)
        except GatewayError as exc:
            return ProviderResult.failure(exc)
        return ProviderResult.success(text)

    async def _call_groq(self, prompt: str) -> str:
        api_key = self.settings.GROQ_API_KEY
        if not api_key:
            raise ConfigurationError("Groq API key is not configured. Check GROQ_API_KEY.")

        request = GenerationRequest(prompt=prompt, model=self.settings.GROQ_MODEL)
        url = f"{self.settings.GROQ_BASE_URL.rstrip('/')}{CHAT_COMPLETIONS_PATH}"
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = await self.client.post(url, json=request.to_payload(), headers=headers)
        except httpx.RequestError as e:
            logger.warning(f"Groq erreur reseau: {e}")
            raise UpstreamError(f"Groq request failed: {e}") from e

        if resp.status_code == 401:
            logger.warning("Groq HTTP 401 : cle API refusee")
            raise AuthenticationError(
                "Groq API authentication failed. Please verify your API key is correct "
                f"and active. Error: {resp.text}",
                body=resp.text,
            )
        if not resp.is_success:
            logger.warning(f"Groq HTTP {resp.status_code}")
            raise UpstreamError(
                f"Groq API error {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise InvalidResponse("Invalid response format from Groq API") from e
        return _extract_first_completion(data)


def get_text_generation_service(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> GroqTextService:
    """Fournit le service de generation pour l'injection de dependance."""
    return GroqTextService(settings, client)
