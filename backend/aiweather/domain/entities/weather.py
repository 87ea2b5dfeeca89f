"""
Entités météo - Domain Layer
Lecture OpenWeather et schémas de réponse de l'API.
"""
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class WeatherReading:
    """Température (°C) et humidité (%) d'une ville au moment de l'appel."""
    temperature_c: float
    humidity_pct: int


class WeatherRead(BaseModel):
    """Schéma de réponse de GET /weather/{city}."""
    model_config = ConfigDict(populate_by_name=True)

    city: str
    temperature: float = Field(alias="Temperature")
    humidity: int = Field(alias="Humidity")


class AiWeatherRead(BaseModel):
    """Schéma de réponse de GET /ai-weather/{city}."""
    city: str
    temperature: float
    humidity: int
    ai_weather_description: str
    ai_activity_suggestions: str
