"""
Initialisation des entités du domaine
"""
from .weather import WeatherReading, WeatherRead, AiWeatherRead
from .generation import GenerationRequest

__all__ = [
    "WeatherReading", "WeatherRead", "AiWeatherRead",
    "GenerationRequest",
]
