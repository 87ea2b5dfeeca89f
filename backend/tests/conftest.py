"""
Fixtures partagees : settings isoles, doubles des fournisseurs, client HTTP de test.
"""
import os

# Avant l'import de aiweather.main : pas de fichier de log en test
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from aiweather.core.settings import Settings, get_settings
from aiweather.domain.entities.weather import WeatherReading
from aiweather.domain.services.result import ProviderResult
from aiweather.domain.services.text_generation_service import get_text_generation_service
from aiweather.domain.services.weather_service import get_weather_service
from aiweather.main import app


def make_settings(**overrides) -> Settings:
    """Settings sans .env ni cles reelles : tout vient des overrides."""
    values = {
        "OPENWEATHER_API_KEY": "ow-test-key",
        "GROQ_API_KEY": "groq-test-key",
        "ENVIRONMENT": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeWeatherService:
    """Double de OpenWeatherService qui enregistre les appels."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    async def get_weather(self, city):
        self.calls.append(city)
        return self.result


class FakeTextService:
    """Double de GroqTextService qui enregistre les appels dans l'ordre."""

    def __init__(self, description, suggestions):
        self.description = description
        self.suggestions = suggestions
        self.calls = []

    async def generate_description(self, temperature, humidity, city):
        self.calls.append(("description", temperature, humidity, city))
        return self.description

    async def generate_activity_suggestions(self, temperature, humidity, city):
        self.calls.append(("suggestions", temperature, humidity, city))
        return self.suggestions


@pytest.fixture
def paris_reading():
    return ProviderResult.success(WeatherReading(temperature_c=21.5, humidity_pct=60))


@pytest.fixture
def api():
    """TestClient avec overrides de dependances nettoyes apres chaque test."""
    app.dependency_overrides[get_settings] = lambda: make_settings()
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def override_providers():
    """Installe des doubles de fournisseurs dans l'application."""
    def _install(weather_service=None, text_service=None):
        if weather_service is not None:
            app.dependency_overrides[get_weather_service] = lambda: weather_service
        if text_service is not None:
            app.dependency_overrides[get_text_generation_service] = lambda: text_service
    return _install


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def fake_weather():
    return FakeWeatherService


@pytest.fixture
def fake_text():
    return FakeTextService
