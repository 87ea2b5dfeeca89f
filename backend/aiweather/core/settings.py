"""
Configuration centralisée pour la passerelle AI Weather
Utilise pydantic-settings pour la gestion des variables d'environnement
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, model_validator
from typing import List, Optional


class Settings(BaseSettings):
    """Configuration de l'application"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # OpenWeather
    OPENWEATHER_API_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("OPENWEATHER_API_KEY", "OPENWEATHER_APIKEY"),
        description="Clé API OpenWeather (vide = erreur de configuration a chaque appel)"
    )
    OPENWEATHER_BASE_URL: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        description="Endpoint 'current weather' d'OpenWeather"
    )

    # Groq (API compatible OpenAI)
    GROQ_API_KEY: str = Field(
        default="",
        description="Clé API Groq (vide = erreur de configuration a chaque appel)"
    )
    GROQ_BASE_URL: str = Field(
        default="https://api.groq.com/openai/v1",
        description="URL de base de l'API Groq"
    )
    GROQ_MODEL: str = Field(default="llama-3.1-8b-instant")

    # Appels sortants
    UPSTREAM_TIMEOUT_S: Optional[float] = Field(
        default=None,
        description="Timeout des appels vers OpenWeather/Groq en secondes (None = pas de timeout)"
    )
    AI_PARALLEL_GENERATION: bool = Field(
        default=False,
        description="Lance les deux generations IA en parallele au lieu de l'une apres l'autre"
    )

    # CORS
    ALLOWED_ORIGINS: List[str] = Field(
        default=[],
        description="Origines autorisées pour CORS (configuré automatiquement selon ENVIRONMENT si vide)"
    )

    # Monitoring (Sentry)
    SENTRY_DSN: str = Field(
        default="",
        description="DSN Sentry pour le error tracking (vide = Sentry desactive)"
    )

    # Application
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(
        default="",
        description="Niveau de logging (auto-configuré selon ENVIRONMENT si vide)"
    )

    @model_validator(mode="after")
    def _configure_environment(self) -> "Settings":
        """Configure DEBUG et LOG_LEVEL selon ENVIRONMENT."""
        is_prod = self.ENVIRONMENT == "production"
        # En production, forcer DEBUG=False
        if is_prod:
            self.DEBUG = False
        # LOG_LEVEL par défaut selon ENVIRONMENT
        if not self.LOG_LEVEL:
            self.LOG_LEVEL = "WARNING" if is_prod else "INFO"
        self.LOG_LEVEL = self.LOG_LEVEL.upper()
        return self

    @model_validator(mode="after")
    def _set_default_origins(self) -> "Settings":
        """Définit les origines CORS par défaut hors production si non configurées."""
        if not self.ALLOWED_ORIGINS and self.ENVIRONMENT != "production":
            self.ALLOWED_ORIGINS = [
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            ]
        return self


def get_settings() -> Settings:
    """Récupère la configuration"""
    return Settings()
