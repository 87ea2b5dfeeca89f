"""
Utilitaires partages entre les routers API.
"""
import logging
from typing import Dict, Optional, Type

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

from aiweather.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    GatewayError,
    InvalidArgument,
    InvalidResponse,
    UpstreamError,
)

logger = logging.getLogger(__name__)

CITY_REQUIRED_DETAIL = "City name is required."

# Statut HTTP renvoye pour chaque type d'echec fournisseur.
# Tous les echecs fournisseurs sont aplatis en 500 pour l'appelant.
PROVIDER_ERROR_STATUS: Dict[Type[GatewayError], int] = {
    # Inatteignable depuis HTTP : require_city rejette la ville vide avant l'appel
    InvalidArgument: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    UpstreamError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthenticationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvalidResponse: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class PlainTextError(Exception):
    """Erreur renvoyee a l'appelant sous forme de message texte brut."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def plain_text_error_handler(request: Request, exc: PlainTextError) -> PlainTextResponse:
    """Corps de reponse = le message seul, sans enveloppe JSON."""
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def require_city(city: Optional[str]) -> str:
    """Rejette une ville vide (400) avant tout appel fournisseur."""
    if not city or not city.strip():
        raise PlainTextError(status.HTTP_400_BAD_REQUEST, CITY_REQUIRED_DETAIL)
    return city


def provider_error_to_http(error: GatewayError, context: str) -> PlainTextError:
    """Convertit un echec fournisseur en erreur texte pour l'appelant."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type in type(error).__mro__:
        if error_type in PROVIDER_ERROR_STATUS:
            status_code = PROVIDER_ERROR_STATUS[error_type]
            break
    logger.warning(f"{type(error).__name__} -> HTTP {status_code}: {error.message}")
    return PlainTextError(status_code, f"{context}: {error.message}")
