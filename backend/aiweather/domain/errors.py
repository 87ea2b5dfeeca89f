"""
Erreurs du domaine - typologie des echecs des fournisseurs externes.

Les services ne levent jamais ces erreurs vers les routers : ils les
encapsulent dans un ProviderResult (voir domain/services/result.py).
"""
from typing import Optional


class GatewayError(Exception):
    """Erreur de base de la passerelle."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(GatewayError):
    """Entree invalide fournie par l'appelant."""


class ConfigurationError(GatewayError):
    """Secret ou parametre de configuration manquant."""


class UpstreamError(GatewayError):
    """Statut HTTP non-2xx ou echec reseau d'un fournisseur.

    status_code vaut None quand le fournisseur n'a pas pu etre joint.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthenticationError(GatewayError):
    """401 renvoye par le fournisseur de generation de texte."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message)
        self.body = body


class InvalidResponse(GatewayError):
    """Reponse 2xx dont le contenu n'a pas la forme attendue."""
