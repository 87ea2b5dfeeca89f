"""
Resultat discrimine des operations fournisseurs : succes ou erreur typee.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from aiweather.domain.errors import GatewayError

T = TypeVar("T")


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """Succes (value) ou echec (error), jamais les deux."""
    value: Optional[T] = None
    error: Optional[GatewayError] = None

    @classmethod
    def success(cls, value: T) -> "ProviderResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: GatewayError) -> "ProviderResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Retourne la valeur ou leve l'erreur portee."""
        if self.error is not None:
            raise self.error
        return self.value
