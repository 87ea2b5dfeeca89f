"""
Entité GenerationRequest - Domain Layer
Requête de complétion chat envoyée à Groq (API compatible OpenAI).
"""
from dataclasses import dataclass
from typing import Any, Dict

# Temperature d'echantillonnage : faible = reponses plus factuelles
DEFAULT_SAMPLING_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 100


@dataclass(frozen=True)
class GenerationRequest:
    """Un prompt utilisateur unique et ses paramètres d'échantillonnage."""
    prompt: str
    model: str
    temperature: float = DEFAULT_SAMPLING_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    def to_payload(self) -> Dict[str, Any]:
        """Corps JSON de POST /chat/completions."""
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": self.prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
