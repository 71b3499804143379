"""AI backend provider implementations for feed summarization."""

from .base import Candidate, GenerateResponse, SummaryProvider
from .factory import available_providers, create_provider
from .gemini import GeminiProvider

__all__ = [
    "Candidate",
    "GenerateResponse",
    "SummaryProvider",
    "GeminiProvider",
    "create_provider",
    "available_providers",
]
