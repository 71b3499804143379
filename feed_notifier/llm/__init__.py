"""AI backend providers and tracing."""

from .providers.base import Candidate, GenerateResponse, SummaryProvider
from .providers.factory import available_providers, create_provider
from .providers.gemini import GeminiProvider
from .tracing import flush, setup_langfuse

__all__ = [
    "Candidate",
    "GenerateResponse",
    "SummaryProvider",
    "GeminiProvider",
    "create_provider",
    "available_providers",
    "setup_langfuse",
    "flush",
]
