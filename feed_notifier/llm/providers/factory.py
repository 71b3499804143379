"""Provider factory and registry for AI summarization backends."""

from __future__ import annotations

from ...config import Settings
from .base import SummaryProvider
from .gemini import GeminiProvider


ProviderBuilder = type[SummaryProvider]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "gemini": GeminiProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def create_provider(name: str, settings: Settings) -> SummaryProvider:
    """Build a provider instance from runtime settings."""
    builder = _PROVIDER_REGISTRY.get(name.lower().strip())
    if builder is None:
        supported = ", ".join(available_providers())
        raise ValueError(f"Unsupported provider: {name}. Supported: {supported}")
    return builder(
        settings.ai_endpoint_url,
        timeout=settings.ai_timeout_seconds,
        trust_env=settings.ai_trust_env,
    )
