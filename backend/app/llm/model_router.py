"""Provider → model selection."""

from __future__ import annotations

from app.config import settings

SUPPORTED_PROVIDERS = ("openai", "anthropic")

# Display names used in analysis message headers
PROVIDER_LABELS = {
    "openai": "GPT-4o",
    "anthropic": "Claude 3.5 Sonnet",
}


def get_model_for_provider(provider: str) -> str:
    if provider == "openai":
        return settings.model_openai
    elif provider == "anthropic":
        return settings.model_anthropic
    raise ValueError(f"Unsupported provider: {provider!r}")


def get_api_key(provider: str) -> str:
    if provider == "openai":
        return settings.openai_api_key
    elif provider == "anthropic":
        return settings.anthropic_api_key
    raise ValueError(f"Unsupported provider: {provider!r}")


def provider_label(provider: str) -> str:
    return PROVIDER_LABELS.get(provider, provider)
