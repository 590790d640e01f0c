"""
LLM provider selection for the architect and auditor agents.

Supported providers:
- OpenRouter (default)
- OpenAI
- Google Vertex AI
- Google Gemini (AI Studio key)

CrewAI hands the model string to litellm, so every provider resolves to a
litellm-compatible model name plus the environment variables litellm reads.
"""

import os
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass
from enum import Enum

from .core.config import settings

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENROUTER = "openrouter"
    OPENAI = "openai"
    VERTEX = "vertex"
    GEMINI = "gemini"


@dataclass
class ProviderConfig:
    """Configuration for an LLM provider."""
    provider: LLMProvider
    model_name: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None


DEFAULT_MODELS = {
    LLMProvider.OPENROUTER: "openrouter/openai/gpt-4o-mini",
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.VERTEX: "gemini-1.5-pro",
    LLMProvider.GEMINI: "gemini-1.5-pro",
}


def get_provider_config(
    provider: Optional[str] = None,
    model_name: Optional[str] = None
) -> ProviderConfig:
    """
    Get configuration for the specified provider.

    Args:
        provider: Provider name (defaults to MODEL_PROVIDER setting)
        model_name: Model name (defaults to MODEL_NAME setting or provider default)

    Returns:
        ProviderConfig with all necessary settings
    """
    provider_str = (provider or settings.MODEL_PROVIDER or "openrouter").lower()

    try:
        llm_provider = LLMProvider(provider_str)
    except ValueError:
        logger.warning(f"Unknown provider '{provider_str}', falling back to openrouter")
        llm_provider = LLMProvider.OPENROUTER

    final_model = model_name or settings.MODEL_NAME or DEFAULT_MODELS[llm_provider]

    if llm_provider == LLMProvider.OPENAI:
        return ProviderConfig(
            provider=llm_provider,
            model_name=final_model,
            api_key=settings.OPENAI_API_KEY,
        )

    if llm_provider == LLMProvider.VERTEX:
        return ProviderConfig(
            provider=llm_provider,
            model_name=f"vertex_ai/{final_model}",
        )

    if llm_provider == LLMProvider.GEMINI:
        return ProviderConfig(
            provider=llm_provider,
            model_name=f"gemini/{final_model}",
            api_key=settings.GEMINI_API_KEY,
        )

    # OpenRouter routes on "<vendor>/<model>"; bare names are OpenAI models
    if not final_model.startswith("openrouter/"):
        if "/" not in final_model:
            final_model = f"openai/{final_model}"
        final_model = f"openrouter/{final_model}"

    return ProviderConfig(
        provider=LLMProvider.OPENROUTER,
        model_name=final_model,
        api_key=settings.OPENROUTER_API_KEY,
        base_url=settings.OPENROUTER_BASE_URL,
    )


def configure_environment(config: ProviderConfig) -> None:
    """
    Export the credentials litellm expects for the given provider.

    Args:
        config: Provider configuration to apply
    """
    provider = config.provider

    if provider == LLMProvider.OPENROUTER:
        if config.api_key:
            os.environ["OPENROUTER_API_KEY"] = config.api_key
        if config.base_url:
            os.environ["OPENROUTER_API_BASE"] = config.base_url

    elif provider == LLMProvider.OPENAI:
        if config.api_key:
            os.environ["OPENAI_API_KEY"] = config.api_key

    elif provider == LLMProvider.VERTEX:
        if settings.GOOGLE_PROJECT_ID:
            os.environ["VERTEXAI_PROJECT"] = settings.GOOGLE_PROJECT_ID
        if settings.GOOGLE_LOCATION:
            os.environ["VERTEXAI_LOCATION"] = settings.GOOGLE_LOCATION
        if settings.GOOGLE_APPLICATION_CREDENTIALS:
            os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = settings.GOOGLE_APPLICATION_CREDENTIALS

    elif provider == LLMProvider.GEMINI:
        if config.api_key:
            os.environ["GEMINI_API_KEY"] = config.api_key

    logger.info(f"Configured environment for provider: {provider.value}, model: {config.model_name}")


def get_litellm_model_string(
    provider: Optional[str] = None,
    model_name: Optional[str] = None
) -> str:
    """
    Resolve and apply provider configuration, returning the litellm model string.

    Args:
        provider: Provider name
        model_name: Model name

    Returns:
        Model string in litellm format (e.g., "vertex_ai/gemini-1.5-pro")
    """
    config = get_provider_config(provider, model_name)
    configure_environment(config)
    return config.model_name


def validate_provider_config(provider: str) -> Dict[str, Any]:
    """
    Validate that the required configuration is present for a provider.

    Args:
        provider: Provider name to validate

    Returns:
        Dict with 'valid' bool and 'missing' list of missing config keys
    """
    provider_str = provider.lower()
    missing = []

    if provider_str == "openrouter":
        if not settings.OPENROUTER_API_KEY:
            missing.append("OPENROUTER_API_KEY")

    elif provider_str == "openai":
        if not settings.OPENAI_API_KEY:
            missing.append("OPENAI_API_KEY")

    elif provider_str == "vertex":
        # GOOGLE_APPLICATION_CREDENTIALS is optional when running on GCP
        if not settings.GOOGLE_PROJECT_ID:
            missing.append("GOOGLE_PROJECT_ID")

    elif provider_str == "gemini":
        if not settings.GEMINI_API_KEY:
            missing.append("GEMINI_API_KEY")

    return {
        "valid": len(missing) == 0,
        "missing": missing,
        "provider": provider_str
    }
