"""
LLM Factory - Creates the inference service adapter from configuration.
"""
from typing import Optional, Dict, Type
from enum import Enum

from neuroscope.llm.base import LLMAdapter
from neuroscope.core.config import Settings, settings
from neuroscope.core.logging import get_logger

logger = get_logger("llm.factory")


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    NONE = "none"  # Offline - heuristic classifiers only


# Registry of adapters
_ADAPTERS: Dict[LLMProvider, Type[LLMAdapter]] = {}


def register_adapter(provider: LLMProvider, adapter_class: Type[LLMAdapter]):
    """Register an adapter class for a provider."""
    _ADAPTERS[provider] = adapter_class
    logger.info(f"Registered LLM adapter: {provider.value}")


def _register_default_adapters():
    """Register default adapters."""
    from neuroscope.llm.openai_adapter import OpenAIAdapter

    register_adapter(LLMProvider.OPENAI, OpenAIAdapter)


def _adapter_kwargs(provider: LLMProvider, config: Settings) -> Dict:
    if provider == LLMProvider.OPENAI:
        return {
            "api_key": config.openai_api_key,
            "model": config.openai_model,
            "base_url": config.openai_base_url or None,
            "timeout": config.llm_timeout_sec,
        }
    return {}


def get_llm(
    provider: Optional[str] = None,
    config: Optional[Settings] = None
) -> Optional[LLMAdapter]:
    """
    Get an LLM adapter for the specified provider.

    Args:
        provider: Provider name ('openai', 'none'). Defaults to config.llm_provider.
        config: Settings to build the adapter from. Defaults to global settings.

    Returns:
        LLMAdapter instance, or None if the provider is disabled or unavailable.
    """
    if not _ADAPTERS:
        _register_default_adapters()

    config = config or settings
    provider_name = provider or config.llm_provider

    try:
        provider_enum = LLMProvider(provider_name.lower())
    except ValueError:
        logger.warning(f"Unknown LLM provider: {provider_name}, using openai")
        provider_enum = LLMProvider.OPENAI

    if provider_enum == LLMProvider.NONE:
        return None

    if provider_enum not in _ADAPTERS:
        logger.warning(f"No adapter registered for: {provider_enum.value}")
        return None

    adapter = _ADAPTERS[provider_enum](**_adapter_kwargs(provider_enum, config))
    if not adapter.is_available():
        logger.warning(f"LLM provider {provider_enum.value} is not configured")
        return None

    return adapter


def list_providers(config: Optional[Settings] = None) -> Dict[str, Dict]:
    """List all providers with their status."""
    if not _ADAPTERS:
        _register_default_adapters()

    config = config or settings
    result = {}
    for provider in LLMProvider:
        if provider == LLMProvider.NONE:
            result[provider.value] = {"available": True, "type": "offline"}
            continue
        if provider not in _ADAPTERS:
            result[provider.value] = {"available": False, "registered": False}
            continue
        adapter = _ADAPTERS[provider](**_adapter_kwargs(provider, config))
        result[provider.value] = adapter.health_check()

    return result
