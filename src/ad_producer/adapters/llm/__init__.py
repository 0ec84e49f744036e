"""LLM provider adapters."""

from ad_producer.adapters.llm.anthropic import AnthropicProvider
from ad_producer.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse
from ad_producer.adapters.llm.openai import OpenAIProvider
from ad_producer.adapters.llm.stub import StubLLMProvider
from ad_producer.config import settings
from ad_producer.logging import get_logger

logger = get_logger(__name__)


def has_llm_credentials() -> bool:
    """Whether any real LLM backend has an API key configured."""
    return bool(settings.anthropic_api_key or settings.openai_api_key)


def get_llm_provider() -> LLMProvider:
    """Get the configured LLM provider, falling back on whichever key is present."""
    provider_name = settings.llm_provider.lower()

    if provider_name == "stub":
        return StubLLMProvider()
    if provider_name == "anthropic" and settings.anthropic_api_key:
        return AnthropicProvider()
    if provider_name == "openai" and settings.openai_api_key:
        return OpenAIProvider()

    if settings.anthropic_api_key:
        return AnthropicProvider()
    if settings.openai_api_key:
        return OpenAIProvider()

    logger.warning("llm_provider_unconfigured", requested=provider_name, using="stub")
    return StubLLMProvider()


__all__ = [
    "AnthropicProvider",
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "StubLLMProvider",
    "get_llm_provider",
    "has_llm_credentials",
]
