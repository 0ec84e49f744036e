"""Script analysis adapters."""

from ad_producer.adapters.scripting.base import ScriptingProvider, ScriptResult
from ad_producer.adapters.scripting.llm import LLMScriptingProvider
from ad_producer.adapters.scripting.stub import StubScriptingProvider
from ad_producer.config import settings


def get_scripting_provider() -> ScriptingProvider:
    """Get the configured scripting provider."""
    provider = settings.scripting_provider.lower()

    if provider == "llm":
        return LLMScriptingProvider()
    return StubScriptingProvider()


__all__ = [
    "LLMScriptingProvider",
    "ScriptResult",
    "ScriptingProvider",
    "StubScriptingProvider",
    "get_scripting_provider",
]
