"""Voiceover generation adapters."""

from ad_producer.adapters.voiceover.base import (
    VoiceoverProvider,
    VoiceoverRequest,
    VoiceoverResult,
)
from ad_producer.adapters.voiceover.stub import StubVoiceoverProvider
from ad_producer.config import settings
from ad_producer.logging import get_logger

logger = get_logger(__name__)


def get_voiceover_provider() -> VoiceoverProvider:
    """Get the configured voiceover provider."""
    provider = settings.voiceover_provider.lower()

    if provider != "stub":
        logger.warning("voiceover_provider_unknown", provider=provider, using="stub")
    return StubVoiceoverProvider()


__all__ = [
    "StubVoiceoverProvider",
    "VoiceoverProvider",
    "VoiceoverRequest",
    "VoiceoverResult",
    "get_voiceover_provider",
]
