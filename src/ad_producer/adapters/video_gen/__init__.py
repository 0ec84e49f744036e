"""Motion clip generation adapters."""

from ad_producer.adapters.video_gen.base import (
    VideoGenProvider,
    VideoGenRequest,
    VideoGenResult,
)
from ad_producer.adapters.video_gen.stub import StubVideoGenProvider
from ad_producer.config import settings
from ad_producer.logging import get_logger

logger = get_logger(__name__)


def get_video_gen_provider() -> VideoGenProvider:
    """Get the configured motion clip provider."""
    provider = settings.video_gen_provider.lower()

    if provider != "stub":
        logger.warning("video_gen_provider_unknown", provider=provider, using="stub")
    return StubVideoGenProvider()


__all__ = [
    "StubVideoGenProvider",
    "VideoGenProvider",
    "VideoGenRequest",
    "VideoGenResult",
    "get_video_gen_provider",
]
