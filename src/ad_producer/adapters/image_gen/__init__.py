"""Image generation adapters."""

from ad_producer.adapters.image_gen.base import (
    ImageGenProvider,
    ImageGenRequest,
    ImageGenResult,
)
from ad_producer.adapters.image_gen.stub import StubImageGenProvider
from ad_producer.config import settings
from ad_producer.logging import get_logger

logger = get_logger(__name__)


def get_image_gen_provider() -> ImageGenProvider:
    """Get the configured image provider."""
    provider = settings.image_gen_provider.lower()

    if provider != "stub":
        logger.warning("image_gen_provider_unknown", provider=provider, using="stub")
    return StubImageGenProvider()


__all__ = [
    "ImageGenProvider",
    "ImageGenRequest",
    "ImageGenResult",
    "StubImageGenProvider",
    "get_image_gen_provider",
]
