"""Stub image provider for testing."""

from uuid import uuid4

from ad_producer.adapters.image_gen.base import (
    AI_SOURCE,
    ImageGenProvider,
    ImageGenRequest,
    ImageGenResult,
)
from ad_producer.domain.enums import Section
from ad_producer.logging import get_logger

logger = get_logger(__name__)

# Sections rendered as AI hero images; the rest come from the stock library
AI_SECTIONS = frozenset({Section.HOOK, Section.SOLUTION, Section.CTA})

DIMENSIONS = {
    "16:9": (1920, 1080),
    "9:16": (1080, 1920),
    "1:1": (1080, 1080),
}


class StubImageGenProvider(ImageGenProvider):
    """Returns placeholder image URLs without external calls."""

    @property
    def name(self) -> str:
        return "stub"

    async def generate(self, request: ImageGenRequest) -> ImageGenResult:
        width, height = DIMENSIONS.get(request.aspect_ratio, DIMENSIONS["16:9"])
        source = AI_SOURCE if request.section in AI_SECTIONS else "stock"

        logger.info(
            "stub_image_generated",
            section=request.section,
            source=source,
            prompt=request.prompt[:80],
        )

        return ImageGenResult(
            success=True,
            image_url=f"stub://images/{request.section}/{uuid4().hex}.png",
            source=source,
            width=width,
            height=height,
            metadata={"provider": self.name, "prompt": request.prompt},
        )
