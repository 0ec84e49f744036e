"""Stub motion clip provider for testing."""

from uuid import uuid4

from ad_producer.adapters.video_gen.base import (
    VideoGenProvider,
    VideoGenRequest,
    VideoGenResult,
)
from ad_producer.domain.enums import Section
from ad_producer.logging import get_logger

logger = get_logger(__name__)


class StubVideoGenProvider(VideoGenProvider):
    """Simulates clip generation without external calls."""

    @property
    def name(self) -> str:
        return "stub"

    async def generate(self, request: VideoGenRequest) -> VideoGenResult:
        logger.info(
            "stub_video_generated",
            section=request.section,
            backend=request.provider_id,
            duration=request.duration_seconds,
        )

        return VideoGenResult(
            success=True,
            video_url=f"stub://video/{request.provider_id}/{uuid4().hex}.mp4",
            duration_seconds=float(request.duration_seconds),
            metadata={
                "provider": self.name,
                "backend": request.provider_id,
                "prompt": request.prompt,
            },
        )

    async def stock_broll(self, section: Section, duration_seconds: float) -> VideoGenResult:
        logger.info("stub_stock_broll_fetched", section=section, duration=duration_seconds)

        return VideoGenResult(
            success=True,
            video_url=f"stub://stock/{section}/{uuid4().hex}.mp4",
            duration_seconds=float(duration_seconds),
            metadata={"provider": "stock", "source": "stock", "license": "royalty-free"},
        )
