"""Base interface for motion clip generation providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ad_producer.domain.enums import Section


@dataclass
class VideoGenRequest:
    """Request for a generated motion clip."""

    section: Section
    style: str  # Visual style preset name
    duration_seconds: float
    provider_id: str  # Catalog provider chosen by the selector
    prompt: str
    negative_prompt: str | None = None
    aspect_ratio: str = "16:9"


@dataclass
class VideoGenResult:
    """Result from clip generation or stock footage lookup."""

    success: bool
    video_url: str | None = None
    duration_seconds: float | None = None
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class VideoGenProvider(ABC):
    """Abstract base class for motion clip providers.

    A provider routes each request to the backend named by ``provider_id`` and also
    offers licensed stock B-roll as a substitute when generation fails.

    Implementations:
    - StubVideoGenProvider: Returns placeholder clips for testing
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        ...

    @abstractmethod
    async def generate(self, request: VideoGenRequest) -> VideoGenResult:
        """Generate a motion clip.

        Args:
            request: Section, prompt and chosen backend

        Returns:
            VideoGenResult with the clip location or error information
        """
        ...

    @abstractmethod
    async def stock_broll(self, section: Section, duration_seconds: float) -> VideoGenResult:
        """Fetch licensed stock footage for a section."""
        ...

    async def health_check(self) -> bool:
        return True
