"""Base interface for still image providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ad_producer.domain.enums import Section

AI_SOURCE = "ai"


@dataclass
class ImageGenRequest:
    """Request for one section image."""

    section: Section
    product_name: str
    style: str  # Visual style preset name
    prompt: str
    negative_prompt: str | None = None
    aspect_ratio: str = "16:9"


@dataclass
class ImageGenResult:
    """Result from image generation or stock lookup.

    ``source`` is ``"ai"`` for generated images; anything else names the stock
    library the image came from.
    """

    success: bool
    image_url: str | None = None
    source: str | None = None
    width: int | None = None
    height: int | None = None
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_ai_generated(self) -> bool:
        return self.source == AI_SOURCE


class ImageGenProvider(ABC):
    """Abstract base class for section image providers.

    Implementations:
    - StubImageGenProvider: Returns placeholder images for testing
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        ...

    @abstractmethod
    async def generate(self, request: ImageGenRequest) -> ImageGenResult:
        """Produce an image for a section.

        Args:
            request: Section, product and prompt details

        Returns:
            ImageGenResult with the image location or error information
        """
        ...

    async def health_check(self) -> bool:
        return True
