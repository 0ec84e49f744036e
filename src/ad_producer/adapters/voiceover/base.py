"""Base interface for voiceover generation providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class VoiceoverRequest:
    """Request for voiceover generation."""

    text: str
    voice_id: str | None = None  # Provider-specific voice identifier
    language: str = "en"
    speed: float = 1.0


@dataclass
class VoiceoverResult:
    """Result from voiceover generation."""

    success: bool
    audio_url: str | None = None
    duration_seconds: float | None = None
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class VoiceoverProvider(ABC):
    """Abstract base class for voiceover generation providers.

    Implementations:
    - StubVoiceoverProvider: Returns mock audio references for testing
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        ...

    @abstractmethod
    async def generate(self, request: VoiceoverRequest) -> VoiceoverResult:
        """Generate narration audio from text.

        Args:
            request: Voiceover request with text and voice settings

        Returns:
            VoiceoverResult with the audio location or error information
        """
        ...

    async def health_check(self) -> bool:
        """Check if the provider is available and healthy."""
        return True
