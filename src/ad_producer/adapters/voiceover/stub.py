"""Stub voiceover provider for testing."""

from uuid import uuid4

from ad_producer.adapters.voiceover.base import (
    VoiceoverProvider,
    VoiceoverRequest,
    VoiceoverResult,
)
from ad_producer.logging import get_logger

logger = get_logger(__name__)

WORDS_PER_MINUTE = 150


class StubVoiceoverProvider(VoiceoverProvider):
    """Simulates narration without external calls."""

    @property
    def name(self) -> str:
        return "stub"

    async def generate(self, request: VoiceoverRequest) -> VoiceoverResult:
        word_count = len(request.text.split())
        duration = round(word_count / WORDS_PER_MINUTE * 60 / request.speed, 1)

        logger.info(
            "stub_voiceover_generated",
            text_length=len(request.text),
            voice=request.voice_id,
            duration=duration,
        )

        return VoiceoverResult(
            success=True,
            audio_url=f"stub://voiceover/{uuid4().hex}.mp3",
            duration_seconds=duration,
            metadata={"provider": self.name, "voice_id": request.voice_id or "default"},
        )
