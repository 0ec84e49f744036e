"""Pytest configuration and fixtures."""

import asyncio
import os
from datetime import UTC, datetime, timedelta

import pytest

# Set test environment before importing app modules
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LLM_PROVIDER"] = "stub"
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["LOG_EMIT_DELAY_SECONDS"] = "0"

from ad_producer.adapters.evaluation.base import (  # noqa: E402
    EvaluationProvider,
    EvaluationRequest,
    EvaluationResult,
    SectionScore,
)
from ad_producer.adapters.image_gen.base import (  # noqa: E402
    ImageGenProvider,
    ImageGenRequest,
    ImageGenResult,
)
from ad_producer.adapters.scripting.stub import StubScriptingProvider  # noqa: E402
from ad_producer.adapters.video_gen.base import (  # noqa: E402
    VideoGenProvider,
    VideoGenRequest,
    VideoGenResult,
)
from ad_producer.adapters.voiceover.base import (  # noqa: E402
    VoiceoverProvider,
    VoiceoverRequest,
    VoiceoverResult,
)
from ad_producer.domain.enums import Section  # noqa: E402
from ad_producer.domain.models import Brief  # noqa: E402
from ad_producer.services.content_classifier import RuleBasedContentClassifier  # noqa: E402
from ad_producer.services.pipeline import ProductionPipeline  # noqa: E402
from ad_producer.services.quality_gate import QualityEvaluationGate  # noqa: E402


class FakeScripting(StubScriptingProvider):
    """Template scripting that can be told to raise."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls = 0

    async def analyze(self, brief):
        self.calls += 1
        if self.error:
            raise self.error
        return await super().analyze(brief)


class FakeVoiceover(VoiceoverProvider):
    def __init__(self, error: Exception | None = None, on_call=None) -> None:
        self.error = error
        self.on_call = on_call
        self.requests: list[VoiceoverRequest] = []

    @property
    def name(self) -> str:
        return "fake-voice"

    async def generate(self, request: VoiceoverRequest) -> VoiceoverResult:
        self.requests.append(request)
        if self.on_call:
            self.on_call()
        if self.error:
            raise self.error
        return VoiceoverResult(success=True, audio_url="fake://voiceover.mp3", duration_seconds=58.0)


class FakeImageGen(ImageGenProvider):
    """Image capability whose failures are scripted per call number (1-based)."""

    def __init__(self, failures: dict[int, Exception] | None = None) -> None:
        self.failures = failures or {}
        self.requests: list[ImageGenRequest] = []

    @property
    def name(self) -> str:
        return "fake-image"

    async def generate(self, request: ImageGenRequest) -> ImageGenResult:
        self.requests.append(request)
        error = self.failures.get(len(self.requests))
        if error:
            raise error
        return ImageGenResult(
            success=True,
            image_url=f"fake://images/{request.section}/{len(self.requests)}.png",
            source="ai" if request.section is Section.HOOK else "stock",
            width=1920,
            height=1080,
            metadata={"prompt": request.prompt},
        )


class FakeVideoGen(VideoGenProvider):
    def __init__(
        self,
        error: Exception | None = None,
        stock_error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.error = error
        self.stock_error = stock_error
        self.delay = delay
        self.requests: list[VideoGenRequest] = []
        self.stock_requests: list[tuple[Section, float]] = []

    @property
    def name(self) -> str:
        return "fake-video"

    async def generate(self, request: VideoGenRequest) -> VideoGenResult:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return VideoGenResult(
            success=True,
            video_url=f"fake://video/{request.provider_id}.mp4",
            duration_seconds=request.duration_seconds,
            metadata={"prompt": request.prompt},
        )

    async def stock_broll(self, section: Section, duration_seconds: float) -> VideoGenResult:
        self.stock_requests.append((section, duration_seconds))
        if self.stock_error:
            raise self.stock_error
        return VideoGenResult(
            success=True,
            video_url=f"fake://stock/{section}.mp4",
            duration_seconds=duration_seconds,
            metadata={"source": "stock", "license": "royalty-free"},
        )


class ScriptedEvaluator(EvaluationProvider):
    """Scores originals by section and regenerated assets with a fixed score."""

    def __init__(
        self,
        section_scores: dict[Section, int] | None = None,
        default_score: int = 85,
        regenerated_score: int = 82,
        error: Exception | None = None,
    ) -> None:
        self.section_scores = section_scores or {}
        self.default_score = default_score
        self.regenerated_score = regenerated_score
        self.error = error
        self.requests: list[EvaluationRequest] = []

    @property
    def name(self) -> str:
        return "scripted"

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        self.requests.append(request)
        if self.error:
            raise self.error
        scores = []
        for asset in request.assets:
            if asset.regeneration_count:
                overall = self.regenerated_score
            else:
                overall = self.section_scores.get(asset.section, self.default_score)
            scores.append(
                SectionScore(
                    asset_id=asset.id,
                    section=asset.section,
                    relevance=overall,
                    technical_quality=overall,
                    brand_alignment=overall,
                    emotional_impact=overall,
                    overall=overall,
                )
            )
        return EvaluationResult(success=True, scores=scores)


class FakeClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def cbd_brief() -> Brief:
    """The CBD oil brief used across pipeline scenarios."""
    return Brief(
        product_name="CBD Oil",
        product_description="Full-spectrum hemp extract",
        target_audience="Busy professionals",
        key_benefits=["better sleep", "less stress"],
        duration_seconds=60,
        platform="youtube",
        style="professional",
        call_to_action="Shop now at our store",
    )


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_pipeline(sleep):
    """Build a pipeline wired to fakes; keyword arguments override any collaborator."""

    def _make(**overrides) -> ProductionPipeline:
        evaluator = overrides.pop("evaluator", None) or ScriptedEvaluator()
        kwargs = {
            "scripting": FakeScripting(),
            "voiceover": FakeVoiceover(),
            "image_gen": FakeImageGen(),
            "video_gen": FakeVideoGen(),
            "gate": QualityEvaluationGate(evaluator=evaluator),
            "classifier": RuleBasedContentClassifier(),
            "clock": FakeClock(),
            "sleep": sleep,
            "log_emit_delay_seconds": 0.5,
        }
        kwargs.update(overrides)
        return ProductionPipeline(**kwargs)

    return _make
