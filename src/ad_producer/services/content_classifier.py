"""Scene content classification for provider recommendations.

Two strategies share one output contract: an LLM classifier that labels a whole batch
in a single request, and a keyword rule classifier. The LLM strategy delegates to the
rules for the entire batch whenever its response cannot be trusted.
"""

import json
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

import httpx

from ad_producer.adapters.llm import LLMMessage, LLMProvider, get_llm_provider, has_llm_credentials
from ad_producer.config import settings
from ad_producer.domain.enums import ContentClassification
from ad_producer.domain.models import utcnow
from ad_producer.errors import ProviderError
from ad_producer.logging import get_logger

logger = get_logger(__name__)

RECOMMENDABLE_PROVIDERS = ("runway", "kling", "luma", "hailuo")
DEFAULT_PROVIDER = "runway"
DEFAULT_CONFIDENCE = 70

# (classification, provider, weight, vocabulary)
KEYWORD_VOCABULARIES: list[tuple[ContentClassification, str, float, tuple[str, ...]]] = [
    (
        ContentClassification.CINEMATIC,
        "runway",
        2.0,
        (
            "cinematic", "dramatic", "epic", "emotional", "inspiring", "powerful",
            "stunning", "breathtaking", "majestic", "sweeping", "film",
        ),
    ),
    (
        ContentClassification.HUMAN_SUBJECTS,
        "kling",
        1.5,
        (
            "person", "people", "face", "talking", "speaking", "testimonial", "interview",
            "customer", "woman", "man", "practitioner", "expert", "smile", "expression",
        ),
    ),
    (
        ContentClassification.PRODUCT_REVEAL,
        "luma",
        1.8,
        (
            "product", "bottle", "package", "supplement", "item", "close-up", "showcase",
            "display", "reveal", "unboxing", "box", "container",
        ),
    ),
    (
        ContentClassification.BROLL,
        "hailuo",
        1.3,
        (
            "b-roll", "broll", "ambient", "background", "establishing", "nature",
            "landscape", "scenery", "atmosphere", "environment", "exterior",
        ),
    ),
]

# Scene types that decide the classification outright
SCENE_TYPE_OVERRIDES: dict[str, tuple[str, ContentClassification, int, str]] = {
    "hook": ("runway", ContentClassification.CINEMATIC, 80, "Hook/CTA scenes benefit from cinematic impact"),
    "cta": ("runway", ContentClassification.CINEMATIC, 80, "Hook/CTA scenes benefit from cinematic impact"),
    "testimonial": (
        "kling",
        ContentClassification.HUMAN_SUBJECTS,
        90,
        "Testimonial requires natural human expressions",
    ),
    "product": ("luma", ContentClassification.PRODUCT_REVEAL, 85, "Product scene needs detailed product showcase"),
    "broll": ("hailuo", ContentClassification.BROLL, 75, "B-roll/explanation is cost-effective with Hailuo"),
    "explanation": ("hailuo", ContentClassification.BROLL, 75, "B-roll/explanation is cost-effective with Hailuo"),
}

# Selector content type implied by each classification
CLASSIFICATION_CONTENT_TYPES: dict[ContentClassification, str | None] = {
    ContentClassification.HUMAN_SUBJECTS: "person",
    ContentClassification.PRODUCT_REVEAL: "product",
    ContentClassification.BROLL: "nature",
    ContentClassification.CINEMATIC: None,
    ContentClassification.MIXED: None,
}


@dataclass
class SceneContent:
    """Scene text handed to a classifier."""

    scene_id: str
    scene_index: int
    scene_type: str
    narration: str
    visual_direction: str
    duration: float


@dataclass
class ProviderRecommendation:
    """Classifier verdict for one scene."""

    scene_id: str
    scene_index: int
    recommended_provider: str
    fallback_provider: str
    confidence: int
    reasoning: str
    content_classification: ContentClassification

    @property
    def content_type(self) -> str | None:
        return content_type_for(self.content_classification)


@dataclass
class BatchProviderRecommendations:
    """Recommendations for every scene of a project."""

    recommendations: list[ProviderRecommendation]
    analysis_timestamp: datetime = field(default_factory=utcnow)
    total_scenes: int = 0
    strategy: str = "rules"


def content_type_for(classification: ContentClassification | str) -> str | None:
    """Map a classification onto the selector's content type vocabulary."""
    return CLASSIFICATION_CONTENT_TYPES.get(ContentClassification(classification))


def fallback_provider_for(provider: str) -> str:
    return "kling" if provider == "runway" else "runway"


class ContentClassifier(ABC):
    """Labels scenes with a content classification and provider pair."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def classify(self, scenes: list[SceneContent]) -> BatchProviderRecommendations:
        """Classify every scene. Never raises for bad model output."""
        ...


class RuleBasedContentClassifier(ContentClassifier):
    """Deterministic keyword classifier."""

    @property
    def name(self) -> str:
        return "rules"

    async def classify(self, scenes: list[SceneContent]) -> BatchProviderRecommendations:
        return self.classify_sync(scenes)

    def classify_sync(self, scenes: list[SceneContent]) -> BatchProviderRecommendations:
        recommendations = [self.classify_scene(scene) for scene in scenes]
        return BatchProviderRecommendations(
            recommendations=recommendations,
            total_scenes=len(scenes),
            strategy=self.name,
        )

    def classify_scene(self, scene: SceneContent) -> ProviderRecommendation:
        provider, classification, confidence, reasoning = self._rules(scene)
        return ProviderRecommendation(
            scene_id=scene.scene_id,
            scene_index=scene.scene_index,
            recommended_provider=provider,
            fallback_provider=fallback_provider_for(provider),
            confidence=confidence,
            reasoning=reasoning,
            content_classification=classification,
        )

    @staticmethod
    def _rules(scene: SceneContent) -> tuple[str, ContentClassification, int, str]:
        override = SCENE_TYPE_OVERRIDES.get(scene.scene_type.lower())
        if override:
            return override

        text = f"{scene.narration} {scene.visual_direction}".lower()
        best: tuple[float, ContentClassification, str] | None = None
        for classification, provider, weight, vocabulary in KEYWORD_VOCABULARIES:
            weighted = sum(1 for keyword in vocabulary if keyword in text) * weight
            # Strict comparison keeps the earlier vocabulary on ties
            if best is None or weighted > best[0]:
                best = (weighted, classification, provider)

        if best and best[0] > 0:
            weighted, classification, provider = best
            return (
                provider,
                classification,
                min(85, round(50 + weighted * 10)),
                f"Keyword analysis detected {classification} content",
            )

        return DEFAULT_PROVIDER, ContentClassification.MIXED, 60, "Default to Runway for best quality"


class LLMContentClassifier(ContentClassifier):
    """Classifies a whole batch of scenes with one LLM request.

    Malformed output, transport errors and answers of the wrong length hand the entire
    batch to the rule classifier; partial model results are never mixed in.
    """

    PROMPT_HEADER = """You are an expert video production assistant. Analyze each scene and recommend the optimal AI video generation provider based on the content.

PROVIDER SPECIALIZATIONS:
- RUNWAY: Best for cinematic, dramatic, emotional content. Epic shots, dramatic lighting, emotional storytelling.
- KLING: Best for human subjects, people, faces, talking heads, testimonials. Natural human movement and expressions.
- LUMA: Best for product reveals, product shots, close-ups of objects, commercial product showcases.
- HAILUO: Best for B-roll, ambient footage, nature scenes, establishing shots. Cost-effective for simpler content.

SCENES TO ANALYZE:"""

    PROMPT_FOOTER = """For each scene determine the content type (cinematic, human_subjects, product_reveal, broll or mixed), the best provider, a confidence from 0 to 100, and brief reasoning.

Respond with ONLY a JSON array, one object per scene, in scene order:
[
  {
    "scene_index": 0,
    "scene_id": "scene_id",
    "content_classification": "cinematic|human_subjects|product_reveal|broll|mixed",
    "recommended_provider": "runway|kling|luma|hailuo",
    "fallback_provider": "runway|kling|luma|hailuo",
    "confidence": 85,
    "reasoning": "Brief explanation"
  }
]"""

    def __init__(
        self,
        llm_provider: LLMProvider | None = None,
        fallback: RuleBasedContentClassifier | None = None,
    ) -> None:
        self.llm = llm_provider or get_llm_provider()
        self.fallback = fallback or RuleBasedContentClassifier()

    @property
    def name(self) -> str:
        return f"llm:{self.llm.name}"

    def build_prompt(self, scenes: list[SceneContent]) -> str:
        described = "\n".join(
            f"Scene {index + 1} (ID: {scene.scene_id})\n"
            f"- Type: {scene.scene_type}\n"
            f"- Duration: {scene.duration}s\n"
            f'- Narration: "{scene.narration}"\n'
            f'- Visual Direction: "{scene.visual_direction}"\n'
            for index, scene in enumerate(scenes)
        )
        return f"{self.PROMPT_HEADER}\n{described}\n{self.PROMPT_FOOTER}"

    async def classify(self, scenes: list[SceneContent]) -> BatchProviderRecommendations:
        if not scenes:
            return self.fallback.classify_sync(scenes)

        try:
            response = await self.llm.complete(
                [LLMMessage(role="user", content=self.build_prompt(scenes))],
                temperature=0.2,
                max_tokens=4000,
            )
            recommendations = self.parse(response.content, scenes)
        except (httpx.HTTPError, ProviderError, ValueError) as e:
            logger.warning(
                "llm_classification_fallback",
                provider=self.llm.name,
                error=str(e),
                scenes=len(scenes),
            )
            return self.fallback.classify_sync(scenes)

        logger.info(
            "llm_classification_complete",
            provider=self.llm.name,
            scenes=len(scenes),
            classifications=[r.content_classification.value for r in recommendations],
        )
        return BatchProviderRecommendations(
            recommendations=recommendations,
            total_scenes=len(scenes),
            strategy=self.name,
        )

    def parse(self, text: str, scenes: list[SceneContent]) -> list[ProviderRecommendation]:
        """Extract and validate the JSON array from a model response.

        Raises:
            ValueError: When no array of the right length can be read
        """
        match = re.search(r"\[.*\]", text, re.DOTALL)
        if not match:
            raise ValueError("No JSON array found in classifier response")

        parsed = json.loads(match.group(0))  # JSONDecodeError is a ValueError
        if not isinstance(parsed, list):
            raise ValueError("Classifier response is not a JSON array")
        if len(parsed) != len(scenes):
            raise ValueError(f"Expected {len(scenes)} recommendations, got {len(parsed)}")

        return [self._validate(entry, scene) for entry, scene in zip(parsed, scenes)]

    @staticmethod
    def _validate(entry: object, scene: SceneContent) -> ProviderRecommendation:
        if not isinstance(entry, dict):
            raise ValueError("Classifier entry is not an object")

        provider = _valid_provider(entry.get("recommended_provider"))
        return ProviderRecommendation(
            scene_id=scene.scene_id,
            scene_index=scene.scene_index,
            recommended_provider=provider,
            fallback_provider=_valid_provider(entry.get("fallback_provider") or fallback_provider_for(provider)),
            confidence=_valid_confidence(entry.get("confidence")),
            reasoning=str(entry.get("reasoning") or "AI analysis"),
            content_classification=_valid_classification(entry.get("content_classification")),
        )


def _valid_provider(value: object) -> str:
    normalized = str(value or "").strip().lower()
    return normalized if normalized in RECOMMENDABLE_PROVIDERS else DEFAULT_PROVIDER


def _valid_classification(value: object) -> ContentClassification:
    try:
        return ContentClassification(str(value or "").strip().lower())
    except ValueError:
        return ContentClassification.MIXED


def _valid_confidence(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float) or not math.isfinite(value):
        return DEFAULT_CONFIDENCE
    return max(0, min(100, round(value)))


def get_content_classifier() -> ContentClassifier:
    """Get the configured classifier; rules when no LLM key is available."""
    if settings.classifier_provider == "llm" and has_llm_credentials():
        return LLMContentClassifier()
    return RuleBasedContentClassifier()
