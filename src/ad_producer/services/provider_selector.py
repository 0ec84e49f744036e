"""Per-scene video provider selection using additive weighted scoring."""

import re
from dataclasses import dataclass, field

from ad_producer.logging import get_logger
from ad_producer.presets.styles import PROFESSIONAL, get_style
from ad_producer.services.provider_catalog import (
    DEFAULT_CATALOG,
    ProviderCapability,
    ProviderCatalog,
)

logger = get_logger(__name__)

BASELINE_SCORE = 50
DURATION_PENALTY = 30
STYLE_PREFERENCE_BONUSES = (15, 10, 5)

# (provider, points, reason) per content type. A None reason adds points silently.
CONTENT_TYPE_RULES: dict[str, list[tuple[str, int, str | None]]] = {
    "person": [
        ("kling", 30, "Best for human subjects"),
        ("runway", 15, None),
    ],
    "product": [
        ("luma", 30, "Excellent product reveals"),
        ("runway", 20, "Premium product quality"),
    ],
    "nature": [
        ("hailuo", 25, "Cost-effective nature scenes"),
        ("hunyuan", 20, None),
        ("runway", 20, "Cinematic landscapes"),
    ],
    "abstract": [
        ("kling", 20, "Creative motion handling"),
        ("hunyuan", 15, None),
        ("runway", 15, None),
    ],
    "lifestyle": [
        ("kling", 25, "Natural lifestyle rendering"),
        ("hailuo", 15, None),
    ],
}

SCENE_TYPE_RULES: dict[str, list[tuple[str, int, str | None]]] = {
    "hook": [
        ("runway", 25, "Cinematic hook impact"),
        ("veo", 20, "High-quality opening"),
    ],
    "problem": [("kling", 20, "Authentic emotional expressions")],
    "agitation": [("kling", 20, "Authentic emotional expressions")],
    "solution": [("runway", 15, None), ("kling", 15, None)],
    "benefit": [("kling", 20, "Lifestyle transformation scenes")],
    "product": [
        ("luma", 30, "Product showcase specialty"),
        ("runway", 15, None),
    ],
    "testimonial": [("kling", 30, "Best for talking heads")],
    "cta": [
        ("runway", 20, "Premium closing impact"),
        ("veo", 15, None),
    ],
    "broll": [
        ("hailuo", 25, "Cost-effective B-roll"),
        ("hunyuan", 15, None),
    ],
    "explanation": [
        ("hailuo", 25, "Cost-effective B-roll"),
        ("hunyuan", 15, None),
    ],
}

# Vocabulary scans over the visual direction. Every matching pattern applies.
VISUAL_DIRECTION_RULES: list[tuple[re.Pattern[str], list[tuple[str, int, str | None]]]] = [
    (
        re.compile(r"cinematic|dramatic|epic|film|movie|golden hour|sweeping"),
        [("runway", 20, "Cinematic visual direction"), ("veo", 15, None)],
    ),
    (
        re.compile(r"person|woman|man|face|expression|people|customer|talking|smiling"),
        [("kling", 25, "Human subject in visual")],
    ),
    (
        re.compile(r"product|bottle|package|reveal|showcase|display|object"),
        [("luma", 20, "Product focus in visual")],
    ),
    (
        re.compile(r"nature|landscape|outdoor|garden|field|ambient|background|farm|natural"),
        [("hailuo", 15, "Nature/ambient scene"), ("hunyuan", 10, None)],
    ),
    (
        re.compile(r"wellness|spa|calm|peaceful|serene|relaxing"),
        [("kling", 15, "Wellness atmosphere")],
    ),
]


@dataclass
class SceneForSelection:
    """Scene attributes consumed by the selector."""

    scene_index: int
    scene_type: str
    content_type: str | None
    narration: str
    visual_direction: str
    duration: float


@dataclass
class ScoreBreakdown:
    """Running score and recorded reasons for one provider."""

    score: int = BASELINE_SCORE
    reasons: list[str] = field(default_factory=list)

    def add(self, points: int, reason: str | None = None) -> None:
        self.score += points
        if reason:
            self.reasons.append(reason)


@dataclass(frozen=True)
class ProviderSelection:
    """Outcome of selecting a provider for one scene."""

    provider: ProviderCapability
    reason: str
    confidence: int
    alternatives: tuple[str, ...]
    scores: tuple[tuple[str, int], ...] = ()

    @property
    def provider_id(self) -> str:
        return self.provider.id


@dataclass(frozen=True)
class CostEstimate:
    """Estimated generation cost for a project."""

    total: float
    breakdown: dict[str, float]


class ProviderSelector:
    """Ranks catalog providers for each scene.

    Selection is a pure function of the scene, the visual style and the catalog: the
    same inputs always give the same provider, confidence and alternatives.
    """

    def __init__(self, catalog: ProviderCatalog | None = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG

    def score(self, scene: SceneForSelection, visual_style: str) -> dict[str, ScoreBreakdown]:
        """Compute the score breakdown of every provider for a scene."""
        style = get_style(visual_style) or PROFESSIONAL
        breakdowns = {provider_id: ScoreBreakdown() for provider_id in self.catalog.ids()}

        self._apply_rules(CONTENT_TYPE_RULES.get(scene.content_type or "", []), breakdowns)
        self._apply_rules(SCENE_TYPE_RULES.get(scene.scene_type.lower(), []), breakdowns)
        self._score_visual_direction(scene.visual_direction, breakdowns)
        self._score_style_preferences(style.preferred_video_providers, breakdowns)
        self._score_duration(scene.duration, breakdowns)
        return breakdowns

    def select_provider(self, scene: SceneForSelection, visual_style: str) -> ProviderSelection:
        """Choose the best provider for a single scene."""
        breakdowns = self.score(scene, visual_style)

        # sorted() is stable, so equal scores keep catalog declaration order
        ranked = sorted(breakdowns.items(), key=lambda item: item[1].score, reverse=True)
        best_id, best = ranked[0]

        return ProviderSelection(
            provider=self.catalog.get(best_id),
            reason="; ".join(best.reasons[:2]) or "Default selection",
            confidence=max(0, min(100, best.score)),
            alternatives=tuple(provider_id for provider_id, _ in ranked[1:3]),
            scores=tuple((provider_id, b.score) for provider_id, b in ranked),
        )

    def select_providers_for_project(
        self,
        scenes: list[SceneForSelection],
        visual_style: str,
    ) -> dict[int, ProviderSelection]:
        """Select a provider for every scene independently."""
        selections = {scene.scene_index: self.select_provider(scene, visual_style) for scene in scenes}

        logger.info(
            "provider_selection_summary",
            visual_style=visual_style,
            scene_count=len(scenes),
            providers=self.provider_summary(selections),
        )
        return selections

    def calculate_total_cost(
        self,
        selections: dict[int, ProviderSelection],
        scenes: list[SceneForSelection],
    ) -> CostEstimate:
        """Sum duration x cost-per-second over selected providers."""
        by_index = {scene.scene_index: scene for scene in scenes}
        breakdown: dict[str, float] = {}
        total = 0.0

        for scene_index, selection in selections.items():
            scene = by_index.get(scene_index)
            if scene is None:
                continue
            cost = selection.provider.cost_for(scene.duration)
            breakdown[selection.provider_id] = breakdown.get(selection.provider_id, 0.0) + cost
            total += cost

        return CostEstimate(total=round(total, 4), breakdown={k: round(v, 4) for k, v in breakdown.items()})

    def provider_summary(self, selections: dict[int, ProviderSelection]) -> dict[str, int]:
        """Histogram of how many scenes each provider was chosen for."""
        counts: dict[str, int] = {}
        for selection in selections.values():
            counts[selection.provider_id] = counts.get(selection.provider_id, 0) + 1
        return counts

    @staticmethod
    def _apply_rules(
        rules: list[tuple[str, int, str | None]],
        breakdowns: dict[str, ScoreBreakdown],
    ) -> None:
        for provider_id, points, reason in rules:
            if provider_id in breakdowns:
                breakdowns[provider_id].add(points, reason)

    def _score_visual_direction(
        self,
        visual_direction: str,
        breakdowns: dict[str, ScoreBreakdown],
    ) -> None:
        if not visual_direction:
            return
        lower = visual_direction.lower()
        for pattern, rules in VISUAL_DIRECTION_RULES:
            if pattern.search(lower):
                self._apply_rules(rules, breakdowns)

    @staticmethod
    def _score_style_preferences(
        preferred: list[str],
        breakdowns: dict[str, ScoreBreakdown],
    ) -> None:
        for index, provider_id in enumerate(preferred):
            bonus = STYLE_PREFERENCE_BONUSES[index] if index < len(STYLE_PREFERENCE_BONUSES) else 0
            if bonus > 0 and provider_id in breakdowns:
                breakdowns[provider_id].add(bonus, "Style preference")

    def _score_duration(self, duration: float, breakdowns: dict[str, ScoreBreakdown]) -> None:
        for provider in self.catalog:
            if duration > provider.max_duration_seconds:
                breakdowns[provider.id].add(
                    -DURATION_PENALTY,
                    f"Duration exceeds {provider.max_duration_seconds}s max",
                )


def get_provider_selector() -> ProviderSelector:
    """Get a provider selector over the default catalog."""
    return ProviderSelector()
