"""Stub evaluation provider for testing."""

import zlib

from ad_producer.adapters.evaluation.base import (
    EvaluationProvider,
    EvaluationRequest,
    EvaluationResult,
    SectionScore,
)
from ad_producer.domain.enums import Section
from ad_producer.logging import get_logger

logger = get_logger(__name__)


class StubEvaluationProvider(EvaluationProvider):
    """Returns deterministic scores between 72 and 91.

    ``section_scores`` pins the overall score for a section, which lets tests force an
    asset below the threshold. Regenerated assets are never pinned.
    """

    def __init__(self, section_scores: dict[Section, int] | None = None) -> None:
        self.section_scores = dict(section_scores or {})

    @property
    def name(self) -> str:
        return "stub"

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        scores = []
        for asset in request.assets:
            base = 72 + zlib.crc32(f"{asset.section}:{asset.type}".encode()) % 20
            pinned = self.section_scores.get(asset.section) if not asset.regeneration_count else None
            scores.append(
                SectionScore(
                    asset_id=asset.id,
                    section=asset.section,
                    relevance=min(100, base + 4),
                    technical_quality=base,
                    brand_alignment=base,
                    emotional_impact=max(0, base - 5),
                    overall=pinned,
                )
            )

        logger.info("stub_evaluation_completed", production_id=request.production_id, assets=len(scores))
        return EvaluationResult(success=True, scores=scores)
