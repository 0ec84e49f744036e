"""Quality gate scoring produced assets against the approval threshold."""

import asyncio
import math
from dataclasses import dataclass, field

import httpx

from ad_producer.adapters.evaluation import (
    EvaluationProvider,
    EvaluationRequest,
    SectionScore,
    get_evaluation_provider,
)
from ad_producer.config import settings
from ad_producer.domain.enums import Section
from ad_producer.domain.models import Asset, Brief
from ad_producer.errors import EvaluationUnavailableError, ProviderError
from ad_producer.logging import get_logger

logger = get_logger(__name__)

QUALITY_THRESHOLD = 70

AXIS_WEIGHTS: dict[str, float] = {
    "relevance": 0.30,
    "technical_quality": 0.25,
    "brand_alignment": 0.25,
    "emotional_impact": 0.20,
}


@dataclass(frozen=True)
class AssetEvaluation:
    """Gate verdict for one asset."""

    asset_id: str
    section: Section
    score: int
    passed: bool
    axes: dict[str, int] = field(default_factory=dict)
    notes: str = ""


def composite_score(score: SectionScore) -> int:
    """Overall score for an asset, clamped to 0-100.

    An explicit overall from the evaluator wins; otherwise the axes are combined with
    AXIS_WEIGHTS. Non-finite values score 0.
    """
    if score.overall is not None:
        raw = float(score.overall)
    else:
        raw = sum(getattr(score, axis) * weight for axis, weight in AXIS_WEIGHTS.items())
    if not math.isfinite(raw):
        return 0
    return max(0, min(100, round(raw)))


class QualityEvaluationGate:
    """Scores assets through the evaluation capability and applies the threshold."""

    def __init__(
        self,
        evaluator: EvaluationProvider | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.evaluator = evaluator or get_evaluation_provider()
        self.timeout_seconds = timeout_seconds or settings.provider_call_timeout_seconds

    async def evaluate(
        self,
        production_id: str,
        brief: Brief,
        assets: list[Asset],
    ) -> list[AssetEvaluation]:
        """Score a batch of assets.

        Raises:
            EvaluationUnavailableError: When the evaluator fails, times out or omits
                scores for requested assets
        """
        if not assets:
            return []

        request = EvaluationRequest(production_id=production_id, brief=brief, assets=list(assets))
        try:
            async with asyncio.timeout(self.timeout_seconds):
                result = await self.evaluator.evaluate(request)
        except TimeoutError as e:
            raise EvaluationUnavailableError(
                f"Evaluation timed out after {self.timeout_seconds}s"
            ) from e
        except (httpx.HTTPError, ProviderError) as e:
            raise EvaluationUnavailableError(f"Evaluation failed: {e}") from e

        if not result.success:
            raise EvaluationUnavailableError(result.error_message or "Evaluation failed")

        by_asset = {score.asset_id: score for score in result.scores}
        missing = [asset.id for asset in assets if asset.id not in by_asset]
        if missing:
            raise EvaluationUnavailableError(f"Evaluator returned no score for {', '.join(missing)}")

        evaluations = []
        for asset in assets:
            score = by_asset[asset.id]
            composite = composite_score(score)
            evaluations.append(
                AssetEvaluation(
                    asset_id=asset.id,
                    section=asset.section,
                    score=composite,
                    passed=composite >= QUALITY_THRESHOLD,
                    axes={axis: getattr(score, axis) for axis in AXIS_WEIGHTS},
                    notes=score.notes,
                )
            )

        logger.info(
            "quality_gate_evaluated",
            production_id=production_id,
            evaluator=self.evaluator.name,
            assets=len(evaluations),
            failing=sum(1 for e in evaluations if not e.passed),
        )
        return evaluations

    @staticmethod
    def failing(evaluations: list[AssetEvaluation]) -> list[AssetEvaluation]:
        """Evaluations below the threshold."""
        return [e for e in evaluations if not e.passed]
