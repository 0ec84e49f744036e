"""Asset evaluation adapters."""

from ad_producer.adapters.evaluation.base import (
    EvaluationProvider,
    EvaluationRequest,
    EvaluationResult,
    SectionScore,
)
from ad_producer.adapters.evaluation.stub import StubEvaluationProvider
from ad_producer.config import settings
from ad_producer.logging import get_logger

logger = get_logger(__name__)


def get_evaluation_provider() -> EvaluationProvider:
    """Get the configured evaluation provider."""
    provider = settings.evaluation_provider.lower()

    if provider != "stub":
        logger.warning("evaluation_provider_unknown", provider=provider, using="stub")
    return StubEvaluationProvider()


__all__ = [
    "EvaluationProvider",
    "EvaluationRequest",
    "EvaluationResult",
    "SectionScore",
    "StubEvaluationProvider",
    "get_evaluation_provider",
]
