"""Base interface for asset evaluation providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ad_producer.domain.enums import Section
from ad_producer.domain.models import Asset, Brief


@dataclass
class EvaluationRequest:
    """Batch of assets to score for one production."""

    production_id: str
    brief: Brief
    assets: list[Asset]


@dataclass
class SectionScore:
    """Per-asset axis scores, each 0-100.

    ``overall`` is optional; when absent the quality gate derives the composite from
    the four axes.
    """

    asset_id: str
    section: Section
    relevance: int
    technical_quality: int
    brand_alignment: int
    emotional_impact: int
    overall: int | None = None
    notes: str = ""


@dataclass
class EvaluationResult:
    """Result from a batch evaluation."""

    success: bool
    scores: list[SectionScore] = field(default_factory=list)
    error_message: str | None = None


class EvaluationProvider(ABC):
    """Abstract base class for asset evaluators.

    Implementations:
    - StubEvaluationProvider: Deterministic scores for testing
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        ...

    @abstractmethod
    async def evaluate(self, request: EvaluationRequest) -> EvaluationResult:
        """Score every asset in the request."""
        ...

    async def health_check(self) -> bool:
        return True
