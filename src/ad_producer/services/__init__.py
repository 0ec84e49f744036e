"""Production services: provider selection, classification, evaluation and orchestration."""

from ad_producer.services.assembly import Timeline, build_timeline
from ad_producer.services.brand_assets import BrandAsset, BrandAssetMatcher, InMemoryBrandAssetStore
from ad_producer.services.content_classifier import (
    ContentClassifier,
    LLMContentClassifier,
    RuleBasedContentClassifier,
    get_content_classifier,
)
from ad_producer.services.pipeline import CancellationToken, ProductionPipeline
from ad_producer.services.provider_catalog import DEFAULT_CATALOG, ProviderCatalog
from ad_producer.services.provider_selector import ProviderSelector, get_provider_selector
from ad_producer.services.quality_gate import QUALITY_THRESHOLD, QualityEvaluationGate

__all__ = [
    "DEFAULT_CATALOG",
    "QUALITY_THRESHOLD",
    "BrandAsset",
    "BrandAssetMatcher",
    "CancellationToken",
    "ContentClassifier",
    "InMemoryBrandAssetStore",
    "LLMContentClassifier",
    "ProductionPipeline",
    "ProviderCatalog",
    "ProviderSelector",
    "QualityEvaluationGate",
    "RuleBasedContentClassifier",
    "Timeline",
    "build_timeline",
    "get_content_classifier",
    "get_provider_selector",
]
