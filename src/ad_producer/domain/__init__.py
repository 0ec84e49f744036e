"""Domain models and business logic."""

from ad_producer.domain.enums import (
    AssetStatus,
    AssetType,
    BriefStyle,
    ContentClassification,
    LogCategory,
    MediaType,
    PhaseName,
    PhaseStatus,
    Platform,
    ProductionStatus,
    Section,
)
from ad_producer.domain.models import (
    Asset,
    Brief,
    LogEntry,
    ManifestScene,
    Phase,
    Production,
    ProductionSnapshot,
    Voiceover,
    build_default_manifest,
)

__all__ = [
    "Asset",
    "AssetStatus",
    "AssetType",
    "Brief",
    "BriefStyle",
    "ContentClassification",
    "LogCategory",
    "LogEntry",
    "ManifestScene",
    "MediaType",
    "Phase",
    "PhaseName",
    "PhaseStatus",
    "Platform",
    "Production",
    "ProductionSnapshot",
    "ProductionStatus",
    "Section",
    "Voiceover",
    "build_default_manifest",
]
