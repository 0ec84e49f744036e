"""Domain models - pure Python classes independent of any transport."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from ad_producer.domain.enums import (
    DEFAULT_SECTIONS,
    PHASE_ORDER,
    AssetStatus,
    AssetType,
    BriefStyle,
    LogCategory,
    MusicMood,
    PhaseName,
    PhaseStatus,
    Platform,
    ProductionStatus,
    Section,
)
from ad_producer.errors import InvalidBriefError, PhaseTransitionError


def utcnow() -> datetime:
    return datetime.now(UTC)


# Share of the total runtime given to each section in the default manifest
SECTION_WEIGHTS: dict[Section, float] = {
    Section.HOOK: 0.15,
    Section.PROBLEM: 0.20,
    Section.SOLUTION: 0.30,
    Section.SOCIAL_PROOF: 0.20,
    Section.CTA: 0.15,
}

# Scene type understood by the provider selector for each section
SECTION_SCENE_TYPES: dict[Section, str] = {
    Section.HOOK: "hook",
    Section.PROBLEM: "problem",
    Section.SOLUTION: "solution",
    Section.SOCIAL_PROOF: "testimonial",
    Section.CTA: "cta",
}

STYLE_MUSIC_MOODS: dict[BriefStyle, MusicMood] = {
    BriefStyle.PROFESSIONAL: MusicMood.INSPIRING,
    BriefStyle.CASUAL: MusicMood.UPLIFTING,
    BriefStyle.ENERGETIC: MusicMood.DRAMATIC,
    BriefStyle.CALM: MusicMood.CALM,
}


@dataclass
class Brief:
    """Structured description of the ad to produce."""

    product_name: str
    product_description: str = ""
    target_audience: str = ""
    key_benefits: list[str] = field(default_factory=list)
    duration_seconds: int = 60
    platform: Platform = Platform.YOUTUBE
    style: BriefStyle = BriefStyle.PROFESSIONAL
    call_to_action: str = ""
    sections: list[Section] | None = None  # Overrides the five-section template
    music_mood: MusicMood | None = None
    voice_id: str | None = None

    def __post_init__(self) -> None:
        self.platform = Platform(self.platform)
        self.style = BriefStyle(self.style)
        if self.sections is not None:
            self.sections = [Section(s) for s in self.sections]
        if self.music_mood is not None:
            self.music_mood = MusicMood(self.music_mood)

    def validate(self) -> None:
        """Raise InvalidBriefError when the brief cannot be produced."""
        if not self.product_name or not self.product_name.strip():
            raise InvalidBriefError("Brief is missing a product name")
        if self.duration_seconds <= 0:
            raise InvalidBriefError(
                f"Brief duration must be positive, got {self.duration_seconds}"
            )
        if self.sections is not None and not self.sections:
            raise InvalidBriefError("Brief section list is empty")

    @property
    def manifest_sections(self) -> tuple[Section, ...]:
        return tuple(self.sections) if self.sections else DEFAULT_SECTIONS

    @property
    def effective_music_mood(self) -> MusicMood:
        return self.music_mood or STYLE_MUSIC_MOODS[self.style]


@dataclass
class ManifestScene:
    """One entry of the scene manifest derived from a brief."""

    id: str
    section: Section
    start_time: float
    end_time: float
    script_text: str
    visual_direction: str
    scene_type: str = ""
    transition_in: str = "fade"
    transition_out: str = "fade"
    needs_hero_image: bool = True
    needs_broll: bool = False
    needs_ai_video: bool = False

    def __post_init__(self) -> None:
        self.section = Section(self.section)
        if not self.scene_type:
            self.scene_type = SECTION_SCENE_TYPES.get(self.section, self.section.value)

    @property
    def duration(self) -> float:
        return round(self.end_time - self.start_time, 2)


def build_default_manifest(brief: Brief) -> list[ManifestScene]:
    """Build the section manifest for a brief without calling any model.

    Section durations follow SECTION_WEIGHTS, renormalised over the requested sections.
    """
    sections = brief.manifest_sections
    total_weight = sum(SECTION_WEIGHTS.get(s, 0.2) for s in sections)
    benefits = ", ".join(brief.key_benefits) or brief.product_description
    script_lines = {
        Section.HOOK: f"What if {brief.product_name} could change your day?",
        Section.PROBLEM: f"{brief.target_audience or 'Many people'} struggle to find something that works.",
        Section.SOLUTION: f"{brief.product_name}: {benefits}".strip(),
        Section.SOCIAL_PROOF: f"Customers love how {brief.product_name} fits their routine.",
        Section.CTA: brief.call_to_action or f"Try {brief.product_name} today.",
    }
    directions = {
        Section.HOOK: f"Cinematic opening shot, dramatic light revealing {brief.product_name}",
        Section.PROBLEM: "Person looking frustrated at home, natural expression",
        Section.SOLUTION: f"Product showcase of {brief.product_name} bottle on a clean surface",
        Section.SOCIAL_PROOF: "Smiling customer talking to camera, warm interior",
        Section.CTA: f"Epic closing shot with {brief.product_name} and golden hour glow",
    }

    scenes: list[ManifestScene] = []
    cursor = 0.0
    for index, section in enumerate(sections):
        share = SECTION_WEIGHTS.get(section, 0.2) / total_weight
        duration = round(brief.duration_seconds * share, 2)
        end = float(brief.duration_seconds) if index == len(sections) - 1 else cursor + duration
        scenes.append(
            ManifestScene(
                id=f"scene_{index + 1}_{section.value}",
                section=section,
                start_time=round(cursor, 2),
                end_time=round(end, 2),
                script_text=script_lines[section],
                visual_direction=directions[section],
                transition_in="none" if index == 0 else "crossfade",
                transition_out="fade" if index == len(sections) - 1 else "crossfade",
                needs_broll=section in (Section.PROBLEM, Section.SOLUTION),
                needs_ai_video=section is Section.HOOK,
            )
        )
        cursor = end
    return scenes


@dataclass
class Phase:
    """Progress record of one pipeline phase."""

    name: PhaseName
    status: PhaseStatus = PhaseStatus.PENDING
    progress: int = 0
    started_at: datetime | None = None
    completed_at: datetime | None = None
    error: str | None = None

    def apply(
        self,
        at: datetime,
        status: PhaseStatus | None = None,
        progress: int | None = None,
        error: str | None = None,
    ) -> None:
        """Apply a status/progress change, enforcing the phase invariants."""
        new_progress = self.progress if progress is None else progress
        new_status = self.status if status is None else status

        if not 0 <= new_progress <= 100:
            raise PhaseTransitionError(f"{self.name}: progress {new_progress} out of range")
        if new_progress < self.progress:
            raise PhaseTransitionError(
                f"{self.name}: progress cannot decrease ({self.progress} -> {new_progress})"
            )
        if new_status in (PhaseStatus.COMPLETED, PhaseStatus.SKIPPED) and new_progress != 100:
            raise PhaseTransitionError(f"{self.name}: cannot be {new_status} before 100%")

        if new_status is PhaseStatus.IN_PROGRESS and self.started_at is None:
            self.started_at = at
        if new_status in (PhaseStatus.COMPLETED, PhaseStatus.FAILED) and self.completed_at is None:
            self.completed_at = at
        self.status = new_status
        self.progress = new_progress
        if error is not None:
            self.error = error


@dataclass(frozen=True)
class LogEntry:
    """Immutable production log record."""

    id: str
    timestamp: datetime
    category: LogCategory
    message: str
    phase: PhaseName
    asset_id: str | None = None


@dataclass
class Asset:
    """One produced unit of media."""

    id: str
    type: AssetType
    provider: str
    url: str
    section: Section
    metadata: dict[str, Any] = field(default_factory=dict)
    status: AssetStatus = AssetStatus.PENDING
    quality_score: int | None = None
    regeneration_count: int = 0
    fallback_used: bool = False
    supersedes: str | None = None

    @classmethod
    def create(
        cls,
        type: AssetType,
        provider: str,
        url: str,
        section: Section,
        metadata: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> "Asset":
        """Create an asset with a fresh id."""
        return cls(
            id=f"asset_{Section(section).value}_{uuid4().hex[:10]}",
            type=type,
            provider=provider,
            url=url,
            section=Section(section),
            metadata=metadata or {},
            **kwargs,
        )

    @property
    def is_visual(self) -> bool:
        return self.type is not AssetType.AUDIO


@dataclass(frozen=True)
class Voiceover:
    """Narration track reference."""

    url: str
    duration_seconds: float


@dataclass(frozen=True)
class MusicTrack:
    """Background music selected from the static library."""

    id: str
    title: str
    mood: MusicMood
    url: str
    license: str = "royalty-free"


@dataclass(frozen=True)
class ProductionSnapshot:
    """Consistent read-only view of a production for concurrent readers."""

    id: str
    status: ProductionStatus
    phases: tuple[Phase, ...]
    logs: tuple[LogEntry, ...]
    assets: tuple[Asset, ...]
    voiceover: Voiceover | None
    overall_quality_score: int | None
    updated_at: datetime

    def phase(self, name: PhaseName) -> Phase:
        return next(p for p in self.phases if p.name == name)


class Production:
    """Root aggregate for one video job.

    Owned by the pipeline for the duration of a run. Every mutation goes through a
    method that holds the aggregate lock, so a reader calling snapshot() never sees a
    phase whose status and progress disagree.
    """

    def __init__(
        self,
        brief: Brief,
        production_id: str | None = None,
        created_at: datetime | None = None,
    ) -> None:
        self.id = production_id or f"prod_{uuid4().hex[:12]}"
        self.brief = brief
        self.status = ProductionStatus.RUNNING
        self.phases: list[Phase] = [Phase(name=name) for name in PHASE_ORDER]
        self.logs: list[LogEntry] = []
        self.assets: list[Asset] = []
        self.voiceover: Voiceover | None = None
        self.music: MusicTrack | None = None
        self.manifest: list[ManifestScene] = []
        self.script: str = ""
        self.style_directive: str = ""
        self.provider_selections: dict[int, Any] = {}
        self.scene_recommendations: list[Any] = []
        self.brand_logo: Any = None
        self.timeline: Any = None
        self.overall_quality_score: int | None = None
        self.created_at = created_at or utcnow()
        self.updated_at = self.created_at
        self.completed_at: datetime | None = None
        self._lock = threading.RLock()

    def phase(self, name: PhaseName) -> Phase:
        with self._lock:
            return next(p for p in self.phases if p.name == name)

    def update_phase(
        self,
        name: PhaseName,
        at: datetime,
        status: PhaseStatus | None = None,
        progress: int | None = None,
        error: str | None = None,
    ) -> Phase:
        """Atomically update a phase and return a copy of its new state."""
        with self._lock:
            phase = self.phase(name)
            phase.apply(at, status=status, progress=progress, error=error)
            self.updated_at = at
            return replace(phase)

    def append_log(self, entry: LogEntry) -> None:
        with self._lock:
            self.logs.append(entry)
            self.updated_at = entry.timestamp

    def add_asset(self, asset: Asset) -> None:
        with self._lock:
            self.assets.append(asset)

    def update_asset(self, asset_id: str, **changes: Any) -> Asset:
        with self._lock:
            for index, asset in enumerate(self.assets):
                if asset.id == asset_id:
                    self.assets[index] = replace(asset, **changes)
                    return self.assets[index]
        raise KeyError(asset_id)

    def get_asset(self, asset_id: str) -> Asset | None:
        with self._lock:
            return next((a for a in self.assets if a.id == asset_id), None)

    def set_status(self, status: ProductionStatus, at: datetime) -> None:
        with self._lock:
            self.status = status
            self.updated_at = at
            if status.is_terminal:
                self.completed_at = at

    def current_assets(self) -> list[Asset]:
        """Assets not superseded by a regenerated replacement."""
        with self._lock:
            superseded = {a.supersedes for a in self.assets if a.supersedes}
            return [a for a in self.assets if a.id not in superseded]

    def snapshot(self) -> ProductionSnapshot:
        with self._lock:
            return ProductionSnapshot(
                id=self.id,
                status=self.status,
                phases=tuple(replace(p) for p in self.phases),
                logs=tuple(self.logs),
                assets=tuple(replace(a, metadata=dict(a.metadata)) for a in self.assets),
                voiceover=self.voiceover,
                overall_quality_score=self.overall_quality_score,
                updated_at=self.updated_at,
            )
