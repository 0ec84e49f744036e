"""Tests for domain models."""

from datetime import UTC, datetime, timedelta

import pytest

from ad_producer.domain.enums import (
    PHASE_ORDER,
    AssetStatus,
    AssetType,
    BriefStyle,
    MusicMood,
    PhaseName,
    PhaseStatus,
    Platform,
    ProductionStatus,
    Section,
)
from ad_producer.domain.models import (
    Asset,
    Brief,
    Phase,
    Production,
    build_default_manifest,
)
from ad_producer.errors import InvalidBriefError, PhaseTransitionError

T0 = datetime(2024, 1, 1, tzinfo=UTC)


def test_brief_coerces_enums() -> None:
    """Test that string values are coerced to enums."""
    brief = Brief(product_name="CBD Oil", platform="tiktok", style="energetic", music_mood="calm")

    assert brief.platform is Platform.TIKTOK
    assert brief.style is BriefStyle.ENERGETIC
    assert brief.effective_music_mood is MusicMood.CALM


def test_brief_music_mood_follows_style() -> None:
    """Test the default music mood for each brief style."""
    assert Brief(product_name="x", style="professional").effective_music_mood is MusicMood.INSPIRING
    assert Brief(product_name="x", style="energetic").effective_music_mood is MusicMood.DRAMATIC


@pytest.mark.parametrize(
    "brief",
    [
        Brief(product_name=""),
        Brief(product_name="   "),
        Brief(product_name="CBD Oil", duration_seconds=0),
        Brief(product_name="CBD Oil", sections=[]),
    ],
)
def test_brief_validation_rejects(brief: Brief) -> None:
    """Test that unusable briefs are rejected."""
    with pytest.raises(InvalidBriefError):
        brief.validate()


def test_platform_aspect_ratio() -> None:
    """Test platform aspect ratios."""
    assert Platform.YOUTUBE.aspect_ratio == "16:9"
    assert Platform.TIKTOK.aspect_ratio == "9:16"
    assert Platform.INSTAGRAM.aspect_ratio == "9:16"
    assert Platform.FACEBOOK.aspect_ratio == "1:1"


def test_default_manifest_for_60_seconds() -> None:
    """Test the five-section template for a one-minute ad."""
    manifest = build_default_manifest(Brief(product_name="CBD Oil", duration_seconds=60))

    assert [s.section for s in manifest] == list(Section)
    assert [s.duration for s in manifest] == [9, 12, 18, 12, 9]
    assert [s.id for s in manifest] == [
        "scene_1_hook",
        "scene_2_problem",
        "scene_3_solution",
        "scene_4_social_proof",
        "scene_5_cta",
    ]
    assert manifest[0].start_time == 0
    assert manifest[-1].end_time == 60
    assert all(a.end_time == b.start_time for a, b in zip(manifest, manifest[1:]))
    assert manifest[3].scene_type == "testimonial"
    assert manifest[0].needs_ai_video


def test_manifest_with_custom_sections_fills_duration() -> None:
    """Test that a section subset still covers the whole runtime."""
    brief = Brief(product_name="CBD Oil", duration_seconds=30, sections=["hook", "cta"])

    manifest = build_default_manifest(brief)

    assert [s.section for s in manifest] == [Section.HOOK, Section.CTA]
    assert manifest[0].duration == 15
    assert manifest[-1].end_time == 30


def test_manifest_uses_call_to_action() -> None:
    """Test the CTA narration comes from the brief."""
    manifest = build_default_manifest(Brief(product_name="CBD Oil", call_to_action="Shop now"))

    assert manifest[-1].script_text == "Shop now"


class TestPhase:
    """Tests for phase invariants."""

    def test_start_sets_started_at(self) -> None:
        phase = Phase(name=PhaseName.ANALYZE)
        phase.apply(T0, status=PhaseStatus.IN_PROGRESS)

        assert phase.started_at == T0
        assert phase.completed_at is None

    def test_progress_cannot_decrease(self) -> None:
        phase = Phase(name=PhaseName.GENERATE)
        phase.apply(T0, status=PhaseStatus.IN_PROGRESS, progress=40)

        with pytest.raises(PhaseTransitionError):
            phase.apply(T0, progress=30)
        assert phase.progress == 40

    def test_progress_range(self) -> None:
        with pytest.raises(PhaseTransitionError):
            Phase(name=PhaseName.GENERATE).apply(T0, progress=101)

    def test_completed_requires_full_progress(self) -> None:
        phase = Phase(name=PhaseName.EVALUATE)

        with pytest.raises(PhaseTransitionError):
            phase.apply(T0, status=PhaseStatus.COMPLETED, progress=90)
        with pytest.raises(PhaseTransitionError):
            phase.apply(T0, status=PhaseStatus.SKIPPED)

    def test_complete_sets_completed_at(self) -> None:
        phase = Phase(name=PhaseName.ASSEMBLE)
        phase.apply(T0, status=PhaseStatus.IN_PROGRESS)
        phase.apply(T0 + timedelta(seconds=5), status=PhaseStatus.COMPLETED, progress=100)

        assert phase.completed_at - phase.started_at == timedelta(seconds=5)

    def test_failed_keeps_progress_and_error(self) -> None:
        phase = Phase(name=PhaseName.GENERATE)
        phase.apply(T0, status=PhaseStatus.IN_PROGRESS, progress=44)
        phase.apply(T0, status=PhaseStatus.FAILED, error="cancelled")

        assert phase.progress == 44
        assert phase.error == "cancelled"
        assert phase.completed_at == T0


class TestProduction:
    """Tests for the production aggregate."""

    def test_initial_state(self) -> None:
        production = Production(Brief(product_name="CBD Oil"), created_at=T0)

        assert production.id.startswith("prod_")
        assert production.status is ProductionStatus.RUNNING
        assert [p.name for p in production.phases] == list(PHASE_ORDER)
        assert all(p.status is PhaseStatus.PENDING for p in production.phases)

    def test_update_phase_returns_copy(self) -> None:
        production = Production(Brief(product_name="CBD Oil"))

        copy = production.update_phase(PhaseName.ANALYZE, T0, status=PhaseStatus.IN_PROGRESS, progress=10)
        copy.progress = 99

        assert production.phase(PhaseName.ANALYZE).progress == 10

    def test_current_assets_excludes_superseded(self) -> None:
        production = Production(Brief(product_name="CBD Oil"))
        original = Asset.create(AssetType.IMAGE, "stub", "stub://1", Section.PROBLEM)
        replacement = Asset.create(
            AssetType.IMAGE, "stub", "stub://2", Section.PROBLEM, regeneration_count=1, supersedes=original.id
        )
        production.add_asset(original)
        production.add_asset(replacement)

        assert production.current_assets() == [replacement]
        assert len(production.assets) == 2

    def test_update_asset(self) -> None:
        production = Production(Brief(product_name="CBD Oil"))
        asset = Asset.create(AssetType.VIDEO, "runway", "stub://v", Section.HOOK)
        production.add_asset(asset)

        updated = production.update_asset(asset.id, status=AssetStatus.APPROVED, quality_score=88)

        assert updated.quality_score == 88
        assert production.get_asset(asset.id).status is AssetStatus.APPROVED
        with pytest.raises(KeyError):
            production.update_asset("missing", status=AssetStatus.APPROVED)

    def test_snapshot_is_independent(self) -> None:
        production = Production(Brief(product_name="CBD Oil"))
        production.add_asset(Asset.create(AssetType.IMAGE, "stub", "stub://1", Section.HOOK, metadata={"k": 1}))

        snapshot = production.snapshot()
        production.update_phase(PhaseName.ANALYZE, T0, status=PhaseStatus.IN_PROGRESS, progress=50)
        snapshot.assets[0].metadata["k"] = 2

        assert snapshot.phase(PhaseName.ANALYZE).progress == 0
        assert production.assets[0].metadata["k"] == 1

    def test_terminal_status_sets_completed_at(self) -> None:
        production = Production(Brief(product_name="CBD Oil"))
        production.set_status(ProductionStatus.CANCELLED, T0)

        assert production.completed_at == T0
        assert production.status.is_terminal
