"""Production pipeline: drives one ad from brief to assembled timeline.

The pipeline is a small state machine. Each phase handler mutates the Production
through its locked methods and returns the next phase, or None when the run is over:

    analyze -> generate -> evaluate -> iterate (or skipped) -> assemble

Only the analyze phase can fail a production. Every other capability call goes
through _invoke(), which turns timeouts, transport errors and provider rejections into
an Outcome carrying a GenerationError, and the phase applies its documented fallback.
"""

import asyncio
import threading
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Protocol, TypeVar, runtime_checkable
from uuid import uuid4

import httpx

from ad_producer.adapters.image_gen import (
    ImageGenProvider,
    ImageGenRequest,
    ImageGenResult,
    get_image_gen_provider,
)
from ad_producer.adapters.scripting import ScriptingProvider, get_scripting_provider
from ad_producer.adapters.video_gen import (
    VideoGenProvider,
    VideoGenRequest,
    VideoGenResult,
    get_video_gen_provider,
)
from ad_producer.adapters.voiceover import (
    VoiceoverProvider,
    VoiceoverRequest,
    get_voiceover_provider,
)
from ad_producer.config import settings
from ad_producer.domain.enums import (
    AssetStatus,
    AssetType,
    ErrorKind,
    LogCategory,
    PhaseName,
    PhaseStatus,
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
    Voiceover,
    utcnow,
)
from ad_producer.errors import (
    EvaluationUnavailableError,
    ProductionCancelledError,
    ProviderError,
    ScriptingError,
)
from ad_producer.logging import get_logger, phase_context, production_context
from ad_producer.presets.styles import VisualStyle, style_for_brief
from ad_producer.services.assembly import TimelineBuilder, select_music
from ad_producer.services.brand_assets import LOGO_MEDIA_TYPES, BrandAssetMatcher
from ad_producer.services.content_classifier import (
    BatchProviderRecommendations,
    ContentClassifier,
    RuleBasedContentClassifier,
    SceneContent,
    get_content_classifier,
)
from ad_producer.services.provider_catalog import DEFAULT_CATALOG, ProviderCatalog
from ad_producer.services.provider_selector import ProviderSelector, SceneForSelection
from ad_producer.services.quality_gate import QUALITY_THRESHOLD, AssetEvaluation, QualityEvaluationGate

logger = get_logger(__name__)

T = TypeVar("T")

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[None]]
LogObserver = Callable[[LogEntry], None]
PhaseObserver = Callable[[Phase], None]


class CancellationToken:
    """Cooperative cancellation flag, safe to set from another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class GenerationError:
    """Why a degradable capability call produced nothing."""

    kind: ErrorKind
    message: str
    provider: str | None = None

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


@dataclass
class Outcome(Generic[T]):
    """Either a value or a GenerationError."""

    value: T | None = None
    error: GenerationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@runtime_checkable
class CapabilityResult(Protocol):
    success: bool
    error_message: str | None


@dataclass
class RunContext:
    """Per-run state shared by the phase handlers."""

    production: Production
    token: CancellationToken
    style: VisualStyle
    failing: list[AssetEvaluation] = field(default_factory=list)
    evaluation_unavailable: bool = False


class ProductionPipeline:
    """Runs the five production phases for a brief.

    Every collaborator is injectable; omitted ones come from the configured factories.
    Observers receive each LogEntry and each Phase copy in the order they are produced.
    """

    def __init__(
        self,
        scripting: ScriptingProvider | None = None,
        voiceover: VoiceoverProvider | None = None,
        image_gen: ImageGenProvider | None = None,
        video_gen: VideoGenProvider | None = None,
        gate: QualityEvaluationGate | None = None,
        classifier: ContentClassifier | None = None,
        selector: ProviderSelector | None = None,
        catalog: ProviderCatalog | None = None,
        brand_matcher: BrandAssetMatcher | None = None,
        clock: Clock | None = None,
        sleep: Sleep | None = None,
        timeout_seconds: float | None = None,
        log_emit_delay_seconds: float | None = None,
    ) -> None:
        self.scripting = scripting or get_scripting_provider()
        self.voiceover = voiceover or get_voiceover_provider()
        self.image_gen = image_gen or get_image_gen_provider()
        self.video_gen = video_gen or get_video_gen_provider()
        self.gate = gate or QualityEvaluationGate()
        self.classifier = classifier or get_content_classifier()
        self.catalog = catalog or (selector.catalog if selector else DEFAULT_CATALOG)
        self.selector = selector or ProviderSelector(self.catalog)
        self.brand_matcher = brand_matcher
        self.clock = clock or utcnow
        self.sleep = sleep or asyncio.sleep
        self.timeout_seconds = timeout_seconds or settings.provider_call_timeout_seconds
        self.log_emit_delay_seconds = (
            settings.log_emit_delay_seconds if log_emit_delay_seconds is None else log_emit_delay_seconds
        )

        self._log_observers: list[LogObserver] = []
        self._phase_observers: list[PhaseObserver] = []

        self._transitions: dict[PhaseName, Callable[[RunContext], Awaitable[PhaseName | None]]] = {
            PhaseName.ANALYZE: self._analyze,
            PhaseName.GENERATE: self._generate,
            PhaseName.EVALUATE: self._evaluate,
            PhaseName.ITERATE: self._iterate,
            PhaseName.ASSEMBLE: self._assemble,
        }

        logger.info(
            "production_pipeline_initialized",
            scripting=self.scripting.name,
            voiceover=self.voiceover.name,
            image_gen=self.image_gen.name,
            video_gen=self.video_gen.name,
            evaluator=self.gate.evaluator.name,
            classifier=self.classifier.name,
        )

    def add_log_observer(self, observer: LogObserver) -> None:
        self._log_observers.append(observer)

    def add_phase_observer(self, observer: PhaseObserver) -> None:
        self._phase_observers.append(observer)

    def create_production(self, brief: Brief, production_id: str | None = None) -> Production:
        """Validate a brief and create the Production that a run will drive."""
        brief.validate()
        return Production(brief, production_id=production_id, created_at=self.clock())

    async def run(self, brief: Brief, token: CancellationToken | None = None) -> Production:
        """Produce an ad for a brief from start to finish."""
        return await self.execute(self.create_production(brief), token)

    async def execute(self, production: Production, token: CancellationToken | None = None) -> Production:
        """Drive an existing production through every phase.

        Raises:
            ProductionCancelledError: When the token is cancelled mid-run
            Exception: Whatever the scripting capability raised during analyze
        """
        ctx = RunContext(
            production=production,
            token=token or CancellationToken(),
            style=style_for_brief(production.brief.style),
        )

        with production_context(production.id):
            logger.info("production_started", product=production.brief.product_name)
            current: PhaseName | None = PhaseName.ANALYZE
            try:
                while current is not None:
                    self._check_cancelled(ctx)
                    with phase_context(current.value):
                        current = await self._transitions[current](ctx)
            except ProductionCancelledError:
                self._mark_cancelled(ctx)
                raise
            except Exception as e:
                self._mark_failed(ctx, e)
                raise

            production.set_status(ProductionStatus.COMPLETED, self.clock())
            logger.info(
                "production_completed",
                assets=len(production.assets),
                quality_score=production.overall_quality_score,
            )
        return production

    # =========================================================================
    # PHASES
    # =========================================================================

    async def _analyze(self, ctx: RunContext) -> PhaseName | None:
        production = ctx.production
        brief = production.brief
        phase = PhaseName.ANALYZE

        self._log(ctx, LogCategory.DECISION, f'AI Producer initialized for "{brief.product_name}"', phase)
        self._log(
            ctx,
            LogCategory.DECISION,
            f"Target: {brief.duration_seconds}s {brief.platform} video in {brief.style} style",
            phase,
        )
        self._update_phase(ctx, phase, status=PhaseStatus.IN_PROGRESS, progress=0)
        self._log(ctx, LogCategory.DECISION, "Analyzing script structure and creating scene manifest...", phase)

        # Fatal: exceptions from the scripting capability propagate unchanged
        self._check_cancelled(ctx)
        async with asyncio.timeout(self.timeout_seconds):
            result = await self.scripting.analyze(brief)
        if not result.success:
            raise ScriptingError(result.error_message or "Script analysis failed")
        if not result.manifest:
            raise ScriptingError("Script analysis produced an empty manifest")

        production.manifest = result.manifest
        production.script = result.script
        production.style_directive = result.style_directive
        self._update_phase(ctx, phase, progress=50)

        arrow = " -> ".join(scene.section.label for scene in result.manifest)
        self._log(ctx, LogCategory.DECISION, f"Created {len(result.manifest)} section manifest: {arrow}", phase)
        self._log(
            ctx,
            LogCategory.DECISION,
            f"Determined visual style: {ctx.style.display_name} ({result.style_directive})",
            phase,
        )

        await self._select_providers(ctx)

        if self.brand_matcher is not None:
            logo = self.brand_matcher.find_asset(LOGO_MEDIA_TYPES, ["main", "primary"], ["logo"])
            production.brand_logo = logo
            if logo:
                self._log(ctx, LogCategory.DECISION, f"Brand logo selected: {logo.name}", phase)
            else:
                self._log(ctx, LogCategory.DECISION, "No brand logo found, assembling without overlay", phase)

        self._update_phase(ctx, phase, status=PhaseStatus.COMPLETED, progress=100)
        return PhaseName.GENERATE

    async def _select_providers(self, ctx: RunContext) -> None:
        production = ctx.production
        phase = PhaseName.ANALYZE
        manifest = production.manifest

        scenes = [
            SceneContent(
                scene_id=scene.id,
                scene_index=index,
                scene_type=scene.scene_type,
                narration=scene.script_text,
                visual_direction=scene.visual_direction,
                duration=scene.duration,
            )
            for index, scene in enumerate(manifest)
        ]

        outcome: Outcome[BatchProviderRecommendations] = await self._invoke(
            ctx, "classification", lambda: self.classifier.classify(scenes), self.classifier.name
        )
        if outcome.ok:
            batch = outcome.value
        else:
            self._log(
                ctx,
                LogCategory.FALLBACK,
                f"Scene classification failed ({outcome.error}), using keyword rules",
                phase,
            )
            batch = RuleBasedContentClassifier().classify_sync(scenes)

        production.scene_recommendations = batch.recommendations
        by_index = {rec.scene_index: rec for rec in batch.recommendations}
        summary = ", ".join(
            f"{manifest[rec.scene_index].section.label} {rec.content_classification}"
            for rec in batch.recommendations
            if 0 <= rec.scene_index < len(manifest)
        )
        self._log(ctx, LogCategory.DECISION, f"Scene classification ({batch.strategy}): {summary}", phase)

        selection_scenes = [
            SceneForSelection(
                scene_index=index,
                scene_type=scene.scene_type,
                content_type=by_index[index].content_type if index in by_index else None,
                narration=scene.script_text,
                visual_direction=scene.visual_direction,
                duration=scene.duration,
            )
            for index, scene in enumerate(manifest)
        ]
        selections = self.selector.select_providers_for_project(selection_scenes, ctx.style.name)
        production.provider_selections = selections

        for index, selection in selections.items():
            self._log(
                ctx,
                LogCategory.DECISION,
                f"{manifest[index].section.label}: {selection.provider.display_name} "
                f"({selection.reason}, {selection.confidence}% confidence)",
                phase,
            )

        cost = self.selector.calculate_total_cost(selections, selection_scenes)
        self._log(
            ctx,
            LogCategory.DECISION,
            f"Estimated motion clip cost: ${cost.total:.2f} across {len(selection_scenes)} scenes",
            phase,
        )

    async def _generate(self, ctx: RunContext) -> PhaseName | None:
        production = ctx.production
        brief = production.brief
        phase = PhaseName.GENERATE
        manifest = production.manifest

        self._update_phase(ctx, phase, status=PhaseStatus.IN_PROGRESS, progress=0)

        voice_id = brief.voice_id or settings.default_voice_id
        narration = " ".join(scene.script_text for scene in manifest)
        self._log(ctx, LogCategory.GENERATION, f"Generating voiceover via {self.voiceover.name} ({voice_id})...", phase)
        voiceover = await self._invoke(
            ctx,
            "voiceover",
            lambda: self.voiceover.generate(VoiceoverRequest(text=narration, voice_id=voice_id)),
            self.voiceover.name,
        )
        if voiceover.ok:
            result = voiceover.value
            production.voiceover = Voiceover(
                url=result.audio_url or "",
                duration_seconds=result.duration_seconds or 0.0,
            )
            self._log(
                ctx,
                LogCategory.SUCCESS,
                f"Voiceover generated: {production.voiceover.duration_seconds:.1f}s duration",
                phase,
            )
        else:
            self._log(
                ctx,
                LogCategory.FALLBACK,
                f"Voiceover generation failed ({voiceover.error}), continuing without audio",
                phase,
            )
        self._update_phase(ctx, phase, progress=20)

        for index, scene in enumerate(manifest):
            await self._generate_image(ctx, scene)
            self._update_phase(ctx, phase, progress=min(80, 20 + 12 * (index + 1)))

        hook_index = next((i for i, scene in enumerate(manifest) if scene.section is Section.HOOK), None)
        if hook_index is not None:
            await self._generate_hook_clip(ctx, hook_index)
        self._update_phase(ctx, phase, progress=85)

        mood = brief.effective_music_mood
        track = select_music(mood)
        if track:
            self._log(ctx, LogCategory.GENERATION, f"Selecting background music: {mood} from library...", phase)
            production.music = track
            self._log(ctx, LogCategory.SUCCESS, f'Background music selected: "{track.title}"', phase)
        else:
            self._log(ctx, LogCategory.DECISION, "Background music disabled for this brief", phase)

        self._update_phase(ctx, phase, status=PhaseStatus.COMPLETED, progress=100)
        return PhaseName.EVALUATE

    async def _generate_image(self, ctx: RunContext, scene: ManifestScene) -> None:
        label = scene.section.label
        self._log(
            ctx,
            LogCategory.GENERATION,
            f"{label}: Generating hero image via {self.image_gen.name}...",
            PhaseName.GENERATE,
        )

        outcome = await self._invoke(
            ctx, "image", lambda: self.image_gen.generate(self._image_request(ctx, scene)), self.image_gen.name
        )
        if not outcome.ok:
            self._log(
                ctx,
                LogCategory.FALLBACK,
                f"{label} image failed ({outcome.error}), section skipped",
                PhaseName.GENERATE,
            )
            return

        asset = self._image_asset(scene.section, outcome.value)
        ctx.production.add_asset(asset)
        self._log(
            ctx,
            LogCategory.SUCCESS,
            f"{label} image generated from {outcome.value.source or 'unknown source'}",
            PhaseName.GENERATE,
            asset.id,
        )

    async def _generate_hook_clip(self, ctx: RunContext, hook_index: int) -> None:
        production = ctx.production
        scene = production.manifest[hook_index]
        selection = production.provider_selections.get(hook_index)
        provider_id = selection.provider_id if selection else self.catalog.ids()[0]
        capability = self.catalog.get(provider_id)
        display_name = capability.display_name if capability else provider_id
        duration = min(float(settings.hook_clip_duration_seconds), scene.duration)

        self._log(
            ctx,
            LogCategory.GENERATION,
            f"Generating AI video clip via {display_name} for HOOK section...",
            PhaseName.GENERATE,
        )
        request = VideoGenRequest(
            section=scene.section,
            style=ctx.style.name,
            duration_seconds=duration,
            provider_id=provider_id,
            prompt=self._prompt(ctx, scene),
            negative_prompt=ctx.style.format_negative_prompt() or None,
            aspect_ratio=production.brief.platform.aspect_ratio,
        )
        outcome = await self._invoke(ctx, "video", lambda: self.video_gen.generate(request), provider_id)
        if outcome.ok:
            asset = self._video_asset(scene.section, outcome.value, provider_id, duration)
            production.add_asset(asset)
            self._log(
                ctx,
                LogCategory.SUCCESS,
                f"AI video clip generated ({asset.metadata['duration']:.1f}s)",
                PhaseName.GENERATE,
                asset.id,
            )
            return

        self._log(
            ctx,
            LogCategory.FALLBACK,
            f"AI video failed ({outcome.error}), falling back to stock B-roll footage",
            PhaseName.GENERATE,
        )
        stock = await self._invoke(
            ctx, "stock_broll", lambda: self.video_gen.stock_broll(scene.section, duration), "stock"
        )
        if stock.ok:
            asset = self._video_asset(scene.section, stock.value, "stock", duration, fallback_used=True)
            production.add_asset(asset)
            self._log(ctx, LogCategory.SUCCESS, "Stock B-roll footage acquired", PhaseName.GENERATE, asset.id)
        else:
            self._log(
                ctx,
                LogCategory.FALLBACK,
                f"Stock B-roll unavailable ({stock.error}), HOOK keeps its still image",
                PhaseName.GENERATE,
            )

    async def _evaluate(self, ctx: RunContext) -> PhaseName | None:
        production = ctx.production
        phase = PhaseName.EVALUATE
        section_index = {scene.section: index for index, scene in enumerate(production.manifest)}
        assets = sorted(production.current_assets(), key=lambda a: section_index.get(a.section, len(section_index)))

        self._update_phase(ctx, phase, status=PhaseStatus.IN_PROGRESS, progress=0)
        self._log(ctx, LogCategory.EVALUATION, f"AI Director evaluating {len(assets)} generated assets...", phase)

        outcome = await self._invoke(
            ctx,
            "evaluation",
            lambda: self.gate.evaluate(production.id, production.brief, assets),
            self.gate.evaluator.name,
        )
        if not outcome.ok:
            # Fail open: unscored assets are approved and iteration is skipped
            for asset in assets:
                production.update_asset(asset.id, status=AssetStatus.APPROVED)
            ctx.evaluation_unavailable = True
            self._log(
                ctx,
                LogCategory.FALLBACK,
                f"Quality evaluation unavailable ({outcome.error}), approving all assets",
                phase,
            )
            self._update_phase(ctx, phase, status=PhaseStatus.COMPLETED, progress=100)
            return PhaseName.ITERATE

        evaluations = outcome.value
        for index, evaluation in enumerate(evaluations):
            if index:
                await self.sleep(self.log_emit_delay_seconds)
            production.update_asset(
                evaluation.asset_id,
                quality_score=evaluation.score,
                status=AssetStatus.APPROVED if evaluation.passed else AssetStatus.REJECTED,
            )
            verdict = "Approved" if evaluation.passed else "Below threshold, needs regeneration"
            self._log(
                ctx,
                LogCategory.EVALUATION if evaluation.passed else LogCategory.ERROR,
                f"{evaluation.section.label}: {evaluation.score}/100 - {verdict}",
                phase,
                evaluation.asset_id,
            )
            self._update_phase(ctx, phase, progress=round(90 * (index + 1) / len(evaluations)))

        if evaluations:
            average = round(sum(e.score for e in evaluations) / len(evaluations))
            self._log(ctx, LogCategory.SUCCESS, f"Quality evaluation complete: {average}/100 average", phase)

        ctx.failing = self.gate.failing(evaluations)
        self._update_phase(ctx, phase, status=PhaseStatus.COMPLETED, progress=100)
        return PhaseName.ITERATE

    async def _iterate(self, ctx: RunContext) -> PhaseName | None:
        production = ctx.production
        phase = PhaseName.ITERATE

        if not ctx.failing:
            message = (
                "Quality evaluation unavailable - skipping iteration phase"
                if ctx.evaluation_unavailable
                else "All assets passed quality threshold - skipping iteration phase"
            )
            self._update_phase(ctx, phase, status=PhaseStatus.SKIPPED, progress=100)
            self._log(ctx, LogCategory.SUCCESS, message, phase)
            return PhaseName.ASSEMBLE

        self._update_phase(ctx, phase, status=PhaseStatus.IN_PROGRESS, progress=0)
        self._log(
            ctx,
            LogCategory.DECISION,
            f"Regenerating {len(ctx.failing)} asset(s) below {QUALITY_THRESHOLD}/100...",
            phase,
        )

        for index, evaluation in enumerate(ctx.failing):
            original = production.get_asset(evaluation.asset_id)
            if original is not None:
                await self._regenerate_asset(ctx, original)
            self._update_phase(ctx, phase, progress=round(90 * (index + 1) / len(ctx.failing)))

        self._update_phase(ctx, phase, status=PhaseStatus.COMPLETED, progress=100)
        return PhaseName.ASSEMBLE

    async def _regenerate_asset(self, ctx: RunContext, original: Asset) -> None:
        production = ctx.production
        phase = PhaseName.ITERATE
        label = original.section.label

        self._log(ctx, LogCategory.FALLBACK, f"Regenerating {label} asset...", phase, original.id)
        outcome = await self._regenerate(ctx, original)
        if not outcome.ok:
            self._log(
                ctx,
                LogCategory.ERROR,
                f"{label} regeneration failed ({outcome.error}), keeping original",
                phase,
                original.id,
            )
            return

        asset = outcome.value
        production.add_asset(asset)

        rescore = await self._invoke(
            ctx,
            "evaluation",
            lambda: self.gate.evaluate(production.id, production.brief, [asset]),
            self.gate.evaluator.name,
        )
        if not rescore.ok or not rescore.value:
            self._log(
                ctx,
                LogCategory.FALLBACK,
                f"{label} regenerated but could not be re-scored ({rescore.error}), left pending",
                phase,
                asset.id,
            )
            return

        evaluation = rescore.value[0]
        production.update_asset(
            asset.id,
            quality_score=evaluation.score,
            status=AssetStatus.APPROVED if evaluation.passed else AssetStatus.REJECTED,
        )
        self._log(ctx, LogCategory.SUCCESS, f"{label} regenerated: {evaluation.score}/100", phase, asset.id)

    async def _regenerate(self, ctx: RunContext, original: Asset) -> Outcome[Asset]:
        """Re-run the capability that produced an asset."""
        production = ctx.production
        scene = next((s for s in production.manifest if s.section == original.section), None)
        if scene is None:
            return Outcome(error=GenerationError(ErrorKind.UNAVAILABLE, f"No manifest scene for {original.section}"))

        replacement: Asset
        if original.type is AssetType.VIDEO:
            duration = float(original.metadata.get("duration") or settings.hook_clip_duration_seconds)
            if original.fallback_used:
                outcome = await self._invoke(
                    ctx, "stock_broll", lambda: self.video_gen.stock_broll(original.section, duration), "stock"
                )
            else:
                request = VideoGenRequest(
                    section=original.section,
                    style=ctx.style.name,
                    duration_seconds=duration,
                    provider_id=original.provider,
                    prompt=self._prompt(ctx, scene),
                    negative_prompt=ctx.style.format_negative_prompt() or None,
                    aspect_ratio=production.brief.platform.aspect_ratio,
                )
                outcome = await self._invoke(ctx, "video", lambda: self.video_gen.generate(request), original.provider)
            if not outcome.ok:
                return Outcome(error=outcome.error)
            replacement = self._video_asset(
                original.section, outcome.value, original.provider, duration, fallback_used=original.fallback_used
            )
        else:
            outcome = await self._invoke(
                ctx,
                "image",
                lambda: self.image_gen.generate(self._image_request(ctx, scene)),
                self.image_gen.name,
            )
            if not outcome.ok:
                return Outcome(error=outcome.error)
            replacement = self._image_asset(original.section, outcome.value)

        replacement.regeneration_count = original.regeneration_count + 1
        replacement.supersedes = original.id
        return Outcome(value=replacement)

    async def _assemble(self, ctx: RunContext) -> PhaseName | None:
        production = ctx.production
        phase = PhaseName.ASSEMBLE

        self._update_phase(ctx, phase, status=PhaseStatus.IN_PROGRESS, progress=0)
        self._log(ctx, LogCategory.SUCCESS, "Assets finalized. Beginning timeline assembly...", phase)

        current = production.current_assets()
        builder = TimelineBuilder(
            production.manifest,
            current,
            ctx.style,
            aspect_ratio=production.brief.platform.aspect_ratio,
        )

        self._log(ctx, LogCategory.GENERATION, "Building scene transitions and timing...", phase)
        builder.layout_clips()
        if builder.timeline.gaps:
            missing = ", ".join(section.label for section in builder.timeline.gaps)
            self._log(ctx, LogCategory.FALLBACK, f"No usable asset for {missing}, leaving gaps in the timeline", phase)
        self._update_phase(ctx, phase, progress=30)

        self._log(ctx, LogCategory.GENERATION, "Synchronizing voiceover with visuals...", phase)
        builder.sync_audio(production.voiceover, production.music)
        self._update_phase(ctx, phase, progress=50)

        self._log(ctx, LogCategory.GENERATION, "Applying color grading and effects...", phase)
        builder.apply_grade(production.brand_logo)
        self._update_phase(ctx, phase, progress=70)

        self._log(ctx, LogCategory.GENERATION, "Adding subtitles and final touches...", phase)
        builder.add_captions()
        self._update_phase(ctx, phase, progress=90)

        timeline = builder.build()
        production.timeline = timeline
        production.overall_quality_score = overall_quality_score(current)

        self._update_phase(ctx, phase, status=PhaseStatus.COMPLETED, progress=100)
        self._log(
            ctx,
            LogCategory.SUCCESS,
            f"Video production complete! Duration: {timeline.formatted_duration}, "
            f"Quality Score: {production.overall_quality_score}/100",
            phase,
        )
        return None

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _invoke(
        self,
        ctx: RunContext,
        operation: str,
        call: Callable[[], Awaitable[T]],
        provider: str | None = None,
    ) -> Outcome[T]:
        """Run one degradable capability call under the per-call timeout."""
        self._check_cancelled(ctx)
        try:
            async with asyncio.timeout(self.timeout_seconds):
                value = await call()
        except TimeoutError:
            error = GenerationError(ErrorKind.TIMEOUT, f"{operation} timed out after {self.timeout_seconds}s", provider)
        except httpx.HTTPError as e:
            error = GenerationError(ErrorKind.TRANSPORT, str(e) or type(e).__name__, provider)
        except ProviderError as e:
            error = GenerationError(ErrorKind.PROVIDER, str(e), e.provider or provider)
        except EvaluationUnavailableError as e:
            error = GenerationError(ErrorKind.UNAVAILABLE, str(e), provider)
        else:
            if isinstance(value, CapabilityResult) and not value.success:
                error = GenerationError(ErrorKind.PROVIDER, value.error_message or f"{operation} failed", provider)
            else:
                return Outcome(value=value)

        logger.warning(
            "capability_call_failed",
            operation=operation,
            provider=error.provider,
            kind=error.kind,
            error=error.message,
        )
        return Outcome(error=error)

    def _check_cancelled(self, ctx: RunContext) -> None:
        if ctx.token.cancelled:
            raise ProductionCancelledError(ctx.production.id)

    def _in_progress_phase(self, ctx: RunContext) -> PhaseName | None:
        snapshot = ctx.production.snapshot()
        return next((p.name for p in snapshot.phases if p.status is PhaseStatus.IN_PROGRESS), None)

    def _mark_cancelled(self, ctx: RunContext) -> None:
        phase = self._in_progress_phase(ctx)
        if phase is not None:
            self._update_phase(ctx, phase, status=PhaseStatus.FAILED, error="cancelled")
        self._log(ctx, LogCategory.ERROR, "Production cancelled", phase or PhaseName.ANALYZE)
        ctx.production.set_status(ProductionStatus.CANCELLED, self.clock())
        logger.info("production_cancelled", phase=phase)

    def _mark_failed(self, ctx: RunContext, error: Exception) -> None:
        phase = self._in_progress_phase(ctx) or PhaseName.ANALYZE
        self._update_phase(ctx, phase, status=PhaseStatus.FAILED, error=str(error) or type(error).__name__)
        self._log(ctx, LogCategory.ERROR, f"Production failed: {error}", phase)
        ctx.production.set_status(ProductionStatus.FAILED, self.clock())
        logger.error("production_failed", phase=phase, error=str(error), error_type=type(error).__name__)

    def _log(
        self,
        ctx: RunContext,
        category: LogCategory,
        message: str,
        phase: PhaseName,
        asset_id: str | None = None,
    ) -> LogEntry:
        entry = LogEntry(
            id=f"log_{uuid4().hex[:12]}",
            timestamp=self.clock(),
            category=category,
            message=message,
            phase=phase,
            asset_id=asset_id,
        )
        ctx.production.append_log(entry)
        logger.debug("production_log", category=category, phase=phase, message=message)
        for observer in self._log_observers:
            observer(entry)
        return entry

    def _update_phase(
        self,
        ctx: RunContext,
        name: PhaseName,
        status: PhaseStatus | None = None,
        progress: int | None = None,
        error: str | None = None,
    ) -> Phase:
        phase = ctx.production.update_phase(name, self.clock(), status=status, progress=progress, error=error)
        if status is not None:
            logger.info("phase_status_changed", phase=name, status=status, progress=phase.progress)
        for observer in self._phase_observers:
            observer(phase)
        return phase

    @staticmethod
    def _prompt(ctx: RunContext, scene: ManifestScene) -> str:
        suffix = ctx.style.format_style_prompt()
        return f"{scene.visual_direction}, {suffix}" if suffix else scene.visual_direction

    def _image_request(self, ctx: RunContext, scene: ManifestScene) -> ImageGenRequest:
        brief = ctx.production.brief
        return ImageGenRequest(
            section=scene.section,
            product_name=brief.product_name,
            style=ctx.style.name,
            prompt=self._prompt(ctx, scene),
            negative_prompt=ctx.style.format_negative_prompt() or None,
            aspect_ratio=brief.platform.aspect_ratio,
        )

    def _image_asset(self, section: Section, result: ImageGenResult) -> Asset:
        return Asset.create(
            type=AssetType.AI_IMAGE if result.is_ai_generated else AssetType.IMAGE,
            provider=self.image_gen.name,
            url=result.image_url or "",
            section=section,
            metadata={
                "width": result.width,
                "height": result.height,
                "source": result.source,
                "prompt": result.metadata.get("prompt"),
            },
        )

    @staticmethod
    def _video_asset(
        section: Section,
        result: VideoGenResult,
        provider: str,
        requested_duration: float,
        fallback_used: bool = False,
    ) -> Asset:
        metadata = {
            "duration": result.duration_seconds or requested_duration,
            "source": result.metadata.get("source", "ai"),
            "prompt": result.metadata.get("prompt"),
        }
        if "license" in result.metadata:
            metadata["license"] = result.metadata["license"]
        return Asset.create(
            type=AssetType.VIDEO,
            provider=provider,
            url=result.video_url or "",
            section=section,
            metadata=metadata,
            fallback_used=fallback_used,
        )


def overall_quality_score(assets: list[Asset]) -> int:
    """Mean score of scored assets, 0 when nothing was scored."""
    scores = [a.quality_score for a in assets if a.quality_score is not None]
    if not scores:
        return 0
    return max(0, min(100, round(sum(scores) / len(scores))))
