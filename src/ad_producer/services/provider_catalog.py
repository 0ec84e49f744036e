"""Registry of motion-clip generation backends and their declared capabilities."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ad_producer.domain.enums import GenerationMode, MotionQuality


@dataclass(frozen=True)
class ProviderCapability:
    """Static descriptor of one generation backend.

    Attributes:
        id: Stable provider identifier used in selections
        display_name: Human-readable name
        modes: Supported generation modes
        max_resolution: Largest output resolution (e.g. "1080p")
        max_fps: Highest frame rate supported
        max_duration_seconds: Longest clip a single request can produce
        cost_per_second: USD cost per generated second
        strengths: Qualitative strengths
        weaknesses: Qualitative weaknesses
        best_for: Content affinities (scene types, subjects)
        motion_quality: Motion quality tier
        native_audio: Whether clips can carry generated audio
        lip_sync: Whether speech can be lip-synced
    """

    id: str
    display_name: str
    modes: tuple[GenerationMode, ...]
    max_resolution: str
    max_fps: int
    max_duration_seconds: int
    cost_per_second: float
    strengths: tuple[str, ...] = field(default_factory=tuple)
    weaknesses: tuple[str, ...] = field(default_factory=tuple)
    best_for: tuple[str, ...] = field(default_factory=tuple)
    motion_quality: MotionQuality = MotionQuality.GOOD
    native_audio: bool = False
    lip_sync: bool = False

    def supports(self, mode: GenerationMode) -> bool:
        return mode in self.modes

    def cost_for(self, duration_seconds: float) -> float:
        return duration_seconds * self.cost_per_second


class ProviderCatalog:
    """Ordered, read-only collection of provider capabilities.

    Iteration follows declaration order, which the selector relies on to break ties.
    Catalogs are immutable; refresh() returns a new instance so a running production
    keeps the catalog it started with.
    """

    def __init__(self, capabilities: Iterable[ProviderCapability]) -> None:
        self._providers: dict[str, ProviderCapability] = {}
        for capability in capabilities:
            if capability.id in self._providers:
                raise ValueError(f"Duplicate provider id: {capability.id}")
            self._providers[capability.id] = capability

    def __iter__(self) -> Iterator[ProviderCapability]:
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    def get(self, provider_id: str) -> ProviderCapability | None:
        return self._providers.get(provider_id)

    def ids(self) -> list[str]:
        return list(self._providers)

    def all(self) -> list[ProviderCapability]:
        return list(self._providers.values())

    def refresh(self, capabilities: Iterable[ProviderCapability]) -> "ProviderCatalog":
        """Return a new catalog built from updated capabilities."""
        return ProviderCatalog(capabilities)


# =============================================================================
# PROVIDER DEFINITIONS
# =============================================================================

RUNWAY = ProviderCapability(
    id="runway",
    display_name="Runway Gen-3",
    modes=(GenerationMode.TEXT_TO_VIDEO, GenerationMode.IMAGE_TO_VIDEO),
    max_resolution="1080p",
    max_fps=24,
    max_duration_seconds=10,
    cost_per_second=0.05,
    strengths=("Cinematic quality", "Dramatic lighting", "Smooth motion", "Professional grade"),
    weaknesses=("Higher cost", "Slower generation"),
    best_for=("cinematic", "dramatic", "hero-shots", "product-premium", "emotional", "hook", "cta"),
    motion_quality=MotionQuality.CINEMATIC,
)

KLING = ProviderCapability(
    id="kling",
    display_name="Kling AI",
    modes=(GenerationMode.TEXT_TO_VIDEO, GenerationMode.IMAGE_TO_VIDEO),
    max_resolution="1080p",
    max_fps=30,
    max_duration_seconds=10,
    cost_per_second=0.03,
    strengths=("Excellent human rendering", "Natural expressions", "Good motion physics", "Cost effective"),
    weaknesses=("Less cinematic than Runway",),
    best_for=("person", "human-subject", "face-closeup", "conversation", "testimonial", "lifestyle", "story"),
    motion_quality=MotionQuality.EXCELLENT,
    native_audio=True,
    lip_sync=True,
)

LUMA = ProviderCapability(
    id="luma",
    display_name="Luma Dream Machine",
    modes=(GenerationMode.TEXT_TO_VIDEO, GenerationMode.IMAGE_TO_VIDEO, GenerationMode.IMAGE_TO_IMAGE),
    max_resolution="1080p",
    max_fps=24,
    max_duration_seconds=5,
    cost_per_second=0.04,
    strengths=("Smooth reveals", "Product animations", "Clean transitions", "3D-like quality"),
    weaknesses=("Shorter max duration", "Less natural for people"),
    best_for=("product-reveal", "product-shot", "object-focus", "reveal-animation", "product", "brand"),
    motion_quality=MotionQuality.EXCELLENT,
)

HAILUO = ProviderCapability(
    id="hailuo",
    display_name="Hailuo MiniMax",
    modes=(GenerationMode.TEXT_TO_VIDEO, GenerationMode.IMAGE_TO_VIDEO),
    max_resolution="720p",
    max_fps=25,
    max_duration_seconds=6,
    cost_per_second=0.02,
    strengths=("Cost effective", "Good for B-roll", "Nature scenes", "Fast generation"),
    weaknesses=("Less detailed than premium", "Simpler motion"),
    best_for=("broll", "b-roll", "nature", "landscape", "ambient", "background", "establishing", "explanation"),
    motion_quality=MotionQuality.GOOD,
)

HUNYUAN = ProviderCapability(
    id="hunyuan",
    display_name="Hunyuan",
    modes=(GenerationMode.TEXT_TO_VIDEO,),
    max_resolution="720p",
    max_fps=24,
    max_duration_seconds=5,
    cost_per_second=0.025,
    strengths=("Good for nature", "Abstract scenes", "Cost effective"),
    weaknesses=("Limited duration", "Less versatile"),
    best_for=("broll", "nature", "abstract", "supplementary"),
    motion_quality=MotionQuality.STANDARD,
)

VEO = ProviderCapability(
    id="veo",
    display_name="Veo 3.1",
    modes=(GenerationMode.TEXT_TO_VIDEO, GenerationMode.IMAGE_TO_VIDEO),
    max_resolution="1080p",
    max_fps=24,
    max_duration_seconds=8,
    cost_per_second=0.06,
    strengths=("High quality output", "Cinematic results", "Good motion"),
    weaknesses=("Higher cost",),
    best_for=("cinematic", "high-quality", "dramatic", "hook"),
    motion_quality=MotionQuality.CINEMATIC,
    native_audio=True,
)

DEFAULT_CATALOG = ProviderCatalog([RUNWAY, KLING, LUMA, HAILUO, HUNYUAN, VEO])
