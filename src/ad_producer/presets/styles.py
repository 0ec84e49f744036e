"""Visual style presets for ad production.

Each preset carries the prompt modifiers injected into generation requests, the
transition defaults used when assembling the timeline, and a ranked list of preferred
video providers consumed by the provider selector.
"""

from dataclasses import dataclass, field

from ad_producer.config import settings
from ad_producer.domain.enums import BriefStyle


@dataclass(frozen=True)
class VisualStyle:
    """A visual style preset.

    Attributes:
        name: Unique identifier for the preset
        display_name: Human-readable name
        description: Brief description of the style
        preferred_video_providers: Provider ids, most preferred first
        preferred_image_providers: Image provider ids, most preferred first
        mood: Mood descriptors for prompts
        lighting: Lighting descriptors for prompts
        camera_work: Camera descriptors for prompts
        color_grade: Color grading descriptors, also used by the assembly step
        transition_type: Default transition between scenes
        transition_duration: Default transition length in seconds
        music_genre: Genre hint for background music selection
        style_prompt_suffix: Suffix appended to every generation prompt
        negative_tokens: Things to avoid in generation
    """

    name: str
    display_name: str
    description: str
    preferred_video_providers: list[str]
    preferred_image_providers: list[str] = field(default_factory=list)
    mood: str = ""
    lighting: str = ""
    camera_work: str = ""
    color_grade: str = ""
    transition_type: str = "fade"
    transition_duration: float = 0.5
    music_genre: str = ""
    style_prompt_suffix: str = ""
    negative_tokens: list[str] = field(default_factory=list)

    def format_style_prompt(self) -> str:
        """Format prompt modifiers into a prompt suffix."""
        parts = [self.mood, self.lighting, self.camera_work, self.color_grade, self.style_prompt_suffix]
        return ", ".join(p for p in parts if p)

    def format_negative_prompt(self) -> str:
        """Format negative tokens into a negative prompt."""
        return ", ".join(self.negative_tokens)


# =============================================================================
# PRESET DEFINITIONS
# =============================================================================

PROFESSIONAL = VisualStyle(
    name="professional",
    display_name="Professional",
    description="Clean, trustworthy commercial look for product explainers",
    preferred_video_providers=["runway", "kling", "luma"],
    preferred_image_providers=["flux", "falai"],
    mood="confident, trustworthy, polished",
    lighting="soft studio lighting, even exposure, gentle rim light",
    camera_work="steady dolly moves, medium shots, clean framing",
    color_grade="warm neutral grade, natural skin tones",
    transition_type="crossfade",
    transition_duration=0.6,
    music_genre="corporate inspirational",
    style_prompt_suffix="high-end commercial production value",
    negative_tokens=["amateur", "cluttered background", "text artifacts"],
)

HERO = VisualStyle(
    name="hero",
    display_name="Hero (Cinematic)",
    description="Dramatic, film-quality visuals for brand anthems and emotional storytelling",
    preferred_video_providers=["runway", "kling", "luma"],
    preferred_image_providers=["flux", "ideogram"],
    mood="dramatic, emotional, inspiring, epic",
    lighting="cinematic lighting, dramatic shadows, golden hour, volumetric light",
    camera_work="sweeping camera movements, depth of field, wide establishing shots",
    color_grade="cinematic color grading, teal and orange, rich contrast",
    transition_type="fade",
    transition_duration=1.0,
    music_genre="orchestral cinematic",
    style_prompt_suffix="cinematic quality, film grain, movie-like production value",
    negative_tokens=["flat lighting", "static camera", "amateur", "stock footage feel"],
)

LIFESTYLE = VisualStyle(
    name="lifestyle",
    display_name="Lifestyle",
    description="Warm, relatable visuals for customer-facing content and testimonials",
    preferred_video_providers=["kling", "runway", "hailuo"],
    preferred_image_providers=["flux", "ideogram"],
    mood="warm, authentic, relatable, inviting",
    lighting="natural soft lighting, warm tones, window light",
    camera_work="steady handheld feel, eye-level angles, intimate framing",
    color_grade="warm color palette, natural skin tones, soft contrast",
    transition_type="dissolve",
    transition_duration=0.6,
    music_genre="acoustic folk indie",
    style_prompt_suffix="authentic lifestyle photography, real moments",
    negative_tokens=["staged", "corporate", "clinical", "cold lighting"],
)

PRODUCT = VisualStyle(
    name="product",
    display_name="Product Showcase",
    description="Crisp product reveals and feature close-ups",
    preferred_video_providers=["luma", "runway", "kling"],
    preferred_image_providers=["flux"],
    mood="clean, premium, focused",
    lighting="studio lighting, soft reflections, seamless backdrop",
    camera_work="slow orbit, macro close-ups, smooth reveals",
    color_grade="crisp whites, accurate product colors",
    transition_type="zoom",
    transition_duration=0.5,
    music_genre="modern electronic",
    style_prompt_suffix="commercial product photography, hero shot",
    negative_tokens=["distorted labels", "busy background"],
)

EDUCATIONAL = VisualStyle(
    name="educational",
    display_name="Educational",
    description="Clear, informative visuals for explainers and how-to content",
    preferred_video_providers=["kling", "hailuo", "runway"],
    preferred_image_providers=["flux", "ideogram"],
    mood="clear, trustworthy, informative, helpful",
    lighting="bright, even lighting, clear visibility",
    camera_work="static or slow pans, clear demonstrations",
    color_grade="natural colors, good contrast",
    transition_type="dissolve",
    transition_duration=0.5,
    music_genre="light ambient",
    style_prompt_suffix="educational content, clear demonstration",
)

SOCIAL = VisualStyle(
    name="social",
    display_name="Social (Energetic)",
    description="Fast, bold visuals tuned for short-form feeds",
    preferred_video_providers=["hailuo", "kling", "runway"],
    preferred_image_providers=["ideogram", "flux"],
    mood="energetic, exciting, bold, attention-grabbing",
    lighting="bright, high-key, punchy, vibrant colors",
    camera_work="quick cuts, dynamic angles, handheld energy",
    color_grade="saturated colors, high vibrance, bold contrast",
    transition_type="cut",
    transition_duration=0.2,
    music_genre="upbeat pop",
    style_prompt_suffix="social media style, scroll-stopping",
)

PREMIUM = VisualStyle(
    name="premium",
    display_name="Premium",
    description="Luxurious, sophisticated visuals for high-end brands",
    preferred_video_providers=["runway", "luma", "kling"],
    preferred_image_providers=["flux", "midjourney"],
    mood="luxurious, sophisticated, elegant, exclusive",
    lighting="dramatic studio lighting, rim lights, elegant shadows",
    camera_work="slow glides, elegant reveals",
    color_grade="rich deep tones, refined contrast",
    transition_type="fade",
    transition_duration=1.2,
    music_genre="minimal piano",
    style_prompt_suffix="luxury brand aesthetic, high-end commercial",
)


# =============================================================================
# PRESET REGISTRY
# =============================================================================

STYLES: dict[str, VisualStyle] = {
    style.name: style
    for style in (PROFESSIONAL, HERO, LIFESTYLE, PRODUCT, EDUCATIONAL, SOCIAL, PREMIUM)
}

# Visual style used for each brief tone
BRIEF_STYLE_PRESETS: dict[BriefStyle, str] = {
    BriefStyle.PROFESSIONAL: "professional",
    BriefStyle.CASUAL: "lifestyle",
    BriefStyle.ENERGETIC: "social",
    BriefStyle.CALM: "lifestyle",
}


def get_style(name: str) -> VisualStyle | None:
    """Get a style by name (case-insensitive).

    Args:
        name: Style name

    Returns:
        VisualStyle if found, None otherwise
    """
    return STYLES.get(name.lower())


def get_style_names() -> list[str]:
    """Get list of available style names."""
    return list(STYLES.keys())


def style_for_brief(style: BriefStyle | str) -> VisualStyle:
    """Resolve the visual style preset for a brief tone."""
    name = BRIEF_STYLE_PRESETS.get(BriefStyle(style), settings.default_visual_style)
    return get_style(name) or PROFESSIONAL
