"""Domain enumerations."""

from enum import StrEnum


class ProductionStatus(StrEnum):
    """Overall status of a production run."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not ProductionStatus.RUNNING


class PhaseName(StrEnum):
    """Pipeline phases, in execution order."""

    ANALYZE = "analyze"
    GENERATE = "generate"
    EVALUATE = "evaluate"
    ITERATE = "iterate"
    ASSEMBLE = "assemble"


PHASE_ORDER: tuple[PhaseName, ...] = tuple(PhaseName)


class PhaseStatus(StrEnum):
    """Status of a single pipeline phase."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class LogCategory(StrEnum):
    """Category of a production log entry."""

    DECISION = "decision"
    GENERATION = "generation"
    EVALUATION = "evaluation"
    SUCCESS = "success"
    ERROR = "error"
    FALLBACK = "fallback"


class AssetType(StrEnum):
    """Kind of produced media."""

    IMAGE = "image"  # Stock or library image
    AI_IMAGE = "ai_image"  # Generated image
    VIDEO = "video"
    AUDIO = "audio"


class AssetStatus(StrEnum):
    """Review status of a produced asset."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Section(StrEnum):
    """Narrative sections of an ad script."""

    HOOK = "hook"
    PROBLEM = "problem"
    SOLUTION = "solution"
    SOCIAL_PROOF = "social_proof"
    CTA = "cta"

    @property
    def label(self) -> str:
        """Upper-case label used in log messages."""
        return self.value.upper()


DEFAULT_SECTIONS: tuple[Section, ...] = (
    Section.HOOK,
    Section.PROBLEM,
    Section.SOLUTION,
    Section.SOCIAL_PROOF,
    Section.CTA,
)


class Platform(StrEnum):
    """Target publishing platforms."""

    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TWITTER = "twitter"

    @property
    def aspect_ratio(self) -> str:
        if self in (Platform.TIKTOK, Platform.INSTAGRAM):
            return "9:16"
        if self is Platform.FACEBOOK:
            return "1:1"
        return "16:9"


class BriefStyle(StrEnum):
    """Tone requested in a brief."""

    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ENERGETIC = "energetic"
    CALM = "calm"


class MusicMood(StrEnum):
    """Background music moods available in the library."""

    UPLIFTING = "uplifting"
    CALM = "calm"
    DRAMATIC = "dramatic"
    INSPIRING = "inspiring"
    NONE = "none"


class ContentClassification(StrEnum):
    """Scene content labels produced by the content classifier."""

    CINEMATIC = "cinematic"
    HUMAN_SUBJECTS = "human_subjects"
    PRODUCT_REVEAL = "product_reveal"
    BROLL = "broll"
    MIXED = "mixed"


class MediaType(StrEnum):
    """Brand media types."""

    LOGO = "logo"
    PHOTO = "photo"
    VIDEO = "video"
    GRAPHIC = "graphic"
    WATERMARK = "watermark"


class MotionQuality(StrEnum):
    """Motion quality tier declared by a video provider."""

    STANDARD = "standard"
    GOOD = "good"
    EXCELLENT = "excellent"
    CINEMATIC = "cinematic"


class GenerationMode(StrEnum):
    """Generation modes a video provider supports."""

    TEXT_TO_VIDEO = "text_to_video"
    IMAGE_TO_VIDEO = "image_to_video"
    IMAGE_TO_IMAGE = "image_to_image"


class ErrorKind(StrEnum):
    """Failure class of a capability call."""

    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    PROVIDER = "provider"  # Backend reported failure
    UNAVAILABLE = "unavailable"  # Capability not configured
