"""Timeline assembly from produced assets.

Assembly is deterministic and makes no external calls. The pipeline runs the
TimelineBuilder steps one at a time so it can report progress between them;
build_timeline() runs them all at once.
"""

from dataclasses import dataclass, field

from ad_producer.domain.enums import AssetStatus, AssetType, MusicMood, Section
from ad_producer.domain.models import Asset, ManifestScene, MusicTrack, Voiceover
from ad_producer.presets.styles import VisualStyle
from ad_producer.services.brand_assets import BrandAsset

MUSIC_VOLUME = 0.2
VOICEOVER_VOLUME = 1.0

MUSIC_LIBRARY: dict[MusicMood, MusicTrack] = {
    MusicMood.UPLIFTING: MusicTrack(
        id="music_uplifting_01",
        title="Bright Horizons",
        mood=MusicMood.UPLIFTING,
        url="library://music/uplifting/bright-horizons.mp3",
    ),
    MusicMood.CALM: MusicTrack(
        id="music_calm_01",
        title="Still Water",
        mood=MusicMood.CALM,
        url="library://music/calm/still-water.mp3",
    ),
    MusicMood.DRAMATIC: MusicTrack(
        id="music_dramatic_01",
        title="Rising Tide",
        mood=MusicMood.DRAMATIC,
        url="library://music/dramatic/rising-tide.mp3",
    ),
    MusicMood.INSPIRING: MusicTrack(
        id="music_inspiring_01",
        title="New Morning",
        mood=MusicMood.INSPIRING,
        url="library://music/inspiring/new-morning.mp3",
    ),
}

_STATUS_RANK = {AssetStatus.APPROVED: 2, AssetStatus.PENDING: 1, AssetStatus.REJECTED: 0}


def select_music(mood: MusicMood) -> MusicTrack | None:
    """Pick the library track for a mood; None means no music."""
    return MUSIC_LIBRARY.get(MusicMood(mood))


@dataclass
class TimelineClip:
    """One visual segment of the timeline."""

    scene_id: str
    section: Section
    asset_id: str
    asset_type: AssetType
    url: str
    start: float
    end: float
    transition_in: str
    transition_out: str
    transition_duration: float

    @property
    def duration(self) -> float:
        return round(self.end - self.start, 2)


@dataclass
class AudioTrack:
    url: str
    start: float
    duration: float
    volume: float


@dataclass
class CaptionCue:
    start: float
    end: float
    text: str


@dataclass
class Timeline:
    """Assembled edit decision list for the final video."""

    duration: float
    aspect_ratio: str
    clips: list[TimelineClip] = field(default_factory=list)
    gaps: list[Section] = field(default_factory=list)
    voiceover: AudioTrack | None = None
    music: AudioTrack | None = None
    captions: list[CaptionCue] = field(default_factory=list)
    color_grade: str = ""
    logo: BrandAsset | None = None

    @property
    def formatted_duration(self) -> str:
        """Duration as M:SS."""
        total = int(round(self.duration))
        return f"{total // 60}:{total % 60:02d}"


def best_asset_for(section: Section, assets: list[Asset]) -> Asset | None:
    """Best available visual for a section.

    Approved beats pending beats rejected, then a video wins for the HOOK, then the
    most regenerated version wins.
    """
    candidates = [a for a in assets if a.section == section and a.is_visual]
    if not candidates:
        return None

    def rank(asset: Asset) -> tuple[int, int, int]:
        prefers_video = int(section is Section.HOOK and asset.type is AssetType.VIDEO)
        return (_STATUS_RANK[asset.status], prefers_video, asset.regeneration_count)

    return max(candidates, key=rank)


class TimelineBuilder:
    """Step-wise timeline construction."""

    def __init__(
        self,
        manifest: list[ManifestScene],
        assets: list[Asset],
        style: VisualStyle,
        aspect_ratio: str = "16:9",
    ) -> None:
        self.manifest = manifest
        self.assets = assets
        self.style = style
        duration = manifest[-1].end_time if manifest else 0.0
        self.timeline = Timeline(duration=duration, aspect_ratio=aspect_ratio)

    def layout_clips(self) -> "TimelineBuilder":
        """Place one clip per section with the preset transitions."""
        for index, scene in enumerate(self.manifest):
            asset = best_asset_for(scene.section, self.assets)
            if asset is None:
                self.timeline.gaps.append(scene.section)
                continue
            self.timeline.clips.append(
                TimelineClip(
                    scene_id=scene.id,
                    section=scene.section,
                    asset_id=asset.id,
                    asset_type=asset.type,
                    url=asset.url,
                    start=scene.start_time,
                    end=scene.end_time,
                    transition_in="none" if index == 0 else self.style.transition_type,
                    transition_out="fade" if index == len(self.manifest) - 1 else self.style.transition_type,
                    transition_duration=self.style.transition_duration,
                )
            )
        return self

    def sync_audio(self, voiceover: Voiceover | None, music: MusicTrack | None) -> "TimelineBuilder":
        if voiceover is not None:
            self.timeline.voiceover = AudioTrack(
                url=voiceover.url,
                start=0.0,
                duration=voiceover.duration_seconds,
                volume=VOICEOVER_VOLUME,
            )
        if music is not None:
            self.timeline.music = AudioTrack(
                url=music.url,
                start=0.0,
                duration=self.timeline.duration,
                volume=MUSIC_VOLUME,
            )
        return self

    def apply_grade(self, logo: BrandAsset | None = None) -> "TimelineBuilder":
        self.timeline.color_grade = self.style.color_grade
        self.timeline.logo = logo
        return self

    def add_captions(self) -> "TimelineBuilder":
        self.timeline.captions = [
            CaptionCue(start=scene.start_time, end=scene.end_time, text=scene.script_text)
            for scene in self.manifest
            if scene.script_text
        ]
        return self

    def build(self) -> Timeline:
        return self.timeline


def build_timeline(
    manifest: list[ManifestScene],
    assets: list[Asset],
    voiceover: Voiceover | None,
    music: MusicTrack | None,
    style: VisualStyle,
    aspect_ratio: str = "16:9",
    logo: BrandAsset | None = None,
) -> Timeline:
    """Assemble a timeline in one call."""
    return (
        TimelineBuilder(manifest, assets, style, aspect_ratio)
        .layout_clips()
        .sync_audio(voiceover, music)
        .apply_grade(logo)
        .add_captions()
        .build()
    )
