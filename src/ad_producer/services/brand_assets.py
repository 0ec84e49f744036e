"""Brand media lookup for logos and other owned assets."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Literal, Protocol

from ad_producer.domain.enums import MediaType
from ad_producer.logging import get_logger

logger = get_logger(__name__)

# Media types accepted wherever a logo is needed
LOGO_MEDIA_TYPES: tuple[MediaType, ...] = (MediaType.LOGO, MediaType.PHOTO, MediaType.GRAPHIC)


@dataclass(frozen=True)
class Placement:
    """Overlay placement hints for a brand asset."""

    position: Literal["top-left", "top-right", "bottom-left", "bottom-right", "center"] = "bottom-right"
    scale: float = 1.0
    opacity: float = 1.0
    animation: Literal["fade", "slide", "zoom", "none"] = "none"


@dataclass(frozen=True)
class BrandAsset:
    """Brand-owned media candidate."""

    id: str
    name: str
    media_type: MediaType
    url: str
    description: str = ""
    entity_name: str = ""
    entity_type: str = ""
    thumbnail_url: str | None = None
    match_keywords: tuple[str, ...] = ()
    exclude_keywords: tuple[str, ...] = ()
    usage_contexts: tuple[str, ...] = ()
    placement: Placement = field(default_factory=Placement)
    priority: int = 0
    is_default: bool = False
    is_active: bool = True


@dataclass(frozen=True)
class AssetMatch:
    """Keyword search hit."""

    asset: BrandAsset
    score: int
    matched_keywords: tuple[str, ...]
    match_type: Literal["exact", "partial"]


class BrandAssetStore(Protocol):
    """Read access to the brand media library."""

    def list_assets(self) -> list[BrandAsset]:
        ...


class InMemoryBrandAssetStore:
    """Brand asset store backed by a list."""

    def __init__(self, assets: Iterable[BrandAsset] = ()) -> None:
        self._assets = list(assets)

    def list_assets(self) -> list[BrandAsset]:
        return list(self._assets)

    def add(self, asset: BrandAsset) -> None:
        self._assets.append(asset)


def _contains_any(haystack: str, needles: Sequence[str]) -> bool:
    lowered = haystack.lower()
    return any(needle.lower() in lowered for needle in needles)


class BrandAssetMatcher:
    """Picks the best brand asset for a usage context.

    Tiers are tried in order and the first tier with any match wins:

    1. usage contexts containing a context keyword
    2. match keywords containing a context keyword
    3. name or entity name containing a name keyword (only when name keywords given)
    4. default assets of the requested media types

    Within a tier the highest priority wins; equal priorities keep store order.
    Exclude keywords only apply to keyword search.
    """

    def __init__(self, store: BrandAssetStore) -> None:
        self.store = store

    def _candidates(self, media_types: Sequence[MediaType]) -> list[BrandAsset]:
        wanted = {MediaType(m) for m in media_types}
        return [asset for asset in self.store.list_assets() if asset.is_active and asset.media_type in wanted]

    def find_asset(
        self,
        media_types: Sequence[MediaType],
        context_keywords: Sequence[str],
        name_keywords: Sequence[str] = (),
    ) -> BrandAsset | None:
        candidates = self._candidates(media_types)

        tiers = [
            lambda a: any(_contains_any(ctx, context_keywords) for ctx in a.usage_contexts),
            lambda a: any(_contains_any(kw, context_keywords) for kw in a.match_keywords),
        ]
        if name_keywords:
            tiers.append(
                lambda a: _contains_any(a.name, name_keywords) or _contains_any(a.entity_name, name_keywords)
            )
        tiers.append(lambda a: a.is_default)

        for tier, predicate in enumerate(tiers, start=1):
            matches = [a for a in candidates if predicate(a)]
            if matches:
                best = sorted(matches, key=lambda a: a.priority, reverse=True)[0]
                logger.debug("brand_asset_matched", asset_id=best.id, tier=tier, context=list(context_keywords))
                return best

        return None

    def find_logos(self) -> dict[str, BrandAsset | None]:
        """Resolve the standard logo slots used by the assembly step."""
        return {
            "main": self.find_asset(LOGO_MEDIA_TYPES, ["main", "primary"], ["logo"]),
            "watermark": self.find_asset(
                (MediaType.WATERMARK, *LOGO_MEDIA_TYPES), ["watermark", "overlay"], ["watermark"]
            )
            or self.find_asset(LOGO_MEDIA_TYPES, ["watermark"]),
            "intro": self.find_asset(LOGO_MEDIA_TYPES, ["intro", "opening"], ["logo"]),
            "outro": self.find_asset(LOGO_MEDIA_TYPES, ["outro", "closing", "cta"], ["logo"]),
            "favicon": self.find_asset(LOGO_MEDIA_TYPES, ["favicon", "icon"]),
        }

    def search_by_keywords(self, keywords: Sequence[str]) -> list[AssetMatch]:
        """Rank active assets by how many keywords they match.

        Each matched keyword is worth 10 points on top of the asset priority; more than
        two matches makes the hit exact.
        """
        results = []
        for asset in self.store.list_assets():
            if not asset.is_active:
                continue
            if any(_contains_any(exclude, keywords) for exclude in asset.exclude_keywords):
                continue

            matched = tuple(
                keyword
                for keyword in keywords
                if any(keyword.lower() in mk.lower() for mk in asset.match_keywords)
                or keyword.lower() in asset.name.lower()
                or keyword.lower() in asset.description.lower()
            )
            if not matched:
                continue

            results.append(
                AssetMatch(
                    asset=asset,
                    score=len(matched) * 10 + asset.priority,
                    matched_keywords=matched,
                    match_type="exact" if len(matched) > 2 else "partial",
                )
            )

        return sorted(results, key=lambda m: m.score, reverse=True)
