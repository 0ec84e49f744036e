"""Tests for brand asset matching."""

from ad_producer.domain.enums import MediaType
from ad_producer.services.brand_assets import (
    LOGO_MEDIA_TYPES,
    BrandAsset,
    BrandAssetMatcher,
    InMemoryBrandAssetStore,
)


def asset(asset_id: str, media_type: MediaType = MediaType.LOGO, **kwargs) -> BrandAsset:
    name = kwargs.pop("name", asset_id)
    return BrandAsset(id=asset_id, name=name, media_type=media_type, url=f"brand://{asset_id}", **kwargs)


def matcher(*assets: BrandAsset) -> BrandAssetMatcher:
    return BrandAssetMatcher(InMemoryBrandAssetStore(assets))


class TestFindAsset:
    """Tests for tiered lookup."""

    def test_default_is_last_resort(self):
        default = asset("fallback", is_default=True)

        found = matcher(asset("unrelated"), default).find_asset(LOGO_MEDIA_TYPES, ["intro"])

        assert found == default

    def test_usage_context_beats_keywords(self):
        by_keyword = asset("kw", match_keywords=("intro",), priority=50)
        by_context = asset("ctx", usage_contexts=("intro-card",))

        found = matcher(by_keyword, by_context).find_asset(LOGO_MEDIA_TYPES, ["intro"])

        assert found.id == "ctx"

    def test_keywords_beat_name(self):
        by_name = asset("named", name="Main Logo", priority=99)
        by_keyword = asset("kw", match_keywords=("primary-mark",))

        found = matcher(by_name, by_keyword).find_asset(LOGO_MEDIA_TYPES, ["primary"], ["logo"])

        assert found.id == "kw"

    def test_name_tier_needs_name_keywords(self):
        by_name = asset("named", name="Main Logo")
        default = asset("fallback", is_default=True)
        lookup = matcher(by_name, default)

        assert lookup.find_asset(LOGO_MEDIA_TYPES, ["outro"], ["logo"]).id == "named"
        assert lookup.find_asset(LOGO_MEDIA_TYPES, ["outro"]).id == "fallback"

    def test_entity_name_matches_name_tier(self):
        found = matcher(asset("e1", entity_name="Acme Logo Co")).find_asset(LOGO_MEDIA_TYPES, ["outro"], ["logo"])

        assert found.id == "e1"

    def test_highest_priority_wins_within_tier(self):
        low = asset("low", usage_contexts=("intro",), priority=1)
        high = asset("high", usage_contexts=("intro",), priority=10)
        tied = asset("tied", usage_contexts=("intro",), priority=10)

        assert matcher(low, high, tied).find_asset(LOGO_MEDIA_TYPES, ["intro"]).id == "high"

    def test_inactive_ignored(self):
        inactive = asset("old", usage_contexts=("intro",), is_active=False)

        assert matcher(inactive).find_asset(LOGO_MEDIA_TYPES, ["intro"]) is None

    def test_exclude_keywords_ignored_by_waterfall(self):
        excluded = asset("dark", usage_contexts=("intro",), exclude_keywords=("intro",))
        other = asset("light", is_default=True)

        assert matcher(excluded, other).find_asset(LOGO_MEDIA_TYPES, ["intro"]).id == "dark"

    def test_default_with_exclusions_still_fills_main_slot(self):
        default = asset("only", is_default=True, exclude_keywords=("primary",))

        found = matcher(default).find_asset(LOGO_MEDIA_TYPES, ["main", "primary"], ["logo"])

        assert found == default

    def test_media_type_filter(self):
        video = asset("clip", MediaType.VIDEO, usage_contexts=("intro",))
        photo = asset("photo", MediaType.PHOTO, is_default=True)

        assert matcher(video, photo).find_asset(LOGO_MEDIA_TYPES, ["intro"]).id == "photo"
        assert matcher(video).find_asset([MediaType.VIDEO], ["intro"]).id == "clip"

    def test_no_match(self):
        assert matcher().find_asset(LOGO_MEDIA_TYPES, ["main"]) is None


class TestFindLogos:
    def test_slots(self):
        watermark = asset("wm", MediaType.WATERMARK, usage_contexts=("overlay",))
        main = asset("main", usage_contexts=("primary",))
        outro = asset("end", usage_contexts=("closing",))

        logos = matcher(watermark, main, outro).find_logos()

        assert logos["main"].id == "main"
        assert logos["watermark"].id == "wm"
        assert logos["outro"].id == "end"
        assert logos["intro"] is None
        assert logos["favicon"] is None

    def test_favicon_slot(self):
        icon = asset("icon", MediaType.GRAPHIC, usage_contexts=("app-icon",))

        assert matcher(icon).find_logos()["favicon"].id == "icon"

    def test_watermark_slot_accepts_logo_types(self):
        mark = asset("mark", MediaType.PHOTO, match_keywords=("watermark-light",))

        assert matcher(mark).find_logos()["watermark"].id == "mark"


class TestSearchByKeywords:
    def test_ranked_by_matches_and_priority(self):
        store = InMemoryBrandAssetStore()
        store.add(asset("a", match_keywords=("hemp", "oil", "wellness"), priority=0))
        store.add(asset("b", match_keywords=("oil",), priority=5))
        store.add(asset("c", match_keywords=("coffee",)))

        results = BrandAssetMatcher(store).search_by_keywords(["hemp", "oil", "wellness"])

        assert [m.asset.id for m in results] == ["a", "b"]
        assert results[0].score == 30
        assert results[0].match_type == "exact"
        assert results[1].score == 15
        assert results[1].match_type == "partial"
        assert results[1].matched_keywords == ("oil",)

    def test_matches_name_and_description(self):
        found = matcher(asset("x", name="Sunrise Bottle", description="amber glass")).search_by_keywords(
            ["bottle", "glass"]
        )

        assert found[0].matched_keywords == ("bottle", "glass")

    def test_skips_inactive_and_excluded(self):
        results = matcher(
            asset("off", match_keywords=("oil",), is_active=False),
            asset("no", match_keywords=("oil",), exclude_keywords=("oil",)),
        ).search_by_keywords(["oil"])

        assert results == []
