"""Tests for the video provider selector."""

import pytest

from ad_producer.domain.enums import GenerationMode
from ad_producer.services.provider_catalog import DEFAULT_CATALOG, ProviderCapability, ProviderCatalog
from ad_producer.services.provider_selector import ProviderSelector, SceneForSelection


def make_scene(
    index: int = 0,
    scene_type: str = "hook",
    content_type: str | None = None,
    visual: str = "",
    duration: float = 5.0,
) -> SceneForSelection:
    return SceneForSelection(
        scene_index=index,
        scene_type=scene_type,
        content_type=content_type,
        narration="",
        visual_direction=visual,
        duration=duration,
    )


def capability(provider_id: str, max_duration: int = 10, cost: float = 0.05) -> ProviderCapability:
    return ProviderCapability(
        id=provider_id,
        display_name=provider_id.title(),
        modes=(GenerationMode.TEXT_TO_VIDEO,),
        max_resolution="1080p",
        max_fps=24,
        max_duration_seconds=max_duration,
        cost_per_second=cost,
    )


@pytest.fixture
def selector() -> ProviderSelector:
    return ProviderSelector()


class TestSelection:
    """Tests for single-scene selection."""

    def test_cinematic_hook_prefers_runway(self, selector):
        scene = make_scene(visual="Cinematic opening shot, dramatic light revealing CBD Oil", duration=9.0)

        selection = selector.select_provider(scene, "professional")

        assert selection.provider_id == "runway"
        assert selection.confidence == 100
        assert selection.reason == "Cinematic hook impact; Cinematic visual direction"
        assert len(selection.alternatives) == 2
        assert "runway" not in selection.alternatives

    def test_testimonial_prefers_kling(self, selector):
        scene = make_scene(scene_type="testimonial", content_type="person", visual="Smiling customer talking")

        assert selector.select_provider(scene, "professional").provider_id == "kling"

    def test_product_content_prefers_luma(self, selector):
        scene = make_scene(scene_type="product", content_type="product", visual="bottle reveal", duration=4.0)

        assert selector.select_provider(scene, "product").provider_id == "luma"

    def test_deterministic(self, selector):
        scene = make_scene(scene_type="solution", visual="Product showcase on a clean surface", duration=18.0)

        first = selector.select_provider(scene, "professional")
        second = selector.select_provider(scene, "professional")

        assert first == second

    def test_unknown_style_matches_professional(self, selector):
        scene = make_scene(scene_type="problem", visual="Person looking frustrated")

        assert selector.select_provider(scene, "no-such-style") == selector.select_provider(scene, "professional")

    def test_confidence_is_clamped(self, selector):
        scene = make_scene(
            content_type="person",
            scene_type="testimonial",
            visual="person talking, smiling customer in a calm spa",
        )

        selection = selector.select_provider(scene, "professional")

        assert 0 <= selection.confidence <= 100


class TestScoring:
    """Tests for the additive scoring rules."""

    def test_duration_penalty_applies_above_max(self, selector):
        short = selector.score(make_scene(scene_type="broll", duration=5.0), "professional")
        long = selector.score(make_scene(scene_type="broll", duration=7.0), "professional")

        # Hailuo and Hunyuan max out at 6s and 5s
        assert long["hailuo"].score == short["hailuo"].score - 30
        assert long["runway"].score == short["runway"].score
        assert "Duration exceeds 6s max" in long["hailuo"].reasons

    def test_longer_scene_never_scores_higher(self, selector):
        for provider_id in DEFAULT_CATALOG.ids():
            scores = [
                selector.score(make_scene(scene_type="solution", duration=d), "social")[provider_id].score
                for d in (3.0, 6.0, 9.0, 12.0)
            ]
            assert scores == sorted(scores, reverse=True)

    def test_style_preference_bonus(self, selector):
        breakdown = selector.score(make_scene(scene_type="unknown"), "professional")

        assert breakdown["runway"].score == 50 + 15
        assert breakdown["kling"].score == 50 + 10
        assert breakdown["luma"].score == 50 + 5


class TestTieBreak:
    def test_catalog_order_wins_ties(self):
        catalog = ProviderCatalog([capability("alpha"), capability("beta")])
        selector = ProviderSelector(catalog)

        selection = selector.select_provider(make_scene(scene_type="unknown"), "professional")

        assert selection.provider_id == "alpha"
        assert selection.reason == "Default selection"
        assert selection.confidence == 50
        assert selection.alternatives == ("beta",)


class TestProject:
    def test_select_for_project_keys_by_index(self, selector):
        scenes = [
            make_scene(0, "hook", visual="epic reveal"),
            make_scene(1, "testimonial", content_type="person"),
            make_scene(2, "broll", content_type="nature", visual="landscape", duration=5.0),
        ]

        selections = selector.select_providers_for_project(scenes, "professional")

        assert list(selections) == [0, 1, 2]
        assert selections[1].provider_id == "kling"
        assert selections[2].provider_id == "hailuo"
        assert selector.provider_summary(selections) == {"runway": 1, "kling": 1, "hailuo": 1}

    def test_total_cost(self, selector):
        scenes = [make_scene(0, "hook", visual="cinematic", duration=10.0)]
        selections = selector.select_providers_for_project(scenes, "professional")

        cost = selector.calculate_total_cost(selections, scenes)

        assert cost.total == pytest.approx(0.5)
        assert cost.breakdown == {"runway": pytest.approx(0.5)}

    def test_cost_ignores_unknown_scenes(self, selector):
        scenes = [make_scene(0, "hook", duration=4.0)]
        selections = selector.select_providers_for_project(scenes, "professional")

        assert selector.calculate_total_cost(selections, []).total == 0


class TestCatalog:
    def test_refresh_returns_new_catalog(self):
        refreshed = DEFAULT_CATALOG.refresh([capability("alpha")])

        assert refreshed is not DEFAULT_CATALOG
        assert refreshed.ids() == ["alpha"]
        assert "runway" in DEFAULT_CATALOG

    def test_cost_for(self):
        assert DEFAULT_CATALOG.get("kling").cost_for(10) == pytest.approx(0.3)
