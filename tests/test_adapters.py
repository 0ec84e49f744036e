"""Tests for adapter implementations."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from ad_producer.adapters.evaluation import StubEvaluationProvider, get_evaluation_provider
from ad_producer.adapters.image_gen import ImageGenRequest, StubImageGenProvider, get_image_gen_provider
from ad_producer.adapters.llm import (
    AnthropicProvider,
    LLMMessage,
    OpenAIProvider,
    StubLLMProvider,
    get_llm_provider,
    has_llm_credentials,
)
from ad_producer.adapters.scripting import (
    LLMScriptingProvider,
    StubScriptingProvider,
    get_scripting_provider,
)
from ad_producer.adapters.video_gen import StubVideoGenProvider, VideoGenRequest, get_video_gen_provider
from ad_producer.adapters.voiceover import StubVoiceoverProvider, VoiceoverRequest, get_voiceover_provider
from ad_producer.domain.enums import Section
from ad_producer.domain.models import Brief
from ad_producer.errors import ProviderError


def http_response(url: str, payload: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request("POST", url))


@pytest.fixture
def brief() -> Brief:
    return Brief(
        product_name="CBD Oil",
        key_benefits=["better sleep"],
        call_to_action="Shop now",
        sections=["hook", "solution", "cta"],
    )


@pytest.mark.asyncio
async def test_voiceover_stub_estimates_duration() -> None:
    """Test stub narration duration at 150 words per minute."""
    result = await StubVoiceoverProvider().generate(VoiceoverRequest(text=" ".join(["word"] * 150)))

    assert result.success is True
    assert result.duration_seconds == 60.0
    assert result.audio_url.startswith("stub://voiceover/")


@pytest.mark.asyncio
async def test_image_stub_sources_and_dimensions() -> None:
    """Test stub images alternate between AI and stock by section."""
    provider = StubImageGenProvider()

    hook = await provider.generate(
        ImageGenRequest(section=Section.HOOK, product_name="CBD", style="professional", prompt="p")
    )
    problem = await provider.generate(
        ImageGenRequest(
            section=Section.PROBLEM, product_name="CBD", style="professional", prompt="p", aspect_ratio="9:16"
        )
    )

    assert hook.is_ai_generated
    assert (hook.width, hook.height) == (1920, 1080)
    assert not problem.is_ai_generated
    assert problem.source == "stock"
    assert (problem.width, problem.height) == (1080, 1920)


@pytest.mark.asyncio
async def test_video_stub_and_stock_broll() -> None:
    """Test stub clip generation and stock fallback."""
    provider = StubVideoGenProvider()
    request = VideoGenRequest(
        section=Section.HOOK, style="professional", duration_seconds=4, provider_id="runway", prompt="p"
    )

    clip = await provider.generate(request)
    stock = await provider.stock_broll(Section.HOOK, 4)

    assert clip.success is True
    assert clip.duration_seconds == 4.0
    assert clip.metadata["backend"] == "runway"
    assert stock.metadata["license"] == "royalty-free"
    assert stock.video_url.startswith("stub://stock/hook/")


@pytest.mark.asyncio
async def test_stub_scripting_builds_template(brief: Brief) -> None:
    """Test the template scripting provider."""
    result = await StubScriptingProvider().analyze(brief)

    assert result.success is True
    assert [s.section for s in result.manifest] == [Section.HOOK, Section.SOLUTION, Section.CTA]
    assert "[CTA] Shop now" in result.script
    assert result.style_directive.startswith("Professional")


class TestLLMScripting:
    """Tests for the LLM scripting provider."""

    @pytest.mark.asyncio
    async def test_stub_llm_fills_sections(self, brief: Brief) -> None:
        llm = StubLLMProvider()
        result = await LLMScriptingProvider(llm_provider=llm).analyze(brief)

        assert result.success is True
        assert result.manifest[1].script_text == "Stub narration for the solution section."
        assert result.manifest[1].visual_direction == "Stub visual direction for the solution section"
        assert result.style_directive == "Clean commercial look, soft studio lighting"
        assert llm.calls[0][0].role == "system"

    @pytest.mark.asyncio
    async def test_missing_section_keeps_template(self, brief: Brief) -> None:
        response = json.dumps(
            {"sections": [{"section": "HOOK", "script_text": "Sleep better tonight.", "visual_direction": ""}]}
        )
        result = await LLMScriptingProvider(llm_provider=StubLLMProvider(response=response)).analyze(brief)

        assert result.manifest[0].script_text == "Sleep better tonight."
        assert result.manifest[0].visual_direction.startswith("Cinematic opening shot")
        assert result.manifest[2].script_text == "Shop now"
        assert result.manifest[-1].end_time == brief.duration_seconds

    @pytest.mark.asyncio
    async def test_invalid_json_fails(self, brief: Brief) -> None:
        result = await LLMScriptingProvider(llm_provider=StubLLMProvider(response="not json")).analyze(brief)

        assert result.success is False
        assert "Invalid script JSON" in result.error_message

    @pytest.mark.asyncio
    async def test_non_object_fails(self, brief: Brief) -> None:
        result = await LLMScriptingProvider(llm_provider=StubLLMProvider(response="[1, 2]")).analyze(brief)

        assert result.success is False


class TestLLMProviders:
    """Tests for the HTTP LLM providers."""

    @pytest.mark.asyncio
    async def test_anthropic_without_key_raises(self) -> None:
        provider = AnthropicProvider(api_key="")

        with pytest.raises(ProviderError):
            await provider.complete([LLMMessage(role="user", content="hi")])
        assert await provider.health_check() is False

    @pytest.mark.asyncio
    async def test_anthropic_complete(self) -> None:
        provider = AnthropicProvider(api_key="test-key", model="claude-test")
        url = "https://api.anthropic.com/v1/messages"
        payload = {
            "model": "claude-test",
            "content": [{"type": "text", "text": '{"ok": true}'}],
            "usage": {"input_tokens": 12, "output_tokens": 4},
            "stop_reason": "end_turn",
        }

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = http_response(url, payload)
            response = await provider.complete(
                [LLMMessage(role="system", content="Be brief."), LLMMessage(role="user", content="hi")],
                json_mode=True,
            )

        sent = mock_post.call_args.kwargs["json"]
        assert sent["system"].startswith("Be brief.")
        assert "valid JSON" in sent["system"]
        assert sent["messages"] == [{"role": "user", "content": "hi"}]
        assert mock_post.call_args.kwargs["headers"]["x-api-key"] == "test-key"
        assert response.content == '{"ok": true}'
        assert response.usage["total_tokens"] == 16
        assert response.finish_reason == "end_turn"

    @pytest.mark.asyncio
    async def test_openai_complete_json_mode(self) -> None:
        provider = OpenAIProvider(api_key="sk-test", model="gpt-test")
        url = "https://api.openai.com/v1/chat/completions"
        payload = {
            "model": "gpt-test",
            "choices": [{"message": {"content": "{}"}, "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
        }

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = http_response(url, payload)
            response = await provider.complete([LLMMessage(role="user", content="hi")], json_mode=True)

        assert mock_post.call_args.kwargs["json"]["response_format"] == {"type": "json_object"}
        assert response.content == "{}"
        assert response.usage["total_tokens"] == 4

    @pytest.mark.asyncio
    async def test_http_error_propagates(self) -> None:
        provider = OpenAIProvider(api_key="sk-test")
        url = "https://api.openai.com/v1/chat/completions"

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = http_response(url, {"error": "rate limited"}, status_code=429)
            with pytest.raises(httpx.HTTPStatusError):
                await provider.complete([LLMMessage(role="user", content="hi")])


def test_factories_default_to_stubs() -> None:
    """Test that the configured factories return the stub adapters."""
    assert isinstance(get_voiceover_provider(), StubVoiceoverProvider)
    assert isinstance(get_image_gen_provider(), StubImageGenProvider)
    assert isinstance(get_video_gen_provider(), StubVideoGenProvider)
    assert isinstance(get_evaluation_provider(), StubEvaluationProvider)
    assert isinstance(get_scripting_provider(), StubScriptingProvider)
    assert isinstance(get_llm_provider(), StubLLMProvider)
    assert has_llm_credentials() is False
