"""Anthropic LLM provider implementation."""

from typing import Any

import httpx

from ad_producer.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse
from ad_producer.config import settings
from ad_producer.errors import ProviderError
from ad_producer.logging import get_logger

logger = get_logger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(LLMProvider):
    """Anthropic Messages API provider for Claude models."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str = "https://api.anthropic.com/v1",
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key or settings.anthropic_api_key
        self.model = model or settings.anthropic_model
        self.base_url = base_url
        self.timeout = timeout or settings.provider_call_timeout_seconds

        if not self.api_key:
            logger.warning("anthropic_api_key_missing")

    @property
    def name(self) -> str:
        return f"anthropic:{self.model}"

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }

    async def complete(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate completion using the Anthropic Messages API."""
        if not self.api_key:
            raise ProviderError("Anthropic API key not configured", provider=self.name)

        # The Messages API takes the system prompt separately from the turns
        system_message = "\n\n".join(m.content for m in messages if m.role == "system")
        conversation = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]

        if json_mode:
            system_message += "\n\nRespond with valid JSON only. No prose, no code fences."

        payload: dict[str, Any] = {
            "model": self.model,
            "messages": conversation,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if system_message.strip():
            payload["system"] = system_message.strip()

        logger.debug(
            "anthropic_request",
            model=self.model,
            message_count=len(conversation),
            json_mode=json_mode,
        )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/messages",
                headers=self._headers(),
                json=payload,
            )
            response.raise_for_status()
            data = response.json()

        try:
            content = "".join(
                block.get("text", "") for block in data.get("content") or [] if block.get("type") == "text"
            )
        except (AttributeError, TypeError) as e:
            raise ProviderError(f"Unexpected Anthropic response shape: {e!r}", provider=self.name) from e
        usage = data.get("usage", {})

        logger.info(
            "anthropic_response",
            model=self.model,
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
            stop_reason=data.get("stop_reason"),
        )

        return LLMResponse(
            content=content,
            model=data.get("model", self.model),
            usage={
                "prompt_tokens": usage.get("input_tokens", 0),
                "completion_tokens": usage.get("output_tokens", 0),
                "total_tokens": usage.get("input_tokens", 0) + usage.get("output_tokens", 0),
            },
            raw_response=data,
            finish_reason=data.get("stop_reason"),
        )

    async def health_check(self) -> bool:
        """Check that the API key is accepted."""
        if not self.api_key:
            return False

        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.post(
                    f"{self.base_url}/messages",
                    headers=self._headers(),
                    json={
                        "model": self.model,
                        "messages": [{"role": "user", "content": "hi"}],
                        "max_tokens": 1,
                    },
                )
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error("anthropic_health_check_failed", error=str(e))
            return False
