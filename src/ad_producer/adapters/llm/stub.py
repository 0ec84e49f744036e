"""Stub LLM provider for testing."""

import json
import re

from ad_producer.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse
from ad_producer.logging import get_logger

logger = get_logger(__name__)

SCENE_LINE = re.compile(r"^Scene (\d+) \(ID: ([^)]+)\)", re.MULTILINE)
SECTIONS_LINE = re.compile(r"^Sections: (.+)$", re.MULTILINE)


class StubLLMProvider(LLMProvider):
    """Stub provider that returns canned LLM responses without network calls.

    With an explicit ``response`` every completion returns that text. Otherwise the
    stub answers scene classification prompts with a JSON array (one entry per
    ``Scene N (ID: x)`` line) and script prompts with a JSON manifest for the
    listed sections.
    """

    def __init__(self, response: str | None = None) -> None:
        self.response = response
        self.calls: list[list[LLMMessage]] = []

    @property
    def name(self) -> str:
        return "stub"

    async def complete(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Return a mock completion response."""
        self.calls.append(list(messages))
        logger.info(
            "stub_llm_complete",
            message_count=len(messages),
            json_mode=json_mode,
        )

        user_message = next((m.content for m in reversed(messages) if m.role == "user"), "")

        if self.response is not None:
            content = self.response
        elif scenes := SCENE_LINE.findall(user_message):
            content = json.dumps(
                [
                    {
                        "scene_id": scene_id,
                        "scene_index": int(index) - 1,
                        "recommended_provider": "runway",
                        "fallback_provider": "kling",
                        "confidence": 70,
                        "reasoning": "Stub classification",
                        "content_classification": "mixed",
                    }
                    for index, scene_id in scenes
                ]
            )
        elif json_mode:
            match = SECTIONS_LINE.search(user_message)
            sections = [s.strip() for s in match.group(1).split(",")] if match else []
            content = json.dumps(
                {
                    "style_directive": "Clean commercial look, soft studio lighting",
                    "sections": [
                        {
                            "section": section,
                            "script_text": f"Stub narration for the {section} section.",
                            "visual_direction": f"Stub visual direction for the {section} section",
                        }
                        for section in sections
                    ],
                }
            )
        else:
            content = f"This is a stub response for: {user_message[:100]}"

        return LLMResponse(
            content=content,
            model="stub-model",
            usage={
                "prompt_tokens": len(user_message.split()),
                "completion_tokens": len(content.split()),
                "total_tokens": len(user_message.split()) + len(content.split()),
            },
            finish_reason="stop",
        )
