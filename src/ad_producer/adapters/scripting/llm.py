"""LLM-backed scripting provider."""

import json

from ad_producer.adapters.llm import LLMMessage, LLMProvider, get_llm_provider
from ad_producer.adapters.scripting.base import ScriptingProvider, ScriptResult, render_script
from ad_producer.domain.enums import Section
from ad_producer.domain.models import Brief, build_default_manifest
from ad_producer.logging import get_logger
from ad_producer.presets.styles import style_for_brief

logger = get_logger(__name__)

SYSTEM_PROMPT = """You are a direct-response ad scriptwriter and creative director.
Given a product brief, write narration and a concrete visual direction for each
requested section of the ad. Visual directions describe what the camera sees: subjects,
setting, lighting and motion.

Respond with a JSON object:
{
  "style_directive": "one sentence describing the overall look",
  "sections": [
    {"section": "hook", "script_text": "...", "visual_direction": "..."}
  ]
}"""


class LLMScriptingProvider(ScriptingProvider):
    """Asks an LLM for narration and visual direction per section.

    Timing always comes from the section template; the model only fills in text. Any
    section the model leaves out keeps the template wording.
    """

    def __init__(self, llm_provider: LLMProvider | None = None) -> None:
        self.llm = llm_provider or get_llm_provider()

    @property
    def name(self) -> str:
        return f"llm:{self.llm.name}"

    def _build_user_prompt(self, brief: Brief) -> str:
        style = style_for_brief(brief.style)
        return f"""Product: {brief.product_name}
Description: {brief.product_description or "n/a"}
Target audience: {brief.target_audience or "general"}
Key benefits: {", ".join(brief.key_benefits) or "n/a"}
Call to action: {brief.call_to_action or "n/a"}
Platform: {brief.platform} ({brief.platform.aspect_ratio})
Duration: {brief.duration_seconds} seconds
Tone: {brief.style}, visual look: {style.format_style_prompt()}
Sections: {", ".join(s.value for s in brief.manifest_sections)}"""

    async def analyze(self, brief: Brief) -> ScriptResult:
        response = await self.llm.complete(
            [
                LLMMessage(role="system", content=SYSTEM_PROMPT),
                LLMMessage(role="user", content=self._build_user_prompt(brief)),
            ],
            temperature=0.7,
            json_mode=True,
        )

        try:
            data = json.loads(response.content)
        except json.JSONDecodeError as e:
            logger.error("script_response_not_json", error=str(e))
            return ScriptResult(success=False, error_message=f"Invalid script JSON: {e}")
        if not isinstance(data, dict):
            return ScriptResult(success=False, error_message="Script response is not an object")

        written: dict[Section, dict] = {}
        for entry in data.get("sections") or []:
            if not isinstance(entry, dict):
                continue
            try:
                written[Section(str(entry.get("section", "")).lower())] = entry
            except ValueError:
                logger.warning("script_unknown_section", section=entry.get("section"))

        manifest = build_default_manifest(brief)
        for scene in manifest:
            entry = written.get(scene.section)
            if entry is None:
                continue
            scene.script_text = str(entry.get("script_text") or scene.script_text)
            scene.visual_direction = str(entry.get("visual_direction") or scene.visual_direction)

        missing = [s.value for s in brief.manifest_sections if s not in written]
        if missing:
            logger.warning("script_sections_templated", sections=missing)

        style = style_for_brief(brief.style)
        logger.info(
            "llm_script_analyzed",
            provider=self.llm.name,
            sections=len(manifest),
            tokens=response.usage.get("total_tokens", 0),
        )

        return ScriptResult(
            success=True,
            manifest=manifest,
            style_directive=str(data.get("style_directive") or style.format_style_prompt()),
            script=render_script(manifest),
        )
