"""Stub scripting provider using the built-in section template."""

from ad_producer.adapters.scripting.base import ScriptingProvider, ScriptResult, render_script
from ad_producer.domain.models import Brief, build_default_manifest
from ad_producer.logging import get_logger
from ad_producer.presets.styles import style_for_brief

logger = get_logger(__name__)


class StubScriptingProvider(ScriptingProvider):
    """Builds the template manifest without calling any model."""

    @property
    def name(self) -> str:
        return "stub"

    async def analyze(self, brief: Brief) -> ScriptResult:
        manifest = build_default_manifest(brief)
        style = style_for_brief(brief.style)

        logger.info(
            "stub_script_analyzed",
            product=brief.product_name,
            sections=len(manifest),
        )

        return ScriptResult(
            success=True,
            manifest=manifest,
            style_directive=f"{style.display_name}: {style.format_style_prompt()}",
            script=render_script(manifest),
        )
