"""Base interface for script analysis providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ad_producer.domain.models import Brief, ManifestScene


@dataclass
class ScriptResult:
    """Result from script analysis."""

    success: bool
    manifest: list[ManifestScene] = field(default_factory=list)
    style_directive: str = ""
    script: str = ""
    error_message: str | None = None


class ScriptingProvider(ABC):
    """Turns a brief into a section manifest and a visual style directive.

    Implementations:
    - StubScriptingProvider: Template manifest, no model calls
    - LLMScriptingProvider: Prompts an LLM for script and visual direction
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        ...

    @abstractmethod
    async def analyze(self, brief: Brief) -> ScriptResult:
        """Plan the section manifest for a brief.

        Args:
            brief: Validated product brief

        Returns:
            ScriptResult with the manifest or error information
        """
        ...

    async def health_check(self) -> bool:
        return True


def render_script(manifest: list[ManifestScene]) -> str:
    """Join manifest narration into a readable script."""
    return "\n".join(f"[{scene.section.label}] {scene.script_text}" for scene in manifest)
