"""Adapters for generation capabilities and LLM backends."""

from ad_producer.adapters.evaluation.base import EvaluationProvider
from ad_producer.adapters.image_gen.base import ImageGenProvider
from ad_producer.adapters.llm.base import LLMProvider
from ad_producer.adapters.scripting.base import ScriptingProvider
from ad_producer.adapters.video_gen.base import VideoGenProvider
from ad_producer.adapters.voiceover.base import VoiceoverProvider

__all__ = [
    "EvaluationProvider",
    "ImageGenProvider",
    "LLMProvider",
    "ScriptingProvider",
    "VideoGenProvider",
    "VoiceoverProvider",
]
