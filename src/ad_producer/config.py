"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    # LLM Provider
    llm_provider: str = Field(
        default="anthropic",
        description="LLM provider for classification and scripting (anthropic, openai, stub)",
    )
    anthropic_api_key: str | None = Field(default=None, description="Anthropic API key")
    anthropic_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Anthropic model used for scene classification and scripting",
    )
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model for LLM provider (gpt-4o-mini, gpt-4o, etc.)",
    )

    # Content classification
    classifier_provider: Literal["llm", "rules"] = Field(
        default="llm",
        description="Scene classifier strategy (llm falls back to rules without a key)",
    )

    # Generation capabilities
    scripting_provider: str = Field(
        default="stub",
        description="Script analysis provider (stub, llm)",
    )
    voiceover_provider: str = Field(
        default="stub",
        description="Voiceover provider (stub)",
    )
    image_gen_provider: str = Field(
        default="stub",
        description="Image generation provider (stub)",
    )
    video_gen_provider: str = Field(
        default="stub",
        description="Motion clip generation provider (stub)",
    )
    evaluation_provider: str = Field(
        default="stub",
        description="Asset evaluation provider (stub)",
    )

    # Pipeline behaviour
    provider_call_timeout_seconds: float = Field(
        default=120.0,
        description="Upper bound for any single generation or evaluation call",
    )
    log_emit_delay_seconds: float = Field(
        default=0.5,
        description="Pause between evaluation log entries for streaming consumers",
    )
    default_visual_style: str = Field(
        default="professional",
        description="Visual style preset used when a brief style has no mapping",
    )
    default_voice_id: str = Field(default="Rachel", description="Default narration voice")
    hook_clip_duration_seconds: int = Field(
        default=4,
        description="Target duration of the HOOK motion clip",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


# Convenience alias
settings = get_settings()
