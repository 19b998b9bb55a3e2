"""Configuration management for lofty_chat.

Typed settings built on pydantic-settings. Values come from environment
variables with optional ``.env`` file support; every field has a working
default so the client runs in simulated mode with no configuration at all.
"""

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "DEFAULT_REPORT_URL",
    "DEFAULT_SYSTEM_PROMPT",
    "GeminiSettings",
    "LoftyChatConfig",
    "RedisSettings",
    "StorageSettings",
]

DEFAULT_SYSTEM_PROMPT = (
    "You are go:lofty, an AI assistant specialized in consulting. "
    "Provide helpful, accurate, and concise advice."
)

DEFAULT_REPORT_URL = "https://docs.google.com/document/d/1example-doc-id/edit"


class GeminiSettings(BaseSettings):
    """Gemini completion API settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOFTY_GEMINI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "https://generativelanguage.googleapis.com"
    api_key: SecretStr | None = None  # Used when the user has not saved one
    default_model: str = "gemini-1.5-pro"
    request_timeout_seconds: float = Field(default=60.0, gt=0)
    credential_timeout_seconds: float = Field(default=10.0, gt=0)
    top_p: float = Field(default=0.95, ge=0, le=1)
    top_k: int = Field(default=40, gt=0)
    safety_threshold: str = "BLOCK_MEDIUM_AND_ABOVE"


class StorageSettings(BaseSettings):
    """Local JSON file store settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOFTY_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    path: Path = Path.home() / ".lofty_chat" / "state.json"
    key_prefix: str = ""


class RedisSettings(BaseSettings):
    """Redis store settings (optional backend).

    If url is not configured or the connection fails, reads return nothing
    and writes raise StorageError, which the stores log and ignore.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOFTY_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str | None = None
    enabled: bool = True
    key_prefix: str = "lofty:"


class LoftyChatConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = LoftyChatConfig(simulated_latency_seconds=0)
        timeout = config.gemini.request_timeout_seconds
    """

    model_config = SettingsConfigDict(
        env_prefix="LOFTY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    gemini: GeminiSettings = GeminiSettings()
    storage: StorageSettings = StorageSettings()
    redis: RedisSettings = RedisSettings()

    # Simulated response timings
    simulated_latency_seconds: float = Field(default=1.0, ge=0)
    analysis_delay_seconds: float = Field(default=3.0, ge=0)

    # Chat defaults
    default_system_prompt: str = DEFAULT_SYSTEM_PROMPT
    default_temperature: float = Field(default=0.7, ge=0, le=1)
    default_max_tokens: int = Field(default=1024, gt=0)
    prompt_history_limit: int = Field(default=10, gt=0, le=10)
    title_max_length: int = Field(default=30, gt=0)

    # Document verification
    report_url: str = DEFAULT_REPORT_URL
