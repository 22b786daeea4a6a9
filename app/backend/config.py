"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "1.0.0"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # Generation limits
    max_output_tokens: int = 65535
    temperature: float = 0.1
    request_timeout_ms: int = 220_000  # multi-page statements are slow

    # Diagnostics
    raw_preview_chars: int = 32_000
    log_preview_chars: int = 40_000
    text_key_pattern: str = "text|content|message|output"

    # Server
    port: int = 3005
    cors_origins: list[str] = [
        "http://localhost:3005",
        "http://127.0.0.1:3005",
    ]
    debug: bool = False

    model_config = SettingsConfigDict(
        # Load from .env file in the backend directory
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )


class ExtractionConfig(BaseModel):
    """
    Immutable settings snapshot handed to the extraction core.

    Built once at startup so the extractor and the Gemini client never
    read process-wide state on their own.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    max_output_tokens: int = 65535
    temperature: float = 0.1
    response_mime_type: str = "application/json"
    timeout_ms: int = 220_000
    preview_chars: int = 32_000
    log_preview_chars: int = 40_000
    text_key_pattern: str = "text|content|message|output"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExtractionConfig":
        """Project the extraction-relevant fields out of ``Settings``."""
        return cls(
            api_key=settings.gemini_api_key or None,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            max_output_tokens=settings.max_output_tokens,
            temperature=settings.temperature,
            timeout_ms=settings.request_timeout_ms,
            preview_chars=settings.raw_preview_chars,
            log_preview_chars=settings.log_preview_chars,
            text_key_pattern=settings.text_key_pattern,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
