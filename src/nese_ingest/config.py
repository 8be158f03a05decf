"""Centralised settings loaded from environment / .env file."""

import os
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionLimits(BaseModel):
    """Tunable thresholds of the scan heuristic and page rasterizer.

    The decision logic (low-text pages OR low total chars) is fixed; only the
    numbers here move. Override from the environment with the nested
    delimiter, e.g. ``INGESTION__MAX_SCAN_PAGES=5``.
    """

    min_page_chars: int = Field(100, ge=0, description="Pages below this count as low-text")
    min_avg_chars_per_page: int = Field(50, ge=0, description="Document-wide chars/page floor")
    max_scan_pages: int = Field(8, ge=1, le=8, description="Pages rasterized for a scan")
    render_scale: float = Field(2.0, ge=2.0, le=2.5, description="Upscale factor vs. native page size")
    image_quality: float = Field(0.85, ge=0.8, le=1.0, description="JPEG quality on a 0-1 scale")
    dependency_wait_seconds: float = Field(5.0, ge=0.0, description="Bounded wait for a parser engine")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",  # silently ignore env vars not declared as fields
    )

    # Vision transcription
    # Accepts GOOGLE_API_KEY, GEMINI_API_KEY or API_KEY
    google_api_key: str | None = Field(None, description="Google/Gemini API key")
    anthropic_api_key: str | None = Field(None, description="Anthropic API key (alternative provider)")
    vision_provider: Literal["gemini", "anthropic"] = "gemini"
    gemini_model: str = "gemini-2.0-flash"
    claude_model: str = "claude-sonnet-4-6"
    vision_max_tokens: int = 8192

    @model_validator(mode="after")
    def _coerce_gemini_key(self) -> "Settings":
        """Fall back to GEMINI_API_KEY / API_KEY if GOOGLE_API_KEY is not set."""
        if not self.google_api_key:
            self.google_api_key = (
                os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or None
            )
        return self

    # Ingestion
    ingestion: IngestionLimits = Field(default_factory=IngestionLimits)
    page_label: str = "Page"
    sheet_label: str = "Sheet"
    transcript_label: str = "Vision transcription"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False
    max_upload_mb: int = 25

    # Logging
    log_level: str = "INFO"


settings = Settings()
