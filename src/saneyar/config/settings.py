"""
SANEYAR Application Settings

Configuration management using Pydantic Settings.
All values are loaded from environment variables with the SANEYAR_ prefix.

SAFETY: Detection tuning lives here and in the phrase corpus file,
never in code, so clinical calibration does not require a release.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectionSettings(BaseSettings):
    """Crisis detection engine configuration."""

    model_config = SettingsConfigDict(env_prefix="SANEYAR_DETECTION_")

    corpus_path: Optional[Path] = Field(
        default=None,
        description="JSON phrase corpus overriding the built-in tables",
    )
    context_window: int = Field(
        default=50,
        ge=0,
        le=500,
        description="Characters inspected on each side of a matched phrase",
    )
    base_match_score: float = Field(
        default=10.0,
        gt=0.0,
        description="Score of a weight-1.0 phrase before context adjustment",
    )
    confidence_scale: float = Field(
        default=50.0,
        gt=0.0,
        description="Total score at which confidence saturates at 1.0",
    )


class EscalationSettings(BaseSettings):
    """Alert persistence and responder notification configuration."""

    model_config = SettingsConfigDict(env_prefix="SANEYAR_ESCALATION_")

    dispatch_timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)
    notification_max_attempts: int = Field(default=3, ge=1, le=10)
    notification_backoff_max_seconds: float = Field(default=10.0, ge=0.0, le=60.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with SANEYAR_ prefix.

    Usage:
        settings = get_settings()
        window = settings.detection.context_window
    """

    model_config = SettingsConfigDict(
        env_prefix="SANEYAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    # Nested settings
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    escalation: EscalationSettings = Field(default_factory=EscalationSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly and inject it.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
