"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    APP_NAME: str = "Inline Field Feedback Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_TO_FILE: bool = False  # Also write logs/app.log

    # Feedback Engine Configuration
    FEEDBACK_RULES_PATH: str | None = None  # Optional YAML file with custom rulesets
    FEEDBACK_VALIDATING_FLOOR_MS: int = 300  # Minimum time "validating" stays on (0 disables)
    FEEDBACK_GENERIC_MESSAGE: str = "Please check {field_type} requirements"

    @property
    def validating_floor_seconds(self) -> float:
        """Get the validating floor delay in seconds."""
        return max(self.FEEDBACK_VALIDATING_FLOOR_MS, 0) / 1000


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
