"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables or a local .env file.
"""

from functools import lru_cache
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Pollsight"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # JSON lines instead of the console renderer

    # CORS - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    CORS_ORIGINS: str = "http://localhost:3000"

    # Insight thresholds
    GLOBAL_INSIGHT_MIN_RESPONSES: int = 10  # Below this, only the "be among the first" message
    PERSONAL_INSIGHT_MIN_RESPONSES: int = 5
    MAX_INSIGHTS: int = 3
    RESPONSE_VOLUME_THRESHOLD: int = 100  # "Over N people..." appears from here on
    MINORITY_THRESHOLD_PCT: int = 25
    MAJORITY_THRESHOLD_PCT: int = 75

    # Numeric distribution buckets
    MIN_BUCKETS: int = 5
    MAX_BUCKETS: int = 10

    # Seed for the illustrative subgroup estimator (None = nondeterministic)
    SUBGROUP_JITTER_SEED: Optional[int] = None

    # Optional JSON file backing the local response cache
    RESPONSE_CACHE_PATH: Optional[str] = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @field_validator("MIN_BUCKETS", "MAX_BUCKETS", "MAX_INSIGHTS")
    @classmethod
    def validate_positive(cls, v: int, info: Any) -> int:
        """Bucket and insight limits must be positive."""
        if v < 1:
            raise ValueError(f"{info.field_name} must be at least 1")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        import json

        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
