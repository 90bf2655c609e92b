"""
Configuration settings for retryloop.

Settings cover the ambient concerns only (logging, metrics) and are loaded
from environment variables with sensible defaults. Retry defaults (delay,
max tries, timeout) are fixed in retryloop.retry.options and are changed per
run through overrides, never through the environment.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRYLOOP_",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "retryloop"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Observability ===
    LOG_ATTEMPTS: bool = True  # Debug event for every attempt
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
