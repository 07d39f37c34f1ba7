"""
Configuration settings for the KairosDB client.

All settings are loaded from environment variables with sensible defaults.
Use a .env file for local development.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_RETRY_COUNT = 3
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "kairosdb-client-python/0.1.0"


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Endpoint ===
    KAIROSDB_URL: str = "http://localhost:8080"
    KAIROSDB_TIMEOUT: float = Field(default=DEFAULT_TIMEOUT, gt=0)  # seconds
    KAIROSDB_USER_AGENT: str = DEFAULT_USER_AGENT

    # === Retry ===
    KAIROSDB_RETRY_COUNT: int = Field(default=DEFAULT_RETRY_COUNT, ge=0)  # total attempts = count + 1
    KAIROSDB_BACKOFF_SECONDS: float = Field(default=0.0, ge=0)  # 0 disables backoff

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches to JSON logs
