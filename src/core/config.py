"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Telegram
    telegram_bot_token: str = Field(
        default="",
        validation_alias=AliasChoices("TELEGRAM_BOT_TOKEN", "TOKEN"),
    )

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 5000

    # Tunnel
    tunnel_provider: str = "ngrok"
    public_url: Optional[str] = None
    ngrok_authtoken: Optional[str] = None
    ngrok_region: str = "us"

    # Liveness probe (14 minutes keeps free-tier hosts from idling out)
    wake_up_interval_seconds: float = 840.0
    probe_timeout_seconds: float = 30.0

    # Startup sequence; 1 means fail fast
    startup_max_attempts: int = 1
    startup_retry_base_delay: float = 2.0

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars
        populate_by_name = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
