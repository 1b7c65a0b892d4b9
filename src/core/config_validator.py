"""
Startup configuration validation and redacted summary logging.

Called early in the FastAPI lifespan to fail fast on misconfiguration.
"""

import logging
from typing import List
from urllib.parse import urlparse

from .config import Settings

logger = logging.getLogger(__name__)

_KNOWN_TUNNEL_PROVIDERS = ("ngrok", "static")


def validate_config(settings: Settings) -> List[str]:
    """
    Validate application configuration and return a list of error strings.

    An empty list means the configuration is valid.
    """
    errors: List[str] = []

    # -- Required secrets --------------------------------------------------
    if not settings.telegram_bot_token or not settings.telegram_bot_token.strip():
        errors.append("TELEGRAM_BOT_TOKEN (or TOKEN) is required but missing or empty")

    # -- Listener ----------------------------------------------------------
    if not 0 < settings.port < 65536:
        errors.append(f"PORT must be between 1 and 65535, got {settings.port}")

    # -- Tunnel ------------------------------------------------------------
    provider = (settings.tunnel_provider or "").lower().strip()
    if provider not in _KNOWN_TUNNEL_PROVIDERS:
        errors.append(
            f"TUNNEL_PROVIDER must be one of {', '.join(_KNOWN_TUNNEL_PROVIDERS)}, "
            f"got '{settings.tunnel_provider}'"
        )
    elif provider == "static":
        public_url = (settings.public_url or "").strip()
        parsed = urlparse(public_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(
                f"PUBLIC_URL format is invalid (expected http(s)://...): '{public_url}'"
            )

    # -- Timing ------------------------------------------------------------
    if settings.wake_up_interval_seconds <= 0:
        errors.append("WAKE_UP_INTERVAL_SECONDS must be positive")
    if settings.startup_max_attempts < 1:
        errors.append("STARTUP_MAX_ATTEMPTS must be at least 1")

    return errors


def _redact(secret: str) -> str:
    """Return first 4 characters followed by '***', or '<empty>' if blank."""
    if not secret:
        return "<empty>"
    return secret[:4] + "***"


def log_config_summary(settings: Settings) -> None:
    """Log an INFO-level summary of loaded configuration with secrets redacted."""
    summary_lines = [
        f"port={settings.port}",
        f"tunnel={settings.tunnel_provider}",
        f"wake_up_interval={settings.wake_up_interval_seconds:g}s",
        f"startup_attempts={settings.startup_max_attempts}",
        f"bot_token={_redact(settings.telegram_bot_token)}",
    ]
    if settings.ngrok_authtoken:
        summary_lines.append(f"ngrok_authtoken={_redact(settings.ngrok_authtoken)}")

    logger.info("Config loaded: %s", " | ".join(summary_lines))
