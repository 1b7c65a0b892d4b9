"""
Application lifespan management.

Startup, in order:
- Configuration validation
- Telegram client construction (the session opens during registration)
- Tunnel provisioning, then webhook registration (both fatal on failure)
- Liveness monitor as a tracked background task

Shutdown cancels the monitor, closes the tunnel and the client.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .bot.bot import TelegramBot
from .bot.dispatcher import UpdateDispatcher
from .core.config import get_settings
from .core.config_validator import log_config_summary, validate_config
from .domain.errors import ProvisioningError, RegistrationError, StartupError
from .services.liveness_monitor import run_periodic_liveness_probe
from .services.startup import run_startup_sequence
from .tunnel import TunnelProvider, get_tunnel_provider
from .utils.logging import get_event_logger
from .utils.task_tracker import (
    cancel_all_tasks,
    create_tracked_task,
    get_active_task_count,
)

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/telegram"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    events = get_event_logger(__name__)
    logger.info("Telegram relay starting up...")

    # Validate configuration before anything else
    settings = get_settings()
    config_errors = validate_config(settings)
    if config_errors:
        for err in config_errors:
            logger.error(f"Config validation error: {err}")
        logger.critical(
            "Aborting startup due to %d configuration error(s)", len(config_errors)
        )
        raise StartupError(f"{len(config_errors)} configuration error(s)")
    log_config_summary(settings)

    client = TelegramBot(settings.telegram_bot_token)

    provider: Optional[TunnelProvider] = None
    try:
        provider = get_tunnel_provider(settings)
        endpoint = await run_startup_sequence(
            provider,
            client,
            webhook_path=WEBHOOK_PATH,
            max_attempts=settings.startup_max_attempts,
            base_delay=settings.startup_retry_base_delay,
        )
    except ProvisioningError as e:
        logger.critical(f"Failed to start server: tunnel provisioning failed: {e}")
        await _shutdown(provider, client)
        raise
    except RegistrationError as e:
        logger.critical(f"Failed to start server: webhook registration failed: {e}")
        await _shutdown(provider, client)
        raise

    events.info(
        "webhook_ready",
        provider=provider.name,
        public_url=str(endpoint),
        webhook_url=endpoint.url_for(WEBHOOK_PATH),
    )

    app.state.endpoint = endpoint
    app.state.dispatcher = UpdateDispatcher(client)

    create_tracked_task(
        run_periodic_liveness_probe(
            endpoint,
            interval_seconds=settings.wake_up_interval_seconds,
            timeout_seconds=settings.probe_timeout_seconds,
        ),
        name="liveness_monitor",
    )
    logger.info(
        f"Started liveness monitor (every {settings.wake_up_interval_seconds:g}s)"
    )
    logger.info(f"Server is running on port {settings.port}")

    yield

    await _shutdown(provider, client)


async def _shutdown(
    provider: Optional[TunnelProvider], client: TelegramBot
) -> None:
    """Shutdown all subsystems in order."""
    logger.info("Telegram relay shutting down...")

    # Cancel the liveness monitor first so it does not probe a closed tunnel
    active_count = get_active_task_count()
    if active_count > 0:
        logger.info(f"Cancelling {active_count} active background tasks...")
        await cancel_all_tasks(timeout=5.0)

    if provider:
        try:
            await provider.stop()
            logger.info(f"Tunnel provider ({provider.name}) stopped")
        except Exception as e:
            logger.error(f"Tunnel provider stop error: {e}")

    await client.shutdown()
    logger.info("Shutdown complete")
