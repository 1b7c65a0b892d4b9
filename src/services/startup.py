"""
Startup sequence: provision the public tunnel, then register the webhook.

Runs once per process. Both steps are fatal on failure; registration is
never attempted without an endpoint. Retry is opt-in (``max_attempts > 1``)
and bounded, with exponential backoff and jitter.
"""

import logging

from ..bot.bot import TelegramBot
from ..domain.errors import ProvisioningError, RegistrationError
from ..models.value_objects import PublicEndpoint
from ..tunnel.base import TunnelProvider
from ..utils.retry import async_retry

logger = logging.getLogger(__name__)

DEFAULT_WEBHOOK_PATH = "/telegram"


async def provision(provider: TunnelProvider) -> PublicEndpoint:
    """Open the tunnel and return the public endpoint.

    Raises:
        ProvisioningError: If the provider fails or returns an unusable URL.
    """
    public_url = await provider.start()
    try:
        endpoint = PublicEndpoint(public_url)
    except ValueError as e:
        raise ProvisioningError(provider.name, str(e)) from e
    logger.info(f"Public endpoint: {endpoint}")
    return endpoint


async def register_webhook(
    client: TelegramBot,
    endpoint: PublicEndpoint,
    webhook_path: str = DEFAULT_WEBHOOK_PATH,
) -> str:
    """Register ``endpoint + webhook_path`` with Telegram.

    Returns:
        The registered webhook URL.

    Raises:
        RegistrationError: If Telegram rejects the URL.
    """
    webhook_url = endpoint.url_for(webhook_path)
    await client.set_webhook(webhook_url)
    logger.info(f"Webhook set up at {webhook_url}")
    return webhook_url


async def run_startup_sequence(
    provider: TunnelProvider,
    client: TelegramBot,
    webhook_path: str = DEFAULT_WEBHOOK_PATH,
    max_attempts: int = 1,
    base_delay: float = 2.0,
) -> PublicEndpoint:
    """Provision, then register. Returns the endpoint both steps agreed on.

    Raises:
        ProvisioningError: Tunnel could not be established (registration skipped).
        RegistrationError: Webhook was rejected.
    """
    provision_step = async_retry(
        max_attempts=max_attempts,
        base_delay=base_delay,
        exceptions=(ProvisioningError,),
    )(provision)
    register_step = async_retry(
        max_attempts=max_attempts,
        base_delay=base_delay,
        exceptions=(RegistrationError,),
    )(register_webhook)

    endpoint = await provision_step(provider)
    await register_step(client, endpoint, webhook_path)
    return endpoint
