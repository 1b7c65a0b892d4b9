"""Factory for tunnel provider instantiation."""

import logging

from ..core.config import Settings
from ..domain.errors import ProvisioningError
from .base import TunnelProvider

logger = logging.getLogger(__name__)


def get_tunnel_provider(settings: Settings) -> TunnelProvider:
    """Create the tunnel provider named by ``TUNNEL_PROVIDER``.

    - ``ngrok`` (default): HTTP tunnel to ``PORT`` via pyngrok
    - ``static``: ``PUBLIC_URL`` is already reachable, nothing to open

    Raises:
        ProvisioningError: For an unknown provider name.
    """
    provider_name = (settings.tunnel_provider or "ngrok").lower().strip()

    if provider_name == "ngrok":
        from .ngrok_provider import NgrokTunnelProvider

        return NgrokTunnelProvider(
            port=settings.port,
            auth_token=settings.ngrok_authtoken,
            region=settings.ngrok_region,
        )

    if provider_name == "static":
        from .static_provider import StaticUrlProvider

        return StaticUrlProvider(settings.public_url)

    logger.warning(f"Unknown tunnel provider '{provider_name}'")
    raise ProvisioningError(provider_name, "unknown tunnel provider")
