"""Provider for hosts that are already publicly reachable (PaaS, reverse proxy)."""

import logging
from typing import Optional

from ..domain.errors import ProvisioningError
from .base import TunnelProvider

logger = logging.getLogger(__name__)


class StaticUrlProvider(TunnelProvider):
    """Returns a configured public URL; opens nothing, so stop is a no-op."""

    def __init__(self, public_url: Optional[str]):
        self._public_url = (public_url or "").strip()

    @property
    def name(self) -> str:
        return "static"

    async def start(self) -> str:
        if not self._public_url:
            raise ProvisioningError(self.name, "PUBLIC_URL is not set")
        logger.info(f"Using static public URL: {self._public_url}")
        return self._public_url

    async def stop(self) -> None:
        pass
