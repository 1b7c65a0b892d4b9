"""Ngrok tunnel provider, wraps NgrokManager."""

import asyncio
import logging
from typing import Optional

from pyngrok.exception import PyngrokError

from ..domain.errors import ProvisioningError
from ..utils.ngrok_utils import NgrokManager
from .base import TunnelProvider

logger = logging.getLogger(__name__)


class NgrokTunnelProvider(TunnelProvider):
    """Tunnel provider using ngrok via pyngrok.

    pyngrok is blocking (it may download and spawn the ngrok binary), so
    start/stop run in a worker thread.
    """

    def __init__(
        self,
        port: int = 5000,
        auth_token: Optional[str] = None,
        region: str = "us",
    ):
        self._port = port
        self._auth_token = auth_token
        self._region = region
        self._manager: Optional[NgrokManager] = None  # lazy init

    def _get_manager(self) -> NgrokManager:
        if self._manager is None:
            self._manager = NgrokManager(
                auth_token=self._auth_token,
                port=self._port,
                region=self._region,
            )
        return self._manager

    @property
    def name(self) -> str:
        return "ngrok"

    async def start(self) -> str:
        manager = self._get_manager()
        try:
            public_url = await asyncio.to_thread(manager.start_tunnel)
        except (PyngrokError, OSError) as e:
            raise ProvisioningError(self.name, str(e)) from e
        if not public_url:
            raise ProvisioningError(self.name, "no public URL returned")
        return public_url

    async def stop(self) -> None:
        if self._manager:
            await asyncio.to_thread(self._manager.stop_tunnel)
