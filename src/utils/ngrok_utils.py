"""Blocking pyngrok wrapper owning the relay's single HTTP tunnel."""

import logging
from typing import Optional

from pyngrok import ngrok
from pyngrok.conf import PyngrokConfig
from pyngrok.exception import PyngrokError

logger = logging.getLogger(__name__)


class NgrokManager:
    """Opens and closes one ngrok HTTP tunnel to a local port.

    Every call blocks (pyngrok may download and launch the ngrok binary);
    async callers run these methods in a worker thread.
    """

    def __init__(
        self,
        auth_token: Optional[str] = None,
        port: int = 5000,
        region: str = "us",
        tunnel_name: str = "telegram-relay",
    ):
        self.auth_token = auth_token
        self.port = port
        self.region = region
        self.tunnel_name = tunnel_name
        self.tunnel = None
        self._config: Optional[PyngrokConfig] = None

    def _get_config(self) -> PyngrokConfig:
        if self._config is None:
            self._config = PyngrokConfig(auth_token=self.auth_token, region=self.region)
        return self._config

    def start_tunnel(self) -> str:
        """Open the tunnel and return its public URL.

        Raises:
            PyngrokError: If ngrok cannot be started or refuses the session.
        """
        config = self._get_config()
        try:
            if self.auth_token:
                ngrok.set_auth_token(self.auth_token, pyngrok_config=config)
            self.tunnel = ngrok.connect(
                self.port, "http", name=self.tunnel_name, pyngrok_config=config
            )
        except PyngrokError as e:
            logger.error(f"Could not open ngrok tunnel to port {self.port}: {e}")
            raise

        public_url = self.tunnel.public_url
        logger.info(f'ngrok tunnel "{public_url}" -> "http://127.0.0.1:{self.port}"')
        return public_url

    def stop_tunnel(self) -> None:
        """Close the tunnel if one is open. Errors are logged, not raised."""
        tunnel, self.tunnel = self.tunnel, None
        if tunnel is None:
            return
        try:
            ngrok.disconnect(tunnel.public_url, pyngrok_config=self._get_config())
            logger.info(f"ngrok tunnel {tunnel.public_url} closed")
        except PyngrokError as e:
            logger.error(f"Error closing ngrok tunnel: {e}")
