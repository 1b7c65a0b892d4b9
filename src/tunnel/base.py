"""Abstract base class for tunnel providers."""

from abc import ABC, abstractmethod


class TunnelProvider(ABC):
    """Base class for tunnel providers (ngrok, static)."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name: 'ngrok' or 'static'."""

    @abstractmethod
    async def start(self) -> str:
        """Open the route and return the public base URL.

        Raises:
            ProvisioningError: If no public route could be established.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Close the route. Idempotent, safe to call multiple times."""
