"""
Typed errors for the webhook relay.

Each class names one failure domain so callers can decide whether a failure
is fatal (startup), isolated to one request (dispatch), or purely
observational (liveness probes).
"""

from typing import Optional


class RelayError(Exception):
    """Base class for all relay errors."""


# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------


class StartupError(RelayError):
    """A failure that must stop the process before it serves traffic."""


class ProvisioningError(StartupError):
    """The tunnel provider could not establish a public route."""

    def __init__(self, provider: str, reason: str) -> None:
        self.provider = provider
        self.reason = reason
        super().__init__(f"Tunnel provider '{provider}' failed: {reason}")


class RegistrationError(StartupError):
    """Telegram rejected the webhook URL or the call did not complete."""

    def __init__(self, webhook_url: str, reason: str) -> None:
        self.webhook_url = webhook_url
        self.reason = reason
        super().__init__(f"Failed to set webhook {webhook_url}: {reason}")


# ---------------------------------------------------------------------------
# Request time
# ---------------------------------------------------------------------------


class DispatchError(RelayError):
    """An inbound update could not be handled."""

    def __init__(self, message: str, chat_id: Optional[object] = None) -> None:
        self.chat_id = chat_id
        super().__init__(message)


# ---------------------------------------------------------------------------
# Background
# ---------------------------------------------------------------------------


class ProbeError(RelayError):
    """A liveness probe could not reach the public endpoint."""
