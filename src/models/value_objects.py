"""Domain value objects shared by the startup sequence, dispatcher and monitor."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse


@dataclass(frozen=True)
class PublicEndpoint:
    """Externally reachable base URL of this process.

    Created once at startup from the tunnel provider's URL and never mutated.
    """

    base_url: str

    def __post_init__(self) -> None:
        url = (self.base_url or "").strip().rstrip("/")
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid public URL {self.base_url!r}")
        object.__setattr__(self, "base_url", url)

    def url_for(self, path: str) -> str:
        """Join *path* onto the base URL, adding the leading slash if missing."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def __str__(self) -> str:
        return self.base_url


class HandlerOutcome(str, enum.Enum):
    """What the dispatcher did with one update."""

    IGNORED = "ignored"
    UNHANDLED_COMMAND = "unhandled_command"
    ENDED = "ended"
    ECHOED = "echoed"


class ProbeOutcome(str, enum.Enum):
    OK = "ok"
    BAD_STATUS = "bad_status"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single liveness probe."""

    outcome: ProbeOutcome
    status_code: Optional[int] = None
    reason: Optional[str] = None

    @classmethod
    def from_status(cls, status_code: int) -> "ProbeResult":
        if status_code == 200:
            return cls(ProbeOutcome.OK, status_code=status_code)
        return cls(ProbeOutcome.BAD_STATUS, status_code=status_code)

    @classmethod
    def from_error(cls, error: Exception) -> "ProbeResult":
        return cls(ProbeOutcome.TRANSPORT_ERROR, reason=str(error) or type(error).__name__)
