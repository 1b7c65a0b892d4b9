"""Liveness monitoring for the public endpoint.

Free-tier tunnels and hosts tear down idle endpoints. This service probes
``<public url>/wake-up`` on a fixed interval so there is always recent
traffic. Probe failures are logged and otherwise ignored.
"""

import asyncio
import logging
from typing import Optional

import httpx

from ..domain.errors import ProbeError
from ..models.value_objects import ProbeOutcome, ProbeResult, PublicEndpoint

logger = logging.getLogger(__name__)

WAKE_UP_PATH = "/wake-up"
DEFAULT_INTERVAL_SECONDS = 840.0  # 14 minutes


class LivenessMonitor:
    """Periodically probes the public endpoint."""

    def __init__(
        self,
        endpoint: PublicEndpoint,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the monitor.

        Args:
            endpoint: Public endpoint to probe; must already be provisioned
            interval_seconds: Wait between probes
            timeout_seconds: Per-probe request timeout
            client: Optional shared httpx client (tests inject a mock transport)
        """
        if endpoint is None:
            raise ValueError("LivenessMonitor needs a provisioned endpoint")
        self.endpoint = endpoint
        self.interval_seconds = interval_seconds
        self._timeout_seconds = timeout_seconds
        self._client = client
        self._stop_event = asyncio.Event()

    @property
    def probe_url(self) -> str:
        return self.endpoint.url_for(WAKE_UP_PATH)

    def stop(self) -> None:
        """Ask the loop to exit after the current probe."""
        self._stop_event.set()

    async def _get(self, url: str) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._client.get(url, timeout=self._timeout_seconds)
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                return await client.get(url)
        except httpx.HTTPError as e:
            raise ProbeError(str(e) or type(e).__name__) from e

    async def probe(self) -> ProbeResult:
        """Run one probe and log its outcome. Never raises on probe failure."""
        try:
            response = await self._get(self.probe_url)
            result = ProbeResult.from_status(response.status_code)
        except ProbeError as e:
            result = ProbeResult.from_error(e)

        if result.outcome is ProbeOutcome.OK:
            logger.info("Health check successful")
        elif result.outcome is ProbeOutcome.BAD_STATUS:
            logger.warning(f"Health check failed with status code: {result.status_code}")
        else:
            logger.error(f"Health check failed: {result.reason}")
        return result

    async def _sleep(self, seconds: float) -> None:
        """Wait for the next probe, returning early if stop() is called."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    async def run_forever(self, max_iterations: Optional[int] = None) -> None:
        """Probe, wait, repeat until cancelled or stopped.

        Args:
            max_iterations: Stop after this many probes (None = unbounded)
        """
        logger.info(
            f"Starting liveness probes of {self.probe_url} "
            f"(every {self.interval_seconds:g}s)"
        )
        iterations = 0
        try:
            while not self._stop_event.is_set():
                try:
                    await self.probe()
                except Exception as e:
                    # Continue despite errors
                    logger.error(f"Error in liveness monitor: {e}", exc_info=True)

                await self._sleep(self.interval_seconds)
                iterations += 1
                if max_iterations is not None and iterations >= max_iterations:
                    break
        except asyncio.CancelledError:
            logger.info("Liveness monitor task cancelled")
            raise
        logger.info("Liveness monitor stopped")


async def run_periodic_liveness_probe(
    endpoint: PublicEndpoint,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    timeout_seconds: float = 30.0,
) -> None:
    """Background-task entry point; runs until the task is cancelled."""
    monitor = LivenessMonitor(
        endpoint,
        interval_seconds=interval_seconds,
        timeout_seconds=timeout_seconds,
    )
    await monitor.run_forever()
