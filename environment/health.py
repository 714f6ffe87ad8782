"""
Readiness checks for a freshly started E2E environment.

This module provides:
- Container state verification from ``docker compose ps``
- HTTP health check polling with a bounded wait window
- Structured errors naming what never became ready
"""

import asyncio
import time
from typing import Dict, List, Optional, Sequence

import httpx

from core.exceptions import ContainerNotRunningError, ServiceNotReadyError
from schemas.environment import ContainerStatus
import logging

logger = logging.getLogger(__name__)


class HealthChecker:
    """
    Wait for the index and tracker to answer their health checks.

    Attributes:
        urls: Health check URLs keyed by service name
        timeout: Total seconds to wait per service (default: 120.0)
        interval: Seconds between attempts (default: 2.0)
        request_timeout: Per-request timeout in seconds (default: 5.0)
    """

    def __init__(
        self,
        urls: Dict[str, str],
        timeout: float = 120.0,
        interval: float = 2.0,
        request_timeout: float = 5.0
    ):
        self.urls = urls
        self.timeout = timeout
        self.interval = interval
        self.request_timeout = request_timeout

    def check_containers(self, statuses: Sequence[ContainerStatus]) -> List[ContainerStatus]:
        """
        Ensure every container of the project is running.

        Raises:
            ContainerNotRunningError: If any container exited, is unhealthy, or none exist
        """
        stopped = [s for s in statuses if not s.is_running]

        if not statuses or stopped:
            raise ContainerNotRunningError(
                "E2E containers are not running",
                context={
                    "containers": {s.name: s.health or s.state for s in stopped},
                    "total": len(statuses)
                }
            )

        logger.info(f"All {len(statuses)} containers are running")
        return list(statuses)

    async def wait_until_ready(self):
        """Poll every health check URL until it answers 2xx."""
        async with httpx.AsyncClient() as client:
            for service, url in self.urls.items():
                await self._wait_for(client, service, url)

    async def _wait_for(self, client: httpx.AsyncClient, service: str, url: str):
        """
        Poll one URL until it answers 2xx or the wait window elapses.

        Raises:
            ServiceNotReadyError: When the service never became ready
        """
        deadline = time.monotonic() + self.timeout
        attempt = 0
        last_status: Optional[int] = None
        last_error: Optional[Exception] = None

        while True:
            attempt += 1
            logger.debug(f"Health check attempt {attempt} for {service} at {url}")

            try:
                response = await client.get(url, timeout=self.request_timeout)
                last_status = response.status_code

                if response.is_success:
                    logger.info(f"{service} is ready ({url})")
                    return

                logger.warning(f"{service} answered {response.status_code}. Retrying in {self.interval} seconds")

            except httpx.TransportError as e:
                last_error = e
                logger.warning(f"{service} not reachable yet. Retrying in {self.interval} seconds")

            if time.monotonic() + self.interval > deadline:
                raise ServiceNotReadyError(
                    f"{service} not ready after {self.timeout} seconds",
                    context={
                        "service": service,
                        "url": url,
                        "attempts": attempt,
                        "last_status": last_status,
                        "last_error": str(last_error) if last_error else None
                    },
                    original_exception=last_error,
                    max_retries=attempt,
                    retry_delay=self.interval
                )

            await asyncio.sleep(self.interval)
