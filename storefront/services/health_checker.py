# storefront/services/health_checker.py

"""Content API connectivity health checker."""

import asyncio
import logging
import time
from dataclasses import dataclass

from storefront.config.settings import Settings
from storefront.services.content_client import ContentClient

logger = logging.getLogger("storefront.health")


@dataclass
class HealthResult:
    """Result of a single endpoint health check."""

    endpoint: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def check_endpoint(client: ContentClient, endpoint: str) -> HealthResult:
    """Issue a GET against one API endpoint and classify the response."""
    start = time.monotonic()
    try:
        resp = client.session.get(
            f"{client.base_url}{endpoint}",
            headers=client._headers(),
            timeout=client.settings.REQUEST_TIMEOUT,
        )
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            endpoint=endpoint,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )

    elapsed_ms = (time.monotonic() - start) * 1000
    if resp.status_code != 200:
        return HealthResult(
            endpoint=endpoint,
            status="down",
            latency_ms=elapsed_ms,
            message=f"HTTP {resp.status_code}",
        )
    if elapsed_ms > Settings.HEALTH_SLOW_MS:
        return HealthResult(
            endpoint=endpoint,
            status="slow",
            latency_ms=elapsed_ms,
            message="High latency",
        )
    return HealthResult(
        endpoint=endpoint,
        status="ok",
        latency_ms=elapsed_ms,
        message="",
    )


class HealthChecker:
    """Runs concurrent checks against the content API endpoints."""

    def __init__(self, client: ContentClient | None = None) -> None:
        self.client = client or ContentClient()
        self.endpoints = Settings.HEALTH_ENDPOINTS

    async def check_all(self) -> list[HealthResult]:
        """Check every configured endpoint concurrently."""
        tasks = [
            asyncio.to_thread(check_endpoint, self.client, endpoint)
            for endpoint in self.endpoints
        ]
        results: list[HealthResult] = list(await asyncio.gather(*tasks))
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.endpoint,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
