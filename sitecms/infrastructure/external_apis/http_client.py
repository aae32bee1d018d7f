"""Process-wide httpx client for outbound calls to the public website."""
import logging
from typing import Optional

import httpx

from sitecms.config import settings

logger = logging.getLogger(__name__)

_shared_client: Optional[httpx.AsyncClient] = None


def get_shared_client() -> httpx.AsyncClient:
    """Return the pooled AsyncClient, creating it on first use.

    Pool size comes from HTTP_MAX_CONNECTIONS / HTTP_MAX_KEEPALIVE and every
    request is bounded by HTTP_TIMEOUT_SECONDS.
    """
    global _shared_client

    if _shared_client is None or _shared_client.is_closed:
        _shared_client = httpx.AsyncClient(
            limits=httpx.Limits(
                max_connections=settings.HTTP_MAX_CONNECTIONS,
                max_keepalive_connections=settings.HTTP_MAX_KEEPALIVE,
            ),
            timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS),
            headers={"User-Agent": "sitecms-console"},
        )
        logger.info(
            f"Shared HTTP client ready (pool={settings.HTTP_MAX_CONNECTIONS}, "
            f"keepalive={settings.HTTP_MAX_KEEPALIVE}, timeout={settings.HTTP_TIMEOUT_SECONDS}s)"
        )

    return _shared_client


async def close_shared_client() -> None:
    """Close the pooled client on shutdown; safe to call when none was created."""
    global _shared_client

    if _shared_client is None:
        return
    await _shared_client.aclose()
    _shared_client = None
    logger.info("Shared HTTP client closed")
