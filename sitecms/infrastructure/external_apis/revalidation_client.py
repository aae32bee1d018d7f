"""Fire-and-forget page revalidation for the public website.

The website exposes ``POST /api/revalidate`` taking ``{"path": "..."}``. The
request carries no token. Every outcome, including network errors, is logged
and dropped: a missed revalidation only means the page stays cached until its
natural expiry.
"""
import asyncio
import logging
from typing import Callable, Optional, Set

import httpx

from sitecms.application.ports.revalidation import RevalidationReceipt
from sitecms.infrastructure.external_apis.http_client import get_shared_client

logger = logging.getLogger(__name__)


class RevalidationNotifier:
    """Dispatches revalidation requests as detached asyncio tasks.

    ``notify`` is synchronous: it schedules the request and returns
    a receipt immediately, so no caller can await (or be failed by) delivery.
    """

    def __init__(
        self,
        endpoint_url: str,
        enabled: bool = True,
        client_factory: Callable[[], httpx.AsyncClient] = get_shared_client,
    ):
        self.endpoint_url = endpoint_url
        self.enabled = enabled
        self._client_factory = client_factory
        # Strong references keep pending tasks from being garbage collected
        self._pending: Set[asyncio.Task] = set()

    def notify(self, path: str = "/") -> RevalidationReceipt:
        receipt = RevalidationReceipt(path=path)

        if not self.enabled:
            logger.debug(f"[Revalidation] Disabled, skipping {path}")
            return receipt

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"[Revalidation] No running event loop, skipping {path}")
            return receipt

        task = loop.create_task(self._send(path), name=f"revalidate:{path}")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return receipt

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait for in-flight requests, e.g. on shutdown or in tests."""
        if not self._pending:
            return
        done, not_done = await asyncio.wait(set(self._pending), timeout=timeout)
        if not_done:
            logger.warning(f"[Revalidation] {len(not_done)} request(s) still pending after drain")

    async def _send(self, path: str) -> None:
        logger.info(f"[Revalidation] Triggering revalidation for path: {path}")
        try:
            client = self._client_factory()
            response = await client.post(self.endpoint_url, json={"path": path})
        except Exception as e:
            logger.warning(f"[Revalidation] Request for {path} failed (update was saved): {e}")
            return

        if response.is_success:
            logger.info(f"[Revalidation] {path} revalidated ({response.status_code})")
        else:
            logger.warning(
                f"[Revalidation] {path} rejected by {self.endpoint_url}: "
                f"HTTP {response.status_code}"
            )
