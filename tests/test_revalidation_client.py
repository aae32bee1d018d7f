"""Tests for the fire-and-forget revalidation notifier."""
import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from sitecms.infrastructure.external_apis.revalidation_client import RevalidationNotifier

ENDPOINT = "https://website.test/api/revalidate"


def mock_client(handler):
    """AsyncClient that answers every request with ``handler``."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return lambda: client


class TestRevalidationNotifier:
    """Test dispatch and failure absorption."""

    @pytest.mark.asyncio
    async def test_posts_path_to_endpoint(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"revalidated": True})

        notifier = RevalidationNotifier(ENDPOINT, client_factory=mock_client(handler))

        receipt = notifier.notify("/exhibition-stand-builder-france")
        await notifier.drain()

        assert receipt.success
        assert receipt.path == "/exhibition-stand-builder-france"
        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert str(requests[0].url) == ENDPOINT
        assert json.loads(requests[0].content) == {"path": "/exhibition-stand-builder-france"}

    @pytest.mark.asyncio
    async def test_notify_returns_before_request_completes(self):
        client = MagicMock()
        client.post = AsyncMock(return_value=httpx.Response(200))
        notifier = RevalidationNotifier(ENDPOINT, client_factory=lambda: client)

        notifier.notify("/a")
        notifier.notify("/b")

        assert notifier.pending_count == 2
        client.post.assert_not_awaited()

        await notifier.drain()

        assert notifier.pending_count == 0
        assert client.post.await_count == 2

    @pytest.mark.asyncio
    async def test_non_2xx_response_is_absorbed(self, caplog):
        notifier = RevalidationNotifier(
            ENDPOINT, client_factory=mock_client(lambda request: httpx.Response(500))
        )

        receipt = notifier.notify("/broken")
        await notifier.drain()

        assert receipt.success
        assert "HTTP 500" in caplog.text

    @pytest.mark.asyncio
    async def test_network_error_is_absorbed(self, caplog):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        notifier = RevalidationNotifier(ENDPOINT, client_factory=mock_client(handler))

        receipt = notifier.notify("/offline")
        await notifier.drain()

        assert receipt.success
        assert "connection refused" in caplog.text

    @pytest.mark.asyncio
    async def test_client_factory_error_is_absorbed(self):
        factory = MagicMock(side_effect=RuntimeError("client closed"))
        notifier = RevalidationNotifier(ENDPOINT, client_factory=factory)

        assert notifier.notify("/x").success
        await notifier.drain()

        factory.assert_called_once()

    @pytest.mark.asyncio
    async def test_disabled_notifier_sends_nothing(self):
        factory = MagicMock()
        notifier = RevalidationNotifier(ENDPOINT, enabled=False, client_factory=factory)

        assert notifier.notify("/x").success
        await notifier.drain()

        assert notifier.pending_count == 0
        factory.assert_not_called()

    def test_notify_without_event_loop_is_skipped(self):
        factory = MagicMock()
        notifier = RevalidationNotifier(ENDPOINT, client_factory=factory)

        receipt = notifier.notify("/sync-caller")

        assert receipt.success
        assert notifier.pending_count == 0
        factory.assert_not_called()
