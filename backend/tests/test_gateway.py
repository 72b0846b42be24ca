"""Tests for the gateway client dependency."""
import asyncio

import httpx

from malaria_chat.config import get_settings
from malaria_chat.services.gateway import GatewayClient, get_gateway_client


async def _open_gateway_client() -> tuple[GatewayClient, bool]:
    """Run the dependency the way FastAPI does and report what it yielded."""
    dependency = get_gateway_client()
    client = await dependency.__anext__()
    try:
        return client, client.http_client.is_closed
    finally:
        await dependency.aclose()


class TestGetGatewayClient:
    def test_uses_configured_timeout(self, monkeypatch):
        monkeypatch.setenv("AI_GATEWAY_TIMEOUT", "12.5")
        get_settings.cache_clear()

        client, closed_while_open = asyncio.run(_open_gateway_client())

        assert client.http_client.timeout == httpx.Timeout(12.5)
        assert client.settings.ai_gateway_timeout == 12.5
        assert closed_while_open is False

    def test_default_timeout(self):
        client, _ = asyncio.run(_open_gateway_client())

        assert client.http_client.timeout == httpx.Timeout(60.0)

    def test_client_closed_after_request(self):
        client, _ = asyncio.run(_open_gateway_client())

        assert client.http_client.is_closed
