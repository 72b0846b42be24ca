"""Client for the hosted AI gateway (OpenAI-style chat completions).

One POST per relay request, no retries. Non-success statuses are mapped onto
the exception classes below so the API layer can pick the response status.
"""
import logging
from collections.abc import AsyncGenerator

import httpx

from malaria_chat.config import Settings, get_settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Raised when the AI gateway call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GatewayConfigError(GatewayError):
    """Raised when the gateway API key is not configured."""


class GatewayRateLimited(GatewayError):
    """Raised when the gateway answers 429."""

    def __init__(self, message: str = "Rate limit exceeded. Please try again in a moment."):
        super().__init__(message, status_code=429)


class GatewayPaymentRequired(GatewayError):
    """Raised when the gateway answers 402 (quota or billing)."""

    def __init__(
        self, message: str = "Service temporarily unavailable. Please contact support."
    ):
        super().__init__(message, status_code=402)


class GatewayClient:
    """Thin async wrapper around the gateway's chat completions endpoint."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings | None = None):
        self.http_client = http_client
        self.settings = settings or get_settings()

    def _headers(self) -> dict[str, str]:
        if not self.settings.gateway_configured:
            raise GatewayConfigError("AI_GATEWAY_API_KEY is not configured")
        return {
            "Authorization": f"Bearer {self.settings.ai_gateway_api_key}",
            "Content-Type": "application/json",
        }

    async def create_chat_completion(self, body: dict) -> dict:
        """POST a completion request and return the decoded JSON response.

        Raises:
            GatewayConfigError: If no API key is configured.
            GatewayRateLimited: On HTTP 429.
            GatewayPaymentRequired: On HTTP 402.
            GatewayError: On any other failure (status, transport, bad JSON).
        """
        headers = self._headers()

        try:
            response = await self.http_client.post(
                self.settings.ai_gateway_url, json=body, headers=headers
            )
        except httpx.TimeoutException as e:
            logger.error(f"AI Gateway timed out: {e!r}")
            raise GatewayError(
                "AI Gateway timed out "
                f"({self.settings.ai_gateway_timeout}s limit per connect/read/write)"
            )
        except httpx.HTTPError as e:
            logger.error(f"AI Gateway request failed: {e!r}")
            raise GatewayError(f"AI Gateway request failed: {e}")

        if not response.is_success:
            error_text = response.text
            logger.error(f"AI Gateway error: {response.status_code} {error_text}")

            if response.status_code == 429:
                raise GatewayRateLimited()
            if response.status_code == 402:
                raise GatewayPaymentRequired()

            raise GatewayError(
                f"AI Gateway returned {response.status_code}: {error_text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError(f"AI Gateway returned invalid JSON: {e}")

        if not isinstance(data, dict):
            raise GatewayError("AI Gateway returned an unexpected payload")
        return data


async def get_gateway_client() -> AsyncGenerator[GatewayClient, None]:
    """FastAPI dependency: a gateway client scoped to one request.

    The timeout applies to each network operation (connect, read, write,
    pool acquisition), not to the call as a whole.
    """
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.ai_gateway_timeout) as http_client:
        yield GatewayClient(http_client, settings)
