import json

import httpx
import pytest
from fastapi.testclient import TestClient

from malaria_chat.config import get_settings
from malaria_chat.main import app
from malaria_chat.services.gateway import GatewayClient, get_gateway_client


class FakeGateway:
    """Records upstream requests and answers them with a configurable handler."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(
            200,
            json={"choices": [{"message": {"role": "assistant", "content": "Hello!"}}]},
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Isolate settings from the developer's environment."""
    monkeypatch.setenv("AI_GATEWAY_API_KEY", "test-key")
    monkeypatch.delenv("LOVABLE_API_KEY", raising=False)
    monkeypatch.setenv("AI_GATEWAY_URL", "https://gateway.test/v1/chat/completions")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gateway():
    """Fake AI gateway behind httpx.MockTransport."""
    return FakeGateway()


@pytest.fixture
def test_client(gateway):
    """FastAPI test client wired to the fake gateway."""

    async def override_gateway_client():
        transport = httpx.MockTransport(gateway)
        async with httpx.AsyncClient(transport=transport) as http_client:
            yield GatewayClient(http_client, get_settings())

    app.dependency_overrides[get_gateway_client] = override_gateway_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def completion():
    """Helper to build OpenAI-style completion payloads."""

    def _completion(content: str | None = None, tool_calls: list | None = None) -> dict:
        message = {"role": "assistant", "content": content}
        if tool_calls is not None:
            message["tool_calls"] = tool_calls
        return {"id": "chatcmpl-test", "choices": [{"index": 0, "message": message}]}

    return _completion


@pytest.fixture
def tool_call():
    """Helper to build a suggest_faqs tool call."""

    def _tool_call(arguments) -> dict:
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments)
        return {
            "id": "call_1",
            "type": "function",
            "function": {"name": "suggest_faqs", "arguments": arguments},
        }

    return _tool_call


@pytest.fixture
def sample_suggestions():
    return {
        "suggestions": [
            {"question": "How do bed nets prevent malaria?", "category": "prevention"},
            {"question": "What are early signs of malaria?", "category": "symptoms"},
            {"question": "How long does treatment take?", "category": "treatment"},
            {"question": "Which antimalarial should I take when travelling?", "category": "medication"},
        ]
    }
