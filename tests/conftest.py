"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - relay_config: RelayConfig with a fake key and a test base URL
    - provider: Scriptable stand-in for the Moonshot API (httpx.MockTransport)
    - kimi_client: KimiClient wired to the provider stand-in
    - async_client: HTTPX client for the relay API, backed by the stand-in

The provider stand-in is a real httpx transport, so requests go through the
same encoding path as in production.
"""

import json
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.relay.config import RelayConfig
from src.relay.kimi import KimiClient

BASE_URL = "https://provider.test/v1"


def completion_body(content: str) -> dict:
    """Minimal successful chat completion payload."""
    return {
        "id": "cmpl-test",
        "object": "chat.completion",
        "model": "kimi-latest",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def _respond(status_code: int, body: dict | str) -> httpx.Response:
    if isinstance(body, dict):
        return httpx.Response(status_code, json=body)
    return httpx.Response(status_code, text=body)


@dataclass
class ProviderStub:
    """Scriptable provider: one canned response per endpoint.

    Attributes:
        completion: (status, body) for POST /chat/completions. Dict bodies
            are sent as JSON, strings as plain text.
        upload: (status, body) for POST /files.
        requests: Every request received, in order.
    """

    completion: tuple[int, dict | str] = (200, completion_body("Hi there"))
    upload: tuple[int, dict | str] = (200, {"id": "f1", "object": "file"})
    requests: list[httpx.Request] = field(default_factory=list)
    raise_on: str | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.raise_on and path.endswith(self.raise_on):
            raise httpx.ConnectError("connection refused", request=request)
        if path.endswith("/chat/completions"):
            return _respond(*self.completion)
        if path.endswith("/files"):
            return _respond(*self.upload)
        return httpx.Response(404, json={"error": "not found"})

    def calls_to(self, suffix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]

    def completion_payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.calls_to("/chat/completions")]


@pytest.fixture
def relay_config() -> RelayConfig:
    """Return a config that never touches the real provider."""
    return RelayConfig(api_key="sk-test-key", base_url=BASE_URL)


@pytest.fixture
def provider() -> ProviderStub:
    return ProviderStub()


@pytest.fixture
async def kimi_client(
    relay_config: RelayConfig, provider: ProviderStub
) -> AsyncGenerator[KimiClient]:
    """Create a KimiClient whose HTTP calls land on the provider stub."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(provider.handler))
    client = KimiClient(relay_config, http_client)
    yield client
    await client.aclose()


@pytest.fixture
async def async_client(
    relay_config: RelayConfig, provider: ProviderStub
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient talking to a fresh app whose provider is the stub.
    """
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(provider.handler))
    app = create_app(relay_config, http_client)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await http_client.aclose()
