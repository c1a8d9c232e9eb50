"""Pytest fixtures and shared test configuration.

Fixtures:
    - upstream_config: Deterministic Coze configuration
    - fake_coze: In-process stand-in for the Coze platform
    - coze_client: CozeClient wired to fake_coze
    - async_client: HTTPX client for API testing
"""

import json
from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from coze_relay.api.app import create_app
from coze_relay.upstream.client import CozeClient, get_coze_client
from coze_relay.upstream.config import UpstreamConfig


def sse_body(*records: tuple[str, object]) -> str:
    """Frame (event, data) pairs the way the Coze chat endpoint does."""
    chunks = []
    for event, data in records:
        encoded = data if isinstance(data, str) else json.dumps(data)
        chunks.append(f"event:{event}\ndata:{encoded}\n\n")
    return "".join(chunks)


class FakeCoze:
    """Records outgoing requests and answers them with canned responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.upload_response = httpx.Response(
            200,
            json={"code": 0, "msg": "", "data": {"id": "file-123", "url": "https://cdn.test/a.png"}},
        )
        self.chat_response = httpx.Response(200, text="")
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.url.path == "/v1/files/upload":
            return self.upload_response
        if request.url.path == "/v3/chat":
            return self.chat_response
        return httpx.Response(404, text="not found")

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def upstream_config() -> UpstreamConfig:
    """Return configuration pointing at the fake platform."""
    return UpstreamConfig(
        api_key="test-key",
        bot_id="bot-42",
        base_url="https://coze.test",
        default_user_id="user_123",
        timeout=5.0,
    )


@pytest.fixture
def fake_coze() -> FakeCoze:
    return FakeCoze()


@pytest.fixture
def coze_client(upstream_config: UpstreamConfig, fake_coze: FakeCoze) -> CozeClient:
    """Create a CozeClient whose traffic goes to fake_coze."""
    return CozeClient(config=upstream_config, transport=httpx.MockTransport(fake_coze.handler))


@pytest.fixture
async def async_client(coze_client: CozeClient) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to an app that uses the fake platform.
    """
    app = create_app()
    app.dependency_overrides[get_coze_client] = lambda: coze_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
