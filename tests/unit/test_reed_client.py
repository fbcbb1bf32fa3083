"""Tests for the Reed HTTP client, using httpx.MockTransport (no network)."""

import base64

import httpx
import pytest

from src.core.config import ApiConfig
from src.core.schemas import RequestDescriptor
from src.platforms.reed.client import ReedClient


def _client(handler, **config: object) -> ReedClient:  # type: ignore[no-untyped-def]
    return ReedClient(
        ApiConfig(**config),  # type: ignore[arg-type]
        "test-key",
        transport=httpx.MockTransport(handler),
    )


class TestReedClient:
    async def test_platform_id(self) -> None:
        assert _client(lambda r: httpx.Response(200, json={})).platform_id == "reed"

    async def test_search_request_shape(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"results": [], "totalResults": 0})

        descriptor = RequestDescriptor(
            path="/search",
            params={"keywords": "python", "contract": True, "resultsToSkip": 0},
        )
        async with _client(handler) as client:
            data = await client.get_json(descriptor)

        assert data == {"results": [], "totalResults": 0}
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/1.0/search"
        assert request.url.params["keywords"] == "python"
        assert request.url.params["contract"] == "true"
        assert request.url.params["resultsToSkip"] == "0"

    async def test_basic_auth_key_as_username(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with _client(handler) as client:
            await client.get_json(RequestDescriptor(path="/jobs/1"))

        expected = base64.b64encode(b"test-key:").decode()
        assert seen[0].headers["Authorization"] == f"Basic {expected}"
        assert seen[0].url.path == "/api/1.0/jobs/1"

    async def test_custom_base_url(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with _client(handler, base_url="https://example.test/api/2.0") as client:
            await client.get_json(RequestDescriptor(path="/jobs/9"))

        assert str(seen[0].url) == "https://example.test/api/2.0/jobs/9"

    async def test_http_error_propagates(self) -> None:
        async with _client(lambda r: httpx.Response(503)) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get_json(RequestDescriptor(path="/jobs/1"))

    async def test_transport_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get_json(RequestDescriptor(path="/jobs/1"))

    async def test_requires_context_manager(self) -> None:
        client = _client(lambda r: httpx.Response(200, json={}))
        with pytest.raises(RuntimeError, match="not entered"):
            await client.get_json(RequestDescriptor(path="/jobs/1"))

    async def test_logs_each_request(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level("INFO", logger="src.platforms.reed.client")
        async with _client(lambda r: httpx.Response(200, json={})) as client:
            await client.get_json(RequestDescriptor(path="/jobs/5"))
        assert "Starting request /jobs/5" in caplog.text
