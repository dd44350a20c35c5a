# ABOUTME: Unit tests for the async HTTP client abstraction.
# ABOUTME: Tests the HttpClient protocol, ReadditHttpClient, rate limiting, retries, and decoding.

import asyncio
import time

import httpx
import pytest

from readdit.catalog.http import CatalogFetchError, HttpClient, ReadditHttpClient


class FakeTransport(httpx.AsyncBaseTransport):
    """Fake async transport for httpx that returns canned responses."""

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self._responses = list(responses or [])
        self._call_count = 0
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self._call_count += 1
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(200, json={"ok": True})

    @property
    def call_count(self) -> int:
        return self._call_count


class ExplodingTransport(httpx.AsyncBaseTransport):
    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)


class TestHttpClientProtocol:
    """Tests for HttpClient protocol compliance."""

    def test_readdit_client_satisfies_protocol(self) -> None:
        """ReadditHttpClient satisfies the HttpClient protocol."""
        client = ReadditHttpClient(min_request_interval=0.0)
        assert isinstance(client, HttpClient)


class TestReadditHttpClient:
    """Tests for ReadditHttpClient concrete class."""

    @pytest.mark.asyncio
    async def test_get_returns_json(self) -> None:
        """GET request returns parsed JSON response."""
        transport = FakeTransport()
        async with ReadditHttpClient(min_request_interval=0.0, transport=transport) as client:
            result = await client.get("https://example.com/api", params={"q": "test"})
        assert result == {"ok": True}
        assert transport.requests[0].url.params["q"] == "test"

    def test_user_agent_header(self) -> None:
        """Requests include the readdit User-Agent header."""
        client = ReadditHttpClient(min_request_interval=0.0, transport=FakeTransport())
        assert "readdit/" in client._client.headers["user-agent"]

    @pytest.mark.asyncio
    async def test_rate_limiting_delays_requests(self) -> None:
        """Consecutive requests are delayed by min_request_interval."""
        transport = FakeTransport()
        interval = 0.15
        client = ReadditHttpClient(min_request_interval=interval, transport=transport)

        start = time.monotonic()
        await client.get("https://example.com/1")
        await client.get("https://example.com/2")
        elapsed = time.monotonic() - start

        assert elapsed >= interval
        assert transport.call_count == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_rate_limiting_spaces_concurrent_requests(self) -> None:
        """Requests gathered together are still sent min_request_interval apart."""
        sent: list[float] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(time.monotonic())
            return httpx.Response(200, json={"ok": True})

        interval = 0.1
        async with ReadditHttpClient(
            min_request_interval=interval, transport=httpx.MockTransport(handler)
        ) as client:
            await asyncio.gather(*(client.get(f"https://example.com/{i}") for i in range(4)))

        gaps = [later - earlier for earlier, later in zip(sent, sent[1:])]
        assert len(sent) == 4
        assert all(gap >= interval * 0.9 for gap in gaps)

    @pytest.mark.asyncio
    async def test_http_error_raises_fetch_error(self) -> None:
        """Non-retryable HTTP errors raise CatalogFetchError without retrying."""
        transport = FakeTransport([httpx.Response(404, json={"error": "not found"})])
        client = ReadditHttpClient(min_request_interval=0.0, transport=transport)

        with pytest.raises(CatalogFetchError, match="404"):
            await client.get("https://example.com/missing")
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_retry_on_429(self) -> None:
        """Client retries on 429 status and succeeds on next attempt."""
        responses = [
            httpx.Response(429, json={"error": "rate limited"}),
            httpx.Response(200, json={"ok": True}),
        ]
        transport = FakeTransport(responses)
        client = ReadditHttpClient(
            min_request_interval=0.0, transport=transport, retry_delay=0.01
        )

        result = await client.get("https://example.com/api")
        assert result == {"ok": True}
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_retry_exhausted_raises(self) -> None:
        """After max retries, raises CatalogFetchError."""
        responses = [httpx.Response(500, json={"error": "server error"}) for _ in range(4)]
        transport = FakeTransport(responses)
        client = ReadditHttpClient(
            min_request_interval=0.0,
            transport=transport,
            max_retries=3,
            retry_delay=0.01,
        )

        with pytest.raises(CatalogFetchError, match="500"):
            await client.get("https://example.com/api")
        assert transport.call_count == 4  # 1 initial + 3 retries

    @pytest.mark.asyncio
    async def test_invalid_json_raises_fetch_error(self) -> None:
        """A 200 with an undecodable body is a fetch error, not a crash."""
        transport = FakeTransport([httpx.Response(200, content=b"<html>oops</html>")])
        client = ReadditHttpClient(min_request_interval=0.0, transport=transport)

        with pytest.raises(CatalogFetchError, match="Invalid JSON"):
            await client.get("https://example.com/api")

    @pytest.mark.asyncio
    async def test_non_object_json_raises_fetch_error(self) -> None:
        """A JSON array where an object is expected is rejected."""
        transport = FakeTransport([httpx.Response(200, json=[1, 2, 3])])
        client = ReadditHttpClient(min_request_interval=0.0, transport=transport)

        with pytest.raises(CatalogFetchError, match="Unexpected JSON"):
            await client.get("https://example.com/api")

    @pytest.mark.asyncio
    async def test_transport_error_raises_fetch_error(self) -> None:
        """Connection failures surface as CatalogFetchError."""
        client = ReadditHttpClient(min_request_interval=0.0, transport=ExplodingTransport())

        with pytest.raises(CatalogFetchError, match="connection refused"):
            await client.get("https://example.com/api")
