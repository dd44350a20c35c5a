# ABOUTME: Async HTTP client abstraction for catalog and community API calls.
# ABOUTME: Provides rate limiting, retry with backoff, and injectable transport for testing.

import asyncio
import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class CatalogFetchError(Exception):
    """Raised when an HTTP request to a catalog or community provider fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for async HTTP GET operations returning JSON objects."""

    async def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class ReadditHttpClient:
    """Async HTTP client with rate limiting and retry for provider API calls.

    Wraps httpx.AsyncClient with configurable request intervals and retry logic
    for transient failures (429, 5xx). Any other non-200 status, transport
    error, or undecodable body raises CatalogFetchError.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "readdit/0.1.0"},
            "timeout": 30.0,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0
        self._rate_lock = asyncio.Lock()

    async def __aenter__(self) -> "ReadditHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request with rate limiting and retry.

        Args:
            url: The URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response body (always a dict).

        Raises:
            CatalogFetchError: On transport errors, non-retryable HTTP errors,
                exhausted retries, or a body that is not a JSON object.
        """
        await self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = await self._client.get(url, params=params)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise CatalogFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                return self._decode(url, response)

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise CatalogFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                await asyncio.sleep(delay)

        raise CatalogFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    @staticmethod
    def _decode(url: str, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise CatalogFetchError(f"Invalid JSON from {url}: {exc}") from exc
        if not isinstance(data, dict):
            raise CatalogFetchError(f"Unexpected JSON payload from {url}")
        return data

    async def _rate_limit(self) -> None:
        """Reserve the next request slot, sleeping until it opens.

        Slots are handed out under a lock so concurrent callers are spaced
        by min_request_interval instead of firing together.
        """
        if self._min_interval <= 0:
            return
        async with self._rate_lock:
            now = time.monotonic()
            if self._last_request_time > 0:
                slot = max(now, self._last_request_time + self._min_interval)
            else:
                slot = now
            self._last_request_time = slot
        delay = slot - now
        if delay > 0:
            await asyncio.sleep(delay)
