"""Async JSON-over-HTTP base client.

Shared by the sports data and favorites clients. Maps transport failures
to NetworkError and failure statuses to ApiError; retries 429, 5xx and
transport errors with exponential backoff and jitter.
"""

import asyncio
import logging
import random

import httpx

from sportsdeck.core.errors import ApiError, NetworkError

logger = logging.getLogger(__name__)

# Retry backoff configuration
RETRY_BASE_DELAY = 0.5  # Start at 500ms
RETRY_MAX_DELAY = 10.0
RETRY_JITTER = 0.3  # ±30% randomization

# Rate limit (429) handling
RATE_LIMIT_BASE_DELAY = 5.0
RATE_LIMIT_MAX_DELAY = 60.0


def calculate_delay(attempt: int) -> float:
    """Calculate retry delay with exponential backoff and jitter.

    Args:
        attempt: Zero-based attempt number (0, 1, 2...)

    Returns:
        Delay in seconds, never below 100ms
    """
    # 0.5, 1, 2, 4... capped at 10s
    capped = min(RETRY_BASE_DELAY * (2**attempt), RETRY_MAX_DELAY)
    jitter = capped * RETRY_JITTER * (2 * random.random() - 1)
    return max(0.1, capped + jitter)


def rate_limit_delay(response: httpx.Response, attempt: int) -> float:
    """Delay before retrying a 429, honouring Retry-After when present."""
    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return min(float(retry_after), RATE_LIMIT_MAX_DELAY)
        except ValueError:
            pass
    return min(RATE_LIMIT_BASE_DELAY * (2**attempt), RATE_LIMIT_MAX_DELAY)


def error_message(response: httpx.Response) -> str:
    """Failure message from the JSON body, or a generic status message."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"API error: {response.status_code}"


class AsyncJSONClient:
    """Low-level async client returning decoded JSON.

    The httpx.AsyncClient is created lazily. A transport can be injected
    (httpx.MockTransport in tests).
    """

    # Subsystem tag for log lines
    name = "HTTP"

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        retry_count: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._retry_count = max(1, retry_count)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=20),
            )
        return self._client

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
    ) -> dict:
        """Make an HTTP request with retry logic.

        Returns:
            Decoded JSON body ({} for an empty body)

        Raises:
            NetworkError: transport failure after all retries
            ApiError: failure status (immediately for 4xx, after retries for 429/5xx)
        """
        url = self.url_for(path)
        last_error: Exception | None = None

        for attempt in range(self._retry_count):
            try:
                response = await self._get_client().request(method, url, params=params, json=json)
            except httpx.TimeoutException as e:
                logger.warning("[%s] Timeout for %s (attempt %d)", self.name, url, attempt + 1)
                last_error = NetworkError(url, f"timed out after {self._timeout}s")
                last_error.__cause__ = e
            except (httpx.RequestError, OSError) as e:
                logger.warning("[%s] Request failed for %s: %s", self.name, url, e)
                last_error = NetworkError(url, str(e) or type(e).__name__)
                last_error.__cause__ = e
            else:
                if response.is_success:
                    logger.debug("[%s] %s %s", self.name, method, url)
                    if not response.content:
                        return {}
                    try:
                        data = response.json()
                    except ValueError as e:
                        raise ApiError(response.status_code, "Malformed JSON response", url) from e
                    return data if isinstance(data, dict) else {}

                status = response.status_code
                last_error = ApiError(status, error_message(response), url)
                if status != 429 and status < 500:
                    logger.warning("[%s] HTTP %d for %s", self.name, status, url)
                    raise last_error

                logger.warning(
                    "[%s] HTTP %d for %s (attempt %d/%d)",
                    self.name,
                    status,
                    url,
                    attempt + 1,
                    self._retry_count,
                )
                if status == 429 and attempt < self._retry_count - 1:
                    await asyncio.sleep(rate_limit_delay(response, attempt))
                    continue

            if attempt < self._retry_count - 1:
                await asyncio.sleep(calculate_delay(attempt))

        logger.error("[%s] Giving up on %s after %d attempts", self.name, url, self._retry_count)
        if last_error is None:
            raise NetworkError(url, "no request attempted")
        raise last_error

    async def get(self, path: str, params: dict | None = None) -> dict:
        return await self.request("GET", path, params=params)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
