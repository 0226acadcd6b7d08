"""
HTTP Transport for prflow.

Handles HTTP communication with the GitHub REST API: authentication headers,
optional retry of rate-limited requests, and conversion of network failures
into TransportError. Status codes are returned untouched for classification.
"""

import json
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from prflow.exceptions import ParseError, TransportError
from prflow.logging import log_http_request, log_http_response

DEFAULT_BASE_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


@dataclass
class RetryConfig:
    """
    Configuration for automatic transport-level retries.

    Disabled by default: failed steps are retried by the user, not the transport.
    """

    max_retries: int = 0
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


@dataclass
class RawResponse:
    """Status code and body of a GitHub API response."""

    status_code: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)
    links: dict[str, dict[str, str]] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def next_url(self) -> str | None:
        """URL of the next page, taken from the Link header."""
        return self.links.get("next", {}).get("url")

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            ParseError: If the body is not valid JSON
        """
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise ParseError(
                "INVALID_JSON",
                f"Response body is not valid JSON: {e}",
                self.status_code,
                self.text,
            ) from e


class HTTPTransport:
    """
    HTTP transport layer for the GitHub REST API.

    Handles:
    - Bearer authentication and JSON content negotiation headers
    - Optional exponential backoff with jitter for rate-limited requests
    - Retry-After header respect
    - Conversion of httpx network errors into TransportError
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        user_agent: str = "prflow",
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
            user_agent: User-Agent header sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "User-Agent": user_agent,
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        token: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> RawResponse:
        """
        Make an authenticated request.

        Args:
            method: HTTP method (GET, POST, PUT, etc.)
            path: API path (e.g., "/user/repos") or an absolute URL
            token: GitHub bearer token
            params: Query parameters
            body: JSON request body

        Returns:
            RawResponse with the status code and body

        Raises:
            TransportError: On network errors, timeouts or cancelled requests
        """
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        if body is not None:
            headers["Content-Type"] = "application/json"

        def make_request() -> httpx.Response:
            log_http_request(method, path, headers, body)
            return self._client.request(
                method, path, params=params, headers=headers, json=body
            )

        return self._execute_with_retry(make_request)

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response]
    ) -> RawResponse:
        """
        Execute a request, retrying on configured status codes.

        Args:
            request_fn: Function that makes the HTTP request

        Returns:
            RawResponse of the last attempt

        Raises:
            TransportError: On network errors after max retries
        """
        attempt = 0
        while True:
            started = time.monotonic()
            try:
                response = request_fn()
            except httpx.TimeoutException as e:
                if attempt >= self.retry_config.max_retries:
                    raise TransportError("TIMEOUT", f"Request timed out: {e}") from e
                time.sleep(self._get_backoff_time(attempt, None))
                attempt += 1
                continue
            except httpx.RequestError as e:
                if attempt >= self.retry_config.max_retries:
                    raise TransportError("CONNECTION_ERROR", str(e)) from e
                time.sleep(self._get_backoff_time(attempt, None))
                attempt += 1
                continue

            raw = self._to_raw_response(response)
            log_http_response(
                raw.status_code,
                str(response.request.url),
                raw.text,
                (time.monotonic() - started) * 1000,
            )

            if not self._should_retry(raw.status_code, attempt):
                return raw

            retry_after = response.headers.get("Retry-After")
            time.sleep(self._get_backoff_time(attempt, retry_after))
            attempt += 1

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)

    @staticmethod
    def _to_raw_response(response: httpx.Response) -> RawResponse:
        links: dict[str, dict[str, str]] = {}
        for rel, link in response.links.items():
            links[str(rel)] = {str(k): str(v) for k, v in link.items()}
        return RawResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
            links=links,
        )
