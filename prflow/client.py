"""
prflow GitHub client.

Aggregates the resource clients over one HTTP transport.
"""

from typing import Any

import httpx

from prflow.clients import ContentsClient, PullsClient, RefsClient, ReposClient
from prflow.config import Config
from prflow.transport import DEFAULT_BASE_URL, HTTPTransport, RetryConfig


class GitHubClient:
    """
    Client for the GitHub operations prflow needs.

    The token is not stored on the client; every operation takes it as an
    argument so the caller can reload it between attempts.

    Example:
        ```python
        from prflow import GitHubClient, load_config

        config = load_config()
        with GitHubClient.from_config(config) as client:
            repos = client.repos.list_for_authenticated_user(config.github_token)
        ```
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Transport-level retry behavior (default: no retries)
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = HTTPTransport(
            base_url=base_url,
            timeout=timeout,
            retry_config=retry_config,
            transport=transport,
        )

        self.repos = ReposClient(self._transport)
        self.refs = RefsClient(self._transport)
        self.contents = ContentsClient(self._transport)
        self.pulls = PullsClient(self._transport)

    @classmethod
    def from_config(
        cls,
        config: Config,
        retry_config: RetryConfig | None = None,
    ) -> "GitHubClient":
        """Create a client for the base URL and timeout of a Config."""
        return cls(
            base_url=config.base_url,
            timeout=config.timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
