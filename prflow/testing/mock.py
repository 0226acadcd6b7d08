"""
Mock GitHub API and scripted prompter for testing.

MockGitHub serves scripted responses through httpx.MockTransport, so the real
transport, clients and workflow run unchanged against it.
"""

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from prflow.client import GitHubClient
from prflow.interaction import is_affirmative


@dataclass
class MockResponse:
    """Configuration for a mock response."""

    status_code: int = 200
    data: Any = None
    text: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None
    call_count: int = 0

    def build(self, request: httpx.Request) -> httpx.Response:
        self.call_count += 1
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(
                self.status_code, text=self.text, headers=self.headers, request=request
            )
        return httpx.Response(
            self.status_code, json=self.data, headers=self.headers, request=request
        )


@dataclass
class MockCall:
    """Record of a request received by MockGitHub."""

    method: str
    path: str
    params: dict[str, str]
    headers: dict[str, str]
    body: Any
    timestamp: datetime = field(default_factory=datetime.now)


class MockGitHub:
    """
    Scripted stand-in for the GitHub REST API.

    Responses are queued per (method, path) and served in order; the last
    queued response keeps being served. Unknown routes answer 404 like
    GitHub does.

    Example:
        ```python
        from prflow.testing import MockGitHub

        github = MockGitHub()
        github.add("GET", "/user/repos", json=[create_repository_payload("demo")])

        with github.client() as client:
            repos = client.repos.list_for_authenticated_user("token")

        assert github.call_count("GET", "/user/repos") == 1
        ```
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], list[MockResponse]] = {}
        self._calls: list[MockCall] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> "MockGitHub":
        """Queue a response for a route."""
        self._routes.setdefault((method.upper(), path), []).append(
            MockResponse(status_code=status, data=json, text=text, headers=headers or {})
        )
        return self

    def add_error(self, method: str, path: str, error: Exception) -> "MockGitHub":
        """Queue a transport error (e.g. httpx.ConnectTimeout) for a route."""
        self._routes.setdefault((method.upper(), path), []).append(
            MockResponse(error=error)
        )
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self._calls.append(
            MockCall(
                method=request.method,
                path=path,
                params=dict(request.url.params),
                headers=dict(request.headers),
                body=json.loads(request.content) if request.content else None,
            )
        )

        queue = self._routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"message": "Not Found"}, request=request)

        response = queue[0] if len(queue) == 1 else queue.pop(0)
        return response.build(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, **kwargs: Any) -> GitHubClient:
        """Create a GitHubClient wired to this mock."""
        return GitHubClient(transport=self.transport, **kwargs)

    def was_called(self, method: str, path: str) -> bool:
        return any(call.method == method and call.path == path for call in self._calls)

    def call_count(self, method: str, path: str) -> int:
        return sum(1 for call in self._calls if call.method == method and call.path == path)

    def get_calls(
        self, method: str | None = None, path: str | None = None
    ) -> list[MockCall]:
        """
        Get recorded calls, optionally filtered by method and path.

        Args:
            method: Optional HTTP method to filter by
            path: Optional request path to filter by

        Returns:
            List of MockCall objects in the order received
        """
        return [
            call
            for call in self._calls
            if (method is None or call.method == method)
            and (path is None or call.path == path)
        ]

    def reset(self) -> None:
        """Reset all recorded calls and configured responses."""
        self._calls.clear()
        self._routes.clear()


class ScriptedPrompter:
    """
    Prompter answering from scripts and recording everything shown.

    An exhausted script answers like a user who just pressed enter: no to
    yes/no questions, empty text and no valid choice.
    """

    def __init__(
        self,
        yes_no: Iterable[bool | str] = (),
        texts: Iterable[str] = (),
        choices: Iterable[int | None] = (),
    ) -> None:
        self._yes_no = iter(yes_no)
        self._texts = iter(texts)
        self._choices = iter(choices)
        self.messages: list[str] = []
        self.warnings: list[str] = []
        self.questions: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def ask_yes_no(self, question: str) -> bool:
        self.questions.append(question)
        answer = next(self._yes_no, "")
        if isinstance(answer, bool):
            return answer
        return is_affirmative(answer)

    def ask_text(self, question: str) -> str:
        self.questions.append(question)
        return next(self._texts, "")

    def choose(self, question: str, options: Sequence[str]) -> int | None:
        self.questions.append(question)
        index = next(self._choices, None)
        if index is None or not 0 <= index < len(options):
            return None
        return index


__all__ = [
    "MockGitHub",
    "MockCall",
    "MockResponse",
    "ScriptedPrompter",
]
