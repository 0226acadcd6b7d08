"""Pull request-related data models."""

from dataclasses import dataclass
from enum import Enum


@dataclass
class PullRequestDescriptor:
    """Inputs for creating a pull request."""

    title: str
    body: str
    head_branch: str
    base_branch: str


@dataclass
class PullRequest:
    """Pull request information."""

    number: int
    html_url: str
    head_ref: str
    base_ref: str
    state: str  # "open" or "closed"
    title: str = ""


class PullRequestStatus(str, Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


@dataclass
class PullRequestResult:
    """
    Result of creating a pull request.

    ALREADY_EXISTS means nothing was created; `pull_request` is the open pull
    request for the same head/base when one could be found.
    """

    status: PullRequestStatus
    pull_request: PullRequest | None = None

    @property
    def created(self) -> bool:
        return self.status is PullRequestStatus.CREATED

    @property
    def html_url(self) -> str | None:
        return self.pull_request.html_url if self.pull_request else None
