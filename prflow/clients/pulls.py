"""Pull requests resource client."""

from typing import TYPE_CHECKING, Any

from prflow.clients._paths import repo_path
from prflow.exceptions import ParseError, PrflowError, error_for_outcome
from prflow.logging import get_logger
from prflow.outcome import OutcomeKind, classify
from prflow.types.pulls import (
    PullRequest,
    PullRequestDescriptor,
    PullRequestResult,
    PullRequestStatus,
)

if TYPE_CHECKING:
    from prflow.transport import HTTPTransport

logger = get_logger("pulls")

_ALREADY_EXISTS = "already exists"


def _parse_pull_request(data: dict[str, Any]) -> PullRequest:
    """Parse pull request data from an API response."""
    try:
        return PullRequest(
            number=data["number"],
            html_url=data["html_url"],
            head_ref=data["head"]["ref"],
            base_ref=data["base"]["ref"],
            state=data.get("state", "open"),
            title=data.get("title") or "",
        )
    except (KeyError, TypeError) as e:
        raise ParseError("INVALID_PULL_REQUEST", f"Malformed pull request: missing {e}") from e


class PullsClient:
    """Client for pull request operations."""

    PER_PAGE = 100

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def create_pull_request(
        self,
        owner: str,
        repo: str,
        descriptor: PullRequestDescriptor,
        token: str,
    ) -> PullRequestResult:
        """
        Open a pull request.

        If GitHub reports that a pull request for the same head and base
        already exists, the open pull requests are scanned for it and an
        ALREADY_EXISTS result is returned instead of raising.

        Args:
            owner: Repository owner login
            repo: Repository name
            descriptor: Title, body, head and base of the pull request
            token: GitHub bearer token

        Returns:
            PullRequestResult; `html_url` is set when the pull request was
            created or the existing one was found

        Raises:
            PermissionDeniedError: If the token may not open pull requests
            ValidationError: On 422 responses other than a duplicate
            PrflowError: On any other failed request
        """
        response = self.transport.request(
            "POST",
            repo_path(owner, repo, "pulls"),
            token,
            body={
                "title": descriptor.title,
                "body": descriptor.body,
                "head": descriptor.head_branch,
                "base": descriptor.base_branch,
            },
        )
        outcome = classify(response.status_code)

        if outcome.is_success:
            # The pull request exists once GitHub answers 2xx, readable body or not
            try:
                pull_request = _parse_pull_request(response.json())
            except ParseError as e:
                logger.warning("Pull request created but its details are unreadable: %s", e)
                return PullRequestResult(PullRequestStatus.CREATED, None)
            logger.info("Pull request #%d created: %s", pull_request.number, pull_request.html_url)
            return PullRequestResult(PullRequestStatus.CREATED, pull_request)

        if (
            outcome.kind is OutcomeKind.UNPROCESSABLE_ENTITY
            and _ALREADY_EXISTS in response.text.lower()
        ):
            logger.info(
                "A pull request with head %s and base %s already exists",
                descriptor.head_branch,
                descriptor.base_branch,
            )
            existing = self._find_existing(owner, repo, descriptor, token)
            return PullRequestResult(PullRequestStatus.ALREADY_EXISTS, existing)

        raise error_for_outcome(
            "creating pull request", outcome, response.status_code, response.text
        )

    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        token: str,
        state: str = "open",
    ) -> list[PullRequest]:
        """
        List pull requests of a repository, following pagination.

        Args:
            owner: Repository owner login
            repo: Repository name
            token: GitHub bearer token
            state: "open", "closed" or "all" (default: "open")

        Returns:
            List of PullRequest objects
        """
        pulls: list[PullRequest] = []
        url: str | None = repo_path(owner, repo, "pulls")
        params: dict[str, Any] | None = {"state": state, "per_page": self.PER_PAGE}

        while url:
            response = self.transport.request("GET", url, token, params=params)
            outcome = classify(response.status_code)
            if not outcome.is_success:
                raise error_for_outcome(
                    "listing pull requests", outcome, response.status_code, response.text
                )

            data = response.json()
            if not isinstance(data, list):
                raise ParseError(
                    "INVALID_PULL_REQUEST_LIST",
                    "Expected a list of pull requests",
                    response.status_code,
                    response.text,
                )
            pulls.extend(_parse_pull_request(item) for item in data)

            url = response.next_url
            params = None

        return pulls

    def _find_existing(
        self,
        owner: str,
        repo: str,
        descriptor: PullRequestDescriptor,
        token: str,
    ) -> PullRequest | None:
        """Best-effort lookup of the open pull request for head/base."""
        try:
            pulls = self.list_pull_requests(owner, repo, token)
        except PrflowError as e:
            logger.warning("Could not look up the existing pull request: %s", e)
            return None

        for pr in pulls:
            if pr.head_ref == descriptor.head_branch and pr.base_ref == descriptor.base_branch:
                return pr
        return None
