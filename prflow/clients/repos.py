"""Repositories resource client."""

from typing import TYPE_CHECKING, Any

from prflow.exceptions import ParseError, UnexpectedStatusError, error_for_outcome
from prflow.logging import get_logger
from prflow.outcome import OutcomeKind, classify
from prflow.types.repos import Owner, Repository

if TYPE_CHECKING:
    from prflow.transport import HTTPTransport

logger = get_logger("repos")


def _parse_repository(data: dict[str, Any]) -> Repository:
    """Parse repository data, ignoring fields prflow does not use."""
    try:
        return Repository(
            name=data["name"],
            owner=Owner(login=data["owner"]["login"]),
            html_url=data.get("html_url", ""),
            private=bool(data.get("private", False)),
        )
    except (KeyError, TypeError) as e:
        raise ParseError(
            "INVALID_REPOSITORY", f"Malformed repository entry: missing {e}"
        ) from e


class ReposClient:
    """Client for repository-related operations."""

    PER_PAGE = 100

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def list_for_authenticated_user(self, token: str) -> list[Repository]:
        """
        List repositories of the authenticated user.

        Follows pagination until every page has been read. An empty list is
        a valid result, not an error.

        Args:
            token: GitHub bearer token

        Returns:
            List of Repository objects

        Raises:
            CredentialError: If the token is invalid (401)
            PermissionDeniedError: If the token lacks permissions (403)
            UnexpectedStatusError: On any other non-success response
            ParseError: If the payload is not a list of repositories
            TransportError: On network failures
        """
        repositories: list[Repository] = []
        url: str | None = "/user/repos"
        params: dict[str, Any] | None = {"per_page": self.PER_PAGE}

        while url:
            response = self.transport.request("GET", url, token, params=params)
            outcome = classify(response.status_code)
            if outcome.kind in (OutcomeKind.UNAUTHORIZED, OutcomeKind.FORBIDDEN):
                raise error_for_outcome(
                    "fetching repositories", outcome, response.status_code, response.text
                )
            if not outcome.is_success:
                raise UnexpectedStatusError(
                    "UNEXPECTED_STATUS",
                    f"Error occurred while fetching repositories. HTTP status: {response.status_code}",
                    response.status_code,
                    response.text,
                )

            data = response.json()
            if not isinstance(data, list):
                raise ParseError(
                    "INVALID_REPOSITORY_LIST",
                    "Expected a list of repositories",
                    response.status_code,
                    response.text,
                )
            repositories.extend(_parse_repository(item) for item in data)

            # Next page URLs already carry the query string
            url = response.next_url
            params = None

        logger.debug("Fetched %d repositories", len(repositories))
        return repositories
