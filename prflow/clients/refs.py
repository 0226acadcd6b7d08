"""Git refs resource client: base branch lookup and branch creation."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from prflow.clients._paths import repo_path
from prflow.exceptions import (
    ConflictError,
    DuplicateResourceError,
    NotFoundError,
    ParseError,
    error_for_outcome,
)
from prflow.logging import get_logger
from prflow.outcome import OutcomeKind, classify
from prflow.types.refs import (
    BranchCreation,
    BranchRef,
    BranchStatus,
    ExistingBranchAction,
    ExistingBranchDecision,
)

if TYPE_CHECKING:
    from prflow.transport import HTTPTransport, RawResponse

logger = get_logger("refs")

ExistingBranchPolicy = Callable[[str], ExistingBranchDecision]

_REFERENCE_EXISTS = "reference already exists"


def _parse_branch_ref(data: Any, ref: str) -> BranchRef:
    """
    Parse a ref lookup payload.

    The refs endpoint answers with a list when the name only prefix-matches
    other refs; only an exact match counts.
    """
    if isinstance(data, list):
        data = next(
            (item for item in data if isinstance(item, dict) and item.get("ref") == ref),
            None,
        )
        if data is None:
            raise NotFoundError("BRANCH_NOT_FOUND", f"No ref named {ref}")

    try:
        sha = data["object"]["sha"]
    except (KeyError, TypeError) as e:
        raise ParseError("INVALID_REF", f"Malformed ref payload for {ref}: missing {e}") from e

    if not isinstance(sha, str) or not sha.strip():
        raise ParseError("INVALID_REF", f"Malformed ref payload for {ref}: empty sha")

    return BranchRef(ref=data.get("ref", ref), sha=sha)


class RefsClient:
    """Client for branch (ref) operations."""

    DEFAULT_MAX_RENAMES = 10

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the refs client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get_branch_ref(
        self, owner: str, repo: str, branch: str, token: str
    ) -> BranchRef:
        """
        Look up the ref of a branch.

        Raises:
            NotFoundError: If the branch does not exist
            ConflictError: On 409 (e.g. an empty repository)
            ParseError: If the payload carries no commit SHA
        """
        response = self.transport.request(
            "GET", repo_path(owner, repo, "git/refs/heads", branch), token
        )
        outcome = classify(response.status_code)

        if outcome.kind is OutcomeKind.NOT_FOUND:
            raise NotFoundError(
                "BRANCH_NOT_FOUND",
                f"Base branch {branch} not found. HTTP status: {response.status_code}",
                response.status_code,
                response.text,
            )
        if not outcome.is_success:
            raise error_for_outcome(
                f"fetching branch {branch}", outcome, response.status_code, response.text
            )

        return _parse_branch_ref(response.json(), f"refs/heads/{branch}")

    def resolve_base_sha(
        self, owner: str, repo: str, base_branch: str, token: str
    ) -> str:
        """
        Resolve the commit SHA a base branch points to.

        Args:
            owner: Repository owner login
            repo: Repository name
            base_branch: Branch to resolve (e.g. "main")
            token: GitHub bearer token

        Returns:
            Commit SHA
        """
        return self.get_branch_ref(owner, repo, base_branch, token).sha

    def create_branch(
        self,
        owner: str,
        repo: str,
        branch_name: str,
        base_branch: str,
        token: str,
        on_exists: ExistingBranchPolicy | None = None,
        max_renames: int = DEFAULT_MAX_RENAMES,
    ) -> BranchCreation:
        """
        Create a branch from the head of a base branch.

        When GitHub reports the reference already exists, `on_exists` is asked
        whether to reuse the existing branch, retry under a new name or abort.
        Without a policy the operation aborts.

        Args:
            owner: Repository owner login
            repo: Repository name
            branch_name: Name of the branch to create
            base_branch: Branch to start from
            token: GitHub bearer token
            on_exists: Decision callback for an already existing branch
            max_renames: Upper bound on rename attempts

        Returns:
            BranchCreation with the final branch name and whether it was
            created or reused

        Raises:
            DuplicateResourceError: If the branch exists and was not reused
            ConflictError: On 409 responses
            ValidationError: On other 422 responses
        """
        base_sha = self.resolve_base_sha(owner, repo, base_branch, token)

        name = branch_name
        renames = 0
        while True:
            response = self._create_ref(owner, repo, name, base_sha, token)
            outcome = classify(response.status_code)

            if outcome.is_success:
                logger.info("Branch %s created from %s", name, base_branch)
                return BranchCreation(branch_name=name, status=BranchStatus.CREATED)

            if outcome.kind is OutcomeKind.CONFLICT:
                raise ConflictError(
                    "BRANCH_CONFLICT",
                    f"Conflict while creating branch {name}. HTTP status: {response.status_code}",
                    response.status_code,
                    response.text,
                )

            if not self._is_reference_exists(outcome.kind, response):
                raise error_for_outcome(
                    f"creating branch {name}", outcome, response.status_code, response.text
                )

            decision = on_exists(name) if on_exists else ExistingBranchDecision.abort()

            if decision.action is ExistingBranchAction.REUSE:
                logger.info("Reusing existing branch %s", name)
                return BranchCreation(branch_name=name, status=BranchStatus.REUSED)

            new_name = (decision.new_name or "").strip()
            if decision.action is not ExistingBranchAction.RENAME or not new_name:
                raise DuplicateResourceError(
                    "BRANCH_EXISTS",
                    f"Branch {name} already exists",
                    resource=name,
                    status_code=response.status_code,
                    body=response.text,
                )

            if renames >= max_renames:
                raise DuplicateResourceError(
                    "BRANCH_EXISTS",
                    f"Branch {name} already exists; gave up after {renames} renames",
                    resource=name,
                    status_code=response.status_code,
                    body=response.text,
                )

            renames += 1
            logger.info("Branch %s already exists, retrying as %s", name, new_name)
            name = new_name

    def _create_ref(
        self, owner: str, repo: str, branch_name: str, sha: str, token: str
    ) -> "RawResponse":
        return self.transport.request(
            "POST",
            repo_path(owner, repo, "git/refs"),
            token,
            body={"ref": f"refs/heads/{branch_name}", "sha": sha},
        )

    @staticmethod
    def _is_reference_exists(kind: OutcomeKind, response: "RawResponse") -> bool:
        return (
            kind is OutcomeKind.UNPROCESSABLE_ENTITY
            and _REFERENCE_EXISTS in response.text.lower()
        )
