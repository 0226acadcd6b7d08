"""
Interactive workflow: list repositories, create a branch, publish a file and
open a pull request, offering a retry whenever a step fails.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from prflow.client import GitHubClient
from prflow.config import CredentialProvider
from prflow.exceptions import NotFoundError, PrflowError
from prflow.interaction import Prompter
from prflow.logging import get_logger, log_workflow_step
from prflow.types.contents import PublishResult, PublishStatus
from prflow.types.pulls import PullRequestDescriptor, PullRequestResult, PullRequestStatus
from prflow.types.refs import BranchCreation, ExistingBranchDecision
from prflow.types.repos import Repository

logger = get_logger("workflow")

T = TypeVar("T")


class RetryState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    AWAITING_RETRY_CHOICE = "awaiting_retry_choice"
    SUCCEEDED = "succeeded"
    ABORTED = "aborted"


class RetryLoop(Generic[T]):
    """
    Runs one operation until it succeeds or the user stops retrying.

    IDLE -> RUNNING -> SUCCEEDED, or RUNNING -> AWAITING_RETRY_CHOICE ->
    RUNNING | ABORTED. There is no backoff and no bound besides the user.
    """

    def __init__(self, name: str, prompter: Prompter) -> None:
        self.name = name
        self.prompter = prompter
        self.state = RetryState.IDLE
        self.attempts = 0
        self.last_error: PrflowError | None = None

    def run(self, operation: Callable[[], T]) -> T | None:
        """
        Invoke `operation`, asking whether to retry after each failure.

        Returns:
            The operation's result, or None once the user declines to retry
        """
        while True:
            self._transition(RetryState.RUNNING)
            self.attempts += 1
            try:
                result = operation()
            except PrflowError as e:
                self.last_error = e
                self.prompter.warn(f"Failed {self.name}: {e.message}")
            else:
                self._transition(RetryState.SUCCEEDED)
                return result

            self._transition(RetryState.AWAITING_RETRY_CHOICE)
            if not self.prompter.ask_yes_no("Do you want to retry?"):
                self._transition(RetryState.ABORTED)
                return None

    def _transition(self, state: RetryState) -> None:
        self.state = state
        log_workflow_step(self.name, state.value, self.attempts or None)


class WorkflowStep(str, Enum):
    LIST_REPOSITORIES = "list_repositories"
    SELECT_REPOSITORY = "select_repository"
    CREATE_BRANCH = "create_branch"
    PUBLISH_FILE = "publish_file"
    CREATE_PULL_REQUEST = "create_pull_request"


@dataclass
class WorkflowOptions:
    """What to create in the selected repository."""

    branch_name: str = "test"
    base_branch: str = "main"
    file_path: str = "Hello.txt"
    content: bytes | str = "Hello world"
    title: str | None = None
    body: str | None = None
    commit_message: str | None = None

    @property
    def pull_request_title(self) -> str:
        return self.title or f"Add {self.file_path}"

    @property
    def pull_request_body(self) -> str:
        if self.body is not None:
            return self.body
        if isinstance(self.content, str):
            return f"Added {self.file_path} with {self.content}"
        return f"Added {self.file_path}"


@dataclass
class WorkflowResult:
    """Where the workflow got to."""

    completed: bool
    stopped_at: WorkflowStep | None = None
    repository: Repository | None = None
    branch: BranchCreation | None = None
    publish: PublishResult | None = None
    pull_request: PullRequestResult | None = None
    attempts: dict[str, int] = field(default_factory=dict)

    @property
    def pull_request_url(self) -> str | None:
        return self.pull_request.html_url if self.pull_request else None

    @property
    def pull_request_status(self) -> PullRequestStatus | None:
        return self.pull_request.status if self.pull_request else None


class Workflow:
    """
    The interactive branch, file and pull request workflow.

    Each step runs in a RetryLoop. The token is taken from the credential
    provider on the first attempt and reloaded before every retry.
    """

    def __init__(
        self,
        client: GitHubClient,
        credentials: CredentialProvider,
        prompter: Prompter,
    ) -> None:
        self.client = client
        self.credentials = credentials
        self.prompter = prompter
        self.loops: dict[str, RetryLoop] = {}

    def run(self, options: WorkflowOptions | None = None) -> WorkflowResult:
        """
        Run every step in order; each step's success gates the next.

        Returns:
            WorkflowResult; `completed` is False when the user stopped
            retrying or made an invalid selection
        """
        options = options or WorkflowOptions()
        result = WorkflowResult(completed=False)

        repositories = self.fetch_repositories()
        if repositories is None:
            return self._stop(result, WorkflowStep.LIST_REPOSITORIES)

        repository = self.select_repository(repositories)
        if repository is None:
            return self._stop(result, WorkflowStep.SELECT_REPOSITORY)
        result.repository = repository

        branch = self.create_branch(repository, options.branch_name, options.base_branch)
        if branch is None:
            return self._stop(result, WorkflowStep.CREATE_BRANCH)
        result.branch = branch

        publish = self.publish_file(
            repository,
            branch.branch_name,
            options.file_path,
            options.content,
            options.commit_message,
        )
        if publish is None:
            return self._stop(result, WorkflowStep.PUBLISH_FILE)
        result.publish = publish

        descriptor = PullRequestDescriptor(
            title=options.pull_request_title,
            body=options.pull_request_body,
            head_branch=branch.branch_name,
            base_branch=options.base_branch,
        )
        pull_request = self.create_pull_request(repository, descriptor)
        if pull_request is None:
            return self._stop(result, WorkflowStep.CREATE_PULL_REQUEST)
        result.pull_request = pull_request

        result.completed = True
        result.attempts = self._attempts()
        return result

    def fetch_repositories(self) -> list[Repository] | None:
        """List repositories; an empty list is offered for retry like a failure."""

        def fetch(token: str) -> list[Repository]:
            repositories = self.client.repos.list_for_authenticated_user(token)
            if not repositories:
                raise NotFoundError(
                    "NO_REPOSITORIES",
                    "No repositories found for your user. "
                    "Make sure your account has repositories.",
                )
            return repositories

        repositories = self._retrying("fetching repositories", fetch)
        if repositories is not None:
            self.prompter.notify(f"Available repositories: {len(repositories)}")
        return repositories

    def select_repository(self, repositories: list[Repository]) -> Repository | None:
        options = [
            f"Name: {repo.name}, URL: {repo.html_url}, Private: {repo.private}"
            for repo in repositories
        ]
        index = self.prompter.choose("Enter the number of the repository", options)
        if index is None or not 0 <= index < len(repositories):
            self.prompter.warn("Invalid selected repository index.")
            return None

        repository = repositories[index]
        self.prompter.notify(f"Selected repository: {repository.name}")
        return repository

    def create_branch(
        self, repository: Repository, branch_name: str, base_branch: str
    ) -> BranchCreation | None:
        def create(token: str) -> BranchCreation:
            return self.client.refs.create_branch(
                repository.owner_login,
                repository.name,
                branch_name,
                base_branch,
                token,
                on_exists=self._decide_existing_branch,
            )

        branch = self._retrying("creating branch", create)
        if branch is not None:
            verb = "created" if branch.created else "reused"
            self.prompter.notify(f"Branch {branch.branch_name} {verb}.")
        return branch

    def publish_file(
        self,
        repository: Repository,
        branch_name: str,
        path: str,
        content: bytes | str,
        message: str | None = None,
    ) -> PublishResult | None:
        def publish(token: str) -> PublishResult:
            return self.client.contents.publish_file(
                repository.owner_login,
                repository.name,
                branch_name,
                path,
                content,
                token,
                overwrite=self._confirm_overwrite,
                message=message,
            )

        published = self._retrying("adding file", publish)
        if published is not None:
            verb = "added to" if published.status is PublishStatus.CREATED else "updated in"
            self.prompter.notify(f"File {path} {verb} branch {branch_name}.")
        return published

    def create_pull_request(
        self, repository: Repository, descriptor: PullRequestDescriptor
    ) -> PullRequestResult | None:
        def create(token: str) -> PullRequestResult:
            return self.client.pulls.create_pull_request(
                repository.owner_login, repository.name, descriptor, token
            )

        result = self._retrying("creating pull request", create)
        if result is None:
            return None

        if result.created:
            if result.html_url:
                self.prompter.notify(f"Pull request created successfully: {result.html_url}")
            else:
                self.prompter.notify("Pull request created successfully.")
        else:
            self.prompter.notify(
                f"A pull request with head {descriptor.head_branch} "
                f"and base {descriptor.base_branch} already exists"
            )
            if result.html_url:
                self.prompter.notify(f"Link: {result.html_url}")
        return result

    def _retrying(self, name: str, operation: Callable[[str], T]) -> T | None:
        loop: RetryLoop[T] = RetryLoop(name, self.prompter)
        self.loops[name] = loop

        def attempt() -> T:
            if loop.attempts > 1:
                token = self.credentials.reload()
            else:
                token = self.credentials.get_token()
            return operation(token)

        return loop.run(attempt)

    def _decide_existing_branch(self, branch_name: str) -> ExistingBranchDecision:
        self.prompter.warn(f"Branch {branch_name} already exists")
        if self.prompter.ask_yes_no("Do you want to use the existing branch?"):
            return ExistingBranchDecision.reuse()

        if self.prompter.ask_yes_no("Do you want to retry with a different branch name?"):
            new_name = self.prompter.ask_text("Enter a new branch name")
            if not new_name.strip():
                self.prompter.warn("Invalid branch name.")
                return ExistingBranchDecision.abort()
            return ExistingBranchDecision.rename(new_name.strip())

        return ExistingBranchDecision.abort()

    def _confirm_overwrite(self, path: str, branch: str) -> bool:
        self.prompter.notify(f"File {path} already exists in branch {branch}.")
        return self.prompter.ask_yes_no("Do you want to replace the file?")

    def _stop(self, result: WorkflowResult, step: WorkflowStep) -> WorkflowResult:
        logger.info("Workflow not completed: stopped at %s", step.value)
        result.stopped_at = step
        result.attempts = self._attempts()
        return result

    def _attempts(self) -> dict[str, int]:
        return {name: loop.attempts for name, loop in self.loops.items()}
