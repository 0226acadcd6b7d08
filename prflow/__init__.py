"""prflow - create a branch, add a file and open a pull request on GitHub."""

from prflow.client import GitHubClient
from prflow.config import (
    Config,
    CredentialProvider,
    FileCredentialProvider,
    StaticCredentialProvider,
    load_config,
)
from prflow.exceptions import (
    ConfigurationError,
    ConflictError,
    CredentialError,
    DuplicateResourceError,
    NotFoundError,
    ParseError,
    PermissionDeniedError,
    PrflowError,
    TransportError,
    UnexpectedStatusError,
    UserDeclinedError,
    ValidationError,
)
from prflow.interaction import ConsolePrompter, Prompter
from prflow.logging import configure_logging, get_logger
from prflow.outcome import Outcome, OutcomeKind, classify
from prflow.transport import HTTPTransport, RawResponse, RetryConfig
from prflow.workflow import (
    RetryLoop,
    RetryState,
    Workflow,
    WorkflowOptions,
    WorkflowResult,
    WorkflowStep,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Client
    "GitHubClient",
    # Workflow
    "Workflow",
    "WorkflowOptions",
    "WorkflowResult",
    "WorkflowStep",
    "RetryLoop",
    "RetryState",
    # Outcome
    "Outcome",
    "OutcomeKind",
    "classify",
    # Configuration
    "Config",
    "CredentialProvider",
    "FileCredentialProvider",
    "StaticCredentialProvider",
    "load_config",
    # Interaction
    "Prompter",
    "ConsolePrompter",
    # Exceptions
    "PrflowError",
    "ConfigurationError",
    "CredentialError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "DuplicateResourceError",
    "UnexpectedStatusError",
    "TransportError",
    "ParseError",
    "UserDeclinedError",
    # Transport
    "HTTPTransport",
    "RawResponse",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
