"""prflow exception classes."""

from prflow.outcome import Outcome, OutcomeKind


class PrflowError(Exception):
    """Base exception for all prflow errors."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(f"[{code}] {message}")


class ConfigurationError(PrflowError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class CredentialError(PrflowError):
    """Raised when the token is missing or rejected (401)."""

    pass


class PermissionDeniedError(PrflowError):
    """Raised when the token lacks the required permissions (403)."""

    pass


class NotFoundError(PrflowError):
    """Raised when a resource is not found."""

    pass


class ConflictError(PrflowError):
    """Raised on conflicts (409)."""

    pass


class ValidationError(PrflowError):
    """Raised on validation errors that are not a duplicate condition."""

    pass


class DuplicateResourceError(PrflowError):
    """Raised when the resource already exists and was not adopted."""

    def __init__(
        self,
        code: str,
        message: str,
        resource: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(code, message, status_code, body)
        self.resource = resource


class UnexpectedStatusError(PrflowError):
    """Raised on a status code with no dedicated handling."""

    pass


class TransportError(PrflowError):
    """Raised on network failures, timeouts and cancelled requests."""

    pass


class ParseError(PrflowError):
    """Raised when a successful response carries a malformed payload."""

    pass


class UserDeclinedError(PrflowError):
    """Raised when the user declines an action. Not a system fault."""

    def __init__(self, message: str) -> None:
        super().__init__("USER_DECLINED", message)


def error_for_outcome(
    operation: str,
    outcome: Outcome,
    status_code: int,
    body: str | None = None,
) -> PrflowError:
    """
    Build the exception for a non-success outcome.

    Args:
        operation: What was being done (e.g. "creating branch test")
        outcome: Classified response outcome
        status_code: Raw HTTP status code
        body: Raw response body, kept for diagnostics

    Returns:
        Appropriate PrflowError subclass
    """
    kind = outcome.kind

    if kind is OutcomeKind.UNAUTHORIZED:
        return CredentialError(
            "UNAUTHORIZED",
            f"Invalid GitHub token while {operation}. Please check your token.",
            status_code,
            body,
        )
    elif kind is OutcomeKind.FORBIDDEN:
        return PermissionDeniedError(
            "FORBIDDEN",
            f"Insufficient permissions while {operation}. HTTP status: {status_code}",
            status_code,
            body,
        )
    elif kind is OutcomeKind.NOT_FOUND:
        return NotFoundError(
            "NOT_FOUND",
            f"Not found while {operation}. HTTP status: {status_code}",
            status_code,
            body,
        )
    elif kind is OutcomeKind.CONFLICT:
        return ConflictError(
            "CONFLICT",
            f"Conflict occurred while {operation}. HTTP status: {status_code}",
            status_code,
            body,
        )
    elif kind is OutcomeKind.UNPROCESSABLE_ENTITY:
        message = f"Validation error while {operation}. HTTP status: {status_code}"
        if body:
            message = f"{message}. Error: {body}"
        return ValidationError("UNPROCESSABLE_ENTITY", message, status_code, body)

    return UnexpectedStatusError(
        "UNEXPECTED_STATUS",
        f"Unexpected response while {operation}. HTTP status: {status_code}",
        status_code,
        body,
    )
