"""
Classification of GitHub API responses.

Every HTTP interaction collapses to exactly one Outcome and every downstream
decision switches on it. No other module interprets status codes.
"""

from dataclasses import dataclass
from enum import Enum


class OutcomeKind(str, Enum):
    """The closed set of response outcomes."""

    SUCCESS = "success"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    UNEXPECTED_STATUS = "unexpected_status"


@dataclass(frozen=True)
class Outcome:
    """
    A classified response.

    `code` is only carried by UNEXPECTED_STATUS outcomes.
    """

    kind: OutcomeKind
    code: int | None = None

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def unexpected(cls, code: int) -> "Outcome":
        return cls(OutcomeKind.UNEXPECTED_STATUS, code)

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.kind.value}({self.code})"
        return self.kind.value


SUCCESS = Outcome(OutcomeKind.SUCCESS)
UNAUTHORIZED = Outcome(OutcomeKind.UNAUTHORIZED)
FORBIDDEN = Outcome(OutcomeKind.FORBIDDEN)
CONFLICT = Outcome(OutcomeKind.CONFLICT)
NOT_FOUND = Outcome(OutcomeKind.NOT_FOUND)
UNPROCESSABLE_ENTITY = Outcome(OutcomeKind.UNPROCESSABLE_ENTITY)

_STATUS_TABLE: dict[int, Outcome] = {
    401: UNAUTHORIZED,
    403: FORBIDDEN,
    404: NOT_FOUND,
    409: CONFLICT,
    422: UNPROCESSABLE_ENTITY,
}


def classify(status_code: int) -> Outcome:
    """
    Map an HTTP status code to its Outcome.

    Args:
        status_code: HTTP status code of the response

    Returns:
        SUCCESS for any 2xx, the fixed outcome for 401/403/404/409/422,
        and an UNEXPECTED_STATUS outcome carrying the code otherwise
    """
    if status_code in _STATUS_TABLE:
        return _STATUS_TABLE[status_code]
    if 200 <= status_code < 300:
        return SUCCESS
    return Outcome.unexpected(status_code)


__all__ = [
    "Outcome",
    "OutcomeKind",
    "classify",
    "SUCCESS",
    "UNAUTHORIZED",
    "FORBIDDEN",
    "CONFLICT",
    "NOT_FOUND",
    "UNPROCESSABLE_ENTITY",
]
