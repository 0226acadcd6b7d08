"""Branch and ref data models."""

from dataclasses import dataclass
from enum import Enum


@dataclass
class BranchRef:
    """A ref and the commit SHA it points to."""

    ref: str
    sha: str


class BranchStatus(str, Enum):
    CREATED = "created"
    REUSED = "reused"


@dataclass
class BranchCreation:
    """Result of creating a branch."""

    branch_name: str
    status: BranchStatus

    @property
    def created(self) -> bool:
        return self.status is BranchStatus.CREATED


class ExistingBranchAction(str, Enum):
    REUSE = "reuse"
    RENAME = "rename"
    ABORT = "abort"


@dataclass
class ExistingBranchDecision:
    """What to do when the requested branch already exists."""

    action: ExistingBranchAction
    new_name: str | None = None

    @classmethod
    def reuse(cls) -> "ExistingBranchDecision":
        return cls(ExistingBranchAction.REUSE)

    @classmethod
    def rename(cls, new_name: str) -> "ExistingBranchDecision":
        return cls(ExistingBranchAction.RENAME, new_name)

    @classmethod
    def abort(cls) -> "ExistingBranchDecision":
        return cls(ExistingBranchAction.ABORT)
